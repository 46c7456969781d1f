"""Base class for services."""

from __future__ import annotations

from bm.core.config import Config
from bm.core.workspace import Workspace
from bm.output.console import ConsoleProtocol


class BaseService:
    """Holds the dependencies every service needs.

    The workspace build directory always follows `config.build_dir`.
    """

    def __init__(
        self,
        *,
        workspace: Workspace,
        config: Config,
        console: ConsoleProtocol,
    ) -> None:
        self._workspace = workspace.with_build_dir(config.build_dir)
        self._config = config
        self._console = console

    @property
    def workspace(self) -> Workspace:
        return self._workspace
