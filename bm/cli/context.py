from __future__ import annotations

from dataclasses import dataclass

import typer

from bm.core.config import Config, load_config_or_default
from bm.core.errors import ErrorCode
from bm.core.result import Err
from bm.core.workspace import Workspace, detect_workspace
from bm.output.console import ConsoleProtocol, RichConsole, Style


@dataclass(frozen=True, slots=True)
class CLIContext:
    workspace: Workspace
    config: Config
    console: ConsoleProtocol


def build_context(*, require_git: bool = True) -> CLIContext:
    console = RichConsole()

    workspace_result = detect_workspace(require_git=require_git)
    if isinstance(workspace_result, Err):
        console.error(workspace_result.error.message)
        if workspace_result.error.hint:
            console.print(f"hint: {workspace_result.error.hint}", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    workspace = workspace_result.value
    config_result = load_config_or_default(workspace.config_path)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    config = config_result.value
    return CLIContext(
        workspace=workspace.with_build_dir(config.build_dir),
        config=config,
        console=console,
    )
