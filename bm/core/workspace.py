"""Repository root detection and paths.

Both workflows run from the root of the Bubblemon checkout: the Xcode
project, the documentation files and the `build/` output directory are all
addressed relative to it.

Detection order:
1. BM_ROOT environment variable (set by `bm --root`)
2. Current working directory
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .config import CONFIG_FILENAME
from .result import Err, Ok, Result

__all__ = [
    "ROOT_ENV_VAR",
    "Workspace",
    "WorkspaceError",
    "detect_workspace",
    "is_repo_root",
]

ROOT_ENV_VAR = "BM_ROOT"


@dataclass(frozen=True, slots=True)
class WorkspaceError:
    """Error when the repository root cannot be used."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class Workspace:
    """A Bubblemon checkout.

    Attributes:
        root: Repository root (contains .git when releasing)
        build_dir_name: Build output directory, relative to root
    """

    root: Path
    build_dir_name: str = "build"

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILENAME

    @property
    def build_dir(self) -> Path:
        """Directory where xcodebuild deposits the app bundles."""
        return self.root / self.build_dir_name

    @property
    def include_dir(self) -> Path:
        """Header directory the Xcode project expects to exist."""
        return self.build_dir / "include"

    def with_build_dir(self, name: str) -> Workspace:
        return Workspace(root=self.root, build_dir_name=name)

    def __str__(self) -> str:
        return str(self.root)


def is_repo_root(path: Path) -> bool:
    """True if path is the top of a git checkout (.git dir or worktree file)."""
    return (path / ".git").exists()


def detect_workspace(
    start: Path | None = None, *, require_git: bool = True
) -> Result[Workspace, WorkspaceError]:
    """Detect the repository root.

    Unlike upward searches, this only accepts the given directory itself:
    relative paths such as `build/` must resolve against the checkout root.
    Building needs no git metadata, so `require_git=False` accepts any
    directory.
    """
    env_root = os.environ.get(ROOT_ENV_VAR)
    if env_root:
        root = Path(env_root).expanduser().resolve()
    else:
        root = (start or Path.cwd()).resolve()

    if not root.is_dir():
        return Err(WorkspaceError(f"not a directory: {root}"))

    if require_git and not is_repo_root(root):
        return Err(
            WorkspaceError(
                f"not a git repository root: {root}",
                hint="Run bm from the root of the Bubblemon checkout",
            )
        )

    return Ok(Workspace(root=root))
