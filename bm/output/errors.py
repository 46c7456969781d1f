"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bm.core.errors import ErrorCode
from bm.output.console import Style
from bm.services.build_errors import BuildError, CompileFailed, OutputMissing, ToolMissing
from bm.services.release.errors import ReleaseError

if TYPE_CHECKING:
    from bm.output.console import ConsoleProtocol

__all__ = [
    "build_error_exit_code",
    "print_build_error",
    "print_release_error",
    "release_error_exit_code",
]


def print_build_error(error: BuildError, console: ConsoleProtocol) -> None:
    """Print build error to console with appropriate formatting."""
    match error:
        case ToolMissing(tool_id=tool_id, hint=hint):
            console.error(f"{tool_id}: missing")
            console.print(f"hint: {hint}", Style.DIM)
        case CompileFailed(target=target, returncode=rc):
            console.error(f"{target} build failed (exit {rc})")
        case OutputMissing(target=target, path=path):
            console.error(f"{target} build failed!")
            console.print(f"output not found: {path}", Style.DIM)


def build_error_exit_code(error: BuildError) -> int:
    match error:
        case ToolMissing():
            return int(ErrorCode.ENV_ERROR)
        case CompileFailed():
            return int(ErrorCode.BUILD_ERROR)
        case OutputMissing():
            return int(ErrorCode.IO_ERROR)


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    match error.kind:
        case "tag_missing":
            return int(ErrorCode.USER_ERROR)
        case "artifact_missing" | "archive_failed":
            return int(ErrorCode.IO_ERROR)
        case "publish_failed":
            return int(ErrorCode.NETWORK_ERROR)
        case _:
            return int(ErrorCode.ENV_ERROR)
