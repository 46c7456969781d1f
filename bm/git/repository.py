"""Git repository abstraction.

Read-only queries the release workflow needs from the checkout: the origin
remote URL, the exact tag at HEAD and the HEAD commit hash. All operations
return Result types.

Usage:
    repo = Repository(Path("."))

    match repo.exact_tag():
        case Ok(tag):
            print(f"Releasing {tag}")
        case Err(e):
            print(f"No tag: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from bm.core.result import Err, Ok, Result
from bm.platform.process import ProcessError
from bm.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """Git repository abstraction.

    Attributes:
        path: Path to the repository root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def remote_url(self, name: str = "origin") -> Result[str, GitError]:
        """Get the fetch URL of a remote."""
        return self._query(["remote", "get-url", name], f"remote '{name}' not configured")

    def exact_tag(self) -> Result[str, GitError]:
        """Get the tag pointing exactly at HEAD.

        Ancestor tags do not count: `git describe --exact-match` fails when
        HEAD itself is untagged.
        """
        return self._query(
            ["describe", "--tags", "--exact-match", "HEAD"],
            "no tag on current commit",
        )

    def head_sha(self) -> Result[str, GitError]:
        """Get the full commit hash of HEAD."""
        return self._query(["rev-parse", "HEAD"], "cannot resolve HEAD")

    def _query(self, args: list[str], fallback: str) -> Result[str, GitError]:
        result = self._run(args)
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command=args[0],
                        message=e.stderr.strip() or fallback,
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                value = stdout.strip()
                if not value:
                    return Err(GitError(command=args[0], message=fallback))
                return Ok(value)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=_GIT_TIMEOUT_SECONDS,
        )
