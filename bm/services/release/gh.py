from __future__ import annotations

import shutil
from pathlib import Path

from bm.core.result import Err, Ok, Result
from bm.platform.process import run as run_process
from bm.services.release.errors import ReleaseError
from bm.services.release.timeouts import GH_PUBLISH_TIMEOUT_SECONDS, GH_TIMEOUT_SECONDS


def ensure_gh_available() -> Result[None, ReleaseError]:
    if shutil.which("gh") is None:
        return Err(
            ReleaseError(
                kind="gh_missing",
                message="GitHub CLI (gh) is required but not installed.",
                hint="Install it with: brew install gh, then authenticate with: gh auth login",
            )
        )
    return Ok(None)


def ensure_gh_auth(*, repo_root: Path) -> Result[None, ReleaseError]:
    result = run_process(["gh", "auth", "status"], cwd=repo_root, timeout=GH_TIMEOUT_SECONDS)
    if isinstance(result, Err):
        return Err(
            ReleaseError(
                kind="gh_auth_required",
                message="GitHub CLI is not authenticated.",
                hint="Authenticate with: gh auth login",
            )
        )
    return Ok(None)


def release_create_command(
    *,
    repo: str,
    tag: str,
    archive: Path,
    title: str,
    notes: str,
    prerelease: bool,
) -> list[str]:
    cmd = ["gh", "release", "create", tag, str(archive), "--repo", repo]
    cmd += ["--title", title, "--notes", notes]
    if prerelease:
        cmd.append("--prerelease")
    return cmd


def create_release(
    *,
    repo_root: Path,
    repo: str,
    tag: str,
    archive: Path,
    title: str,
    notes: str,
    prerelease: bool,
) -> Result[None, ReleaseError]:
    """Create the GitHub release for `tag` on `repo` (owner/name) with `archive` attached.

    Not retried: a partially created release must be inspected by hand.
    """
    cmd = release_create_command(
        repo=repo,
        tag=tag,
        archive=archive,
        title=title,
        notes=notes,
        prerelease=prerelease,
    )
    result = run_process(cmd, cwd=repo_root, timeout=GH_PUBLISH_TIMEOUT_SECONDS)
    if isinstance(result, Err):
        return Err(
            ReleaseError(
                kind="publish_failed",
                message=f"gh release create {tag} failed (exit {result.error.returncode})",
                hint=result.error.stderr.strip() or None,
            )
        )
    return Ok(None)
