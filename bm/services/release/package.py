"""Release archive assembly.

Layout produced inside the build directory:

    build/
      Bubblemon-macOS-Release/        staging, recreated on every run
        Bubblemon Menu Bar.app/
        Bubblemon.app/                (if built)
        README.md, COPYING            (if present)
        INSTALL.txt
      Bubblemon-macOS-ARM64.tar.gz    single top-level entry: the staging dir
"""

from __future__ import annotations

import contextlib
import shutil
import tarfile
from dataclasses import dataclass
from pathlib import Path

from bm.core.config import Config
from bm.core.result import Err, Ok, Result
from bm.git.remote import RepoSlug, parse_github_remote
from bm.git.repository import Repository
from bm.output.console import ConsoleProtocol
from bm.platform.files import atomic_write_text, human_size, replace_tree
from bm.services.release.errors import ReleaseError
from bm.services.release.notes import render_install_text

INSTALL_FILENAME = "INSTALL.txt"


@dataclass(frozen=True, slots=True)
class PackagedArchive:
    path: Path
    size: int
    bundles: tuple[str, ...]
    docs: tuple[str, ...]

    @property
    def human_size(self) -> str:
        return human_size(self.size)


def resolve_repo_slug(
    repo: Repository, *, remote: str = "origin"
) -> Result[RepoSlug, ReleaseError]:
    url = repo.remote_url(remote)
    if isinstance(url, Err):
        return Err(
            ReleaseError(
                kind="git_failed",
                message=f"cannot read git remote '{remote}'",
                hint=url.error.message,
            )
        )

    slug = parse_github_remote(url.value)
    if slug is None:
        return Err(
            ReleaseError(
                kind="remote_unrecognized",
                message=f"remote '{remote}' is not a GitHub URL: {url.value}",
                hint=f"Run: git remote set-url {remote} git@github.com:<owner>/<repo>.git",
            )
        )
    return Ok(slug)


def create_archive(
    *,
    repo_root: Path,
    build_dir: Path,
    slug: RepoSlug,
    config: Config,
    console: ConsoleProtocol,
) -> Result[PackagedArchive, ReleaseError]:
    """Stage the build outputs and compress them into the release archive.

    Returns:
        Ok(PackagedArchive) on success
        Err(ReleaseError) if the primary bundle is missing or I/O fails
    """
    console.info("Creating release archive...")
    release = config.release
    variants = config.variants
    staging = build_dir / release.staging_name
    archive = build_dir / release.archive_name

    primary_src = build_dir / variants.primary.bundle_name
    if not primary_src.is_dir():
        return Err(
            ReleaseError(
                kind="artifact_missing",
                message=f"{variants.primary.bundle_name} not found!",
                hint="Run: bm build",
            )
        )

    try:
        if staging.exists():
            shutil.rmtree(staging)
        staging.mkdir(parents=True)

        bundles: list[str] = []
        console.info(f"Adding {variants.primary.bundle_name}")
        replace_tree(primary_src, staging / variants.primary.bundle_name)
        bundles.append(variants.primary.bundle_name)

        secondary = variants.secondary
        if secondary is not None:
            secondary_src = build_dir / secondary.bundle_name
            if secondary_src.is_dir():
                console.info(f"Adding {secondary.bundle_name} ({secondary.label})")
                replace_tree(secondary_src, staging / secondary.bundle_name)
                bundles.append(secondary.bundle_name)
            else:
                console.warning(f"{secondary.bundle_name} ({secondary.label}) not found, skipping")

        docs: list[str] = []
        for name in release.doc_files:
            src = repo_root / name
            if src.is_file():
                shutil.copy2(src, staging / name)
                docs.append(name)
            else:
                console.warning(f"{name} not found")

        atomic_write_text(staging / INSTALL_FILENAME, render_install_text(slug, variants))

        archive.unlink(missing_ok=True)
        with tarfile.open(archive, "w:gz") as tf:
            tf.add(staging, arcname=release.staging_name)
    except OSError as e:
        # Never leave a truncated archive behind under the final name.
        with contextlib.suppress(OSError):
            archive.unlink(missing_ok=True)
        return Err(
            ReleaseError(
                kind="archive_failed",
                message=f"failed to create archive: {e}",
                hint=str(archive),
            )
        )

    packaged = PackagedArchive(
        path=archive,
        size=archive.stat().st_size,
        bundles=tuple(bundles),
        docs=tuple(docs),
    )
    console.success(f"Archive created: {archive.name} ({packaged.human_size})")
    return Ok(packaged)
