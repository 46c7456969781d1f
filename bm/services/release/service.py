"""Release workflow: version -> archive -> GitHub release.

Each step returns a Result; the first Err ends the run before any later
step executes, so an untagged commit never produces an archive and a
missing app bundle never reaches `gh release create`.
"""

from __future__ import annotations

from dataclasses import dataclass

from bm.core.result import Err, Ok, Result
from bm.git.remote import RepoSlug
from bm.git.repository import Repository
from bm.output.console import Style
from bm.services.base import BaseService
from bm.services.release.errors import ReleaseError
from bm.services.release.gh import create_release, ensure_gh_auth, ensure_gh_available
from bm.services.release.notes import format_timestamp, render_release_notes
from bm.services.release.package import PackagedArchive, create_archive, resolve_repo_slug
from bm.services.release.version import ResolvedVersion, resolve_version


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    slug: RepoSlug
    version: ResolvedVersion
    archive: PackagedArchive
    published: bool

    @property
    def release_url(self) -> str:
        return self.slug.release_url(self.version.tag)


class ReleaseService(BaseService):
    """Packages the build outputs and publishes them as a GitHub release."""

    @property
    def repo(self) -> Repository:
        return Repository(self._workspace.root)

    def check_requirements(self, *, dry_run: bool = False) -> Result[None, ReleaseError]:
        self._console.info("Checking requirements...")

        if dry_run:
            self._console.info("Dry run: skipping GitHub CLI checks")
        else:
            available = ensure_gh_available()
            if isinstance(available, Err):
                return available
            auth = ensure_gh_auth(repo_root=self._workspace.root)
            if isinstance(auth, Err):
                return auth

        build_dir = self._workspace.build_dir
        if not build_dir.is_dir():
            return Err(
                ReleaseError(
                    kind="build_dir_missing",
                    message=f"Build directory not found: {build_dir}",
                    hint="Run: bm build",
                )
            )
        return Ok(None)

    def determine_version(self) -> Result[ResolvedVersion, ReleaseError]:
        self._console.info("Determining version...")
        result = resolve_version(self.repo, keywords=self._config.release.prerelease_keywords)
        if isinstance(result, Ok):
            version = result.value
            self._console.info(f"Using git tag: {version.tag}")
            if version.prerelease:
                self._console.info(f"Detected prerelease version: {version.tag}")
            else:
                self._console.info(f"Detected stable release: {version.tag}")
        return result

    def publish(
        self,
        *,
        slug: RepoSlug,
        version: ResolvedVersion,
        archive: PackagedArchive,
    ) -> Result[None, ReleaseError]:
        self._console.info(f"Creating GitHub release: {version.tag}")

        commit = self.repo.head_sha()
        if isinstance(commit, Err):
            return Err(
                ReleaseError(
                    kind="git_failed",
                    message="cannot resolve HEAD commit",
                    hint=commit.error.message,
                )
            )

        notes = render_release_notes(
            version=version.tag,
            commit=commit.value,
            timestamp=format_timestamp(),
            archive_name=archive.path.name,
        )
        result = create_release(
            repo_root=self._workspace.root,
            repo=slug.slug,
            tag=version.tag,
            archive=archive.path,
            title=f"{self._config.release.title_prefix} {version.tag}",
            notes=notes,
            prerelease=version.prerelease,
        )
        if isinstance(result, Err):
            return result

        self._console.success("Release created successfully!")
        self._console.info(f"Release URL: {slug.release_url(version.tag)}")
        return Ok(None)

    def run(self, *, dry_run: bool = False) -> Result[ReleaseOutcome, ReleaseError]:
        """Run the whole release workflow.

        With dry_run the archive is still built, but nothing is published.
        """
        self._console.info("Starting Bubblemon macOS release creation...")

        slug = resolve_repo_slug(self.repo, remote=self._config.release.remote)
        if isinstance(slug, Err):
            return slug
        self._console.info(f"Repository: {slug.value}")

        requirements = self.check_requirements(dry_run=dry_run)
        if isinstance(requirements, Err):
            return requirements

        version = self.determine_version()
        if isinstance(version, Err):
            return version

        archive = create_archive(
            repo_root=self._workspace.root,
            build_dir=self._workspace.build_dir,
            slug=slug.value,
            config=self._config,
            console=self._console,
        )
        if isinstance(archive, Err):
            return archive

        if dry_run:
            self._console.print(
                f"dry run: would publish {archive.value.path.name} as {version.value.tag} "
                f"({version.value.channel})",
                Style.DIM,
            )
            return Ok(
                ReleaseOutcome(
                    slug=slug.value,
                    version=version.value,
                    archive=archive.value,
                    published=False,
                )
            )

        published = self.publish(slug=slug.value, version=version.value, archive=archive.value)
        if isinstance(published, Err):
            return published

        self._console.success("Release process completed!")
        self._console.info("Users can now download the release from GitHub")
        return Ok(
            ReleaseOutcome(
                slug=slug.value,
                version=version.value,
                archive=archive.value,
                published=True,
            )
        )
