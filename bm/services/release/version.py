"""Version resolution from the exact git tag at HEAD.

A release is only ever cut from a tagged commit. There is no fallback to a
synthesized date/commit version: an untagged HEAD is an operator error.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from bm.core.config import DEFAULT_PRERELEASE_KEYWORDS
from bm.core.result import Err, Ok, Result
from bm.git.repository import Repository
from bm.services.release.errors import ReleaseError


@dataclass(frozen=True, slots=True)
class ResolvedVersion:
    tag: str
    prerelease: bool

    @property
    def channel(self) -> str:
        return "prerelease" if self.prerelease else "stable"


def is_prerelease(tag: str, keywords: Iterable[str] = DEFAULT_PRERELEASE_KEYWORDS) -> bool:
    """True if any keyword occurs anywhere in the tag (`v2.0.0-beta1`)."""
    return any(k in tag for k in keywords)


def resolve_version(
    repo: Repository,
    *,
    keywords: Iterable[str] = DEFAULT_PRERELEASE_KEYWORDS,
) -> Result[ResolvedVersion, ReleaseError]:
    tag = repo.exact_tag()
    if isinstance(tag, Err):
        return Err(
            ReleaseError(
                kind="tag_missing",
                message="No git tag found on current commit!",
                hint="Create one with: git tag v1.0.0 && git push origin v1.0.0",
            )
        )

    return Ok(ResolvedVersion(tag=tag.value, prerelease=is_prerelease(tag.value, keywords)))
