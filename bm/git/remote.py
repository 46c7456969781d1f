"""GitHub remote URL parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = ["RepoSlug", "parse_github_remote"]

# Matches https://github.com/owner/name(.git), git@github.com:owner/name(.git)
# and ssh://git@github.com/owner/name(.git).
_GITHUB_RE = re.compile(r"github\.com[:/](?P<owner>[^/]+)/(?P<name>[^/]+?)(?:\.git)?/?$")


@dataclass(frozen=True, slots=True)
class RepoSlug:
    owner: str
    name: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def url(self) -> str:
        return f"https://github.com/{self.slug}"

    def release_url(self, tag: str) -> str:
        return f"{self.url}/releases/tag/{tag}"

    def __str__(self) -> str:
        return self.slug


def parse_github_remote(url: str) -> RepoSlug | None:
    """Extract owner/name from a GitHub remote URL, None if not GitHub."""
    m = _GITHUB_RE.search(url.strip())
    if m is None:
        return None
    return RepoSlug(owner=m.group("owner"), name=m.group("name"))
