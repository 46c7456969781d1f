"""Release packaging and publishing."""

from .errors import ReleaseError
from .service import ReleaseOutcome, ReleaseService
from .version import ResolvedVersion, is_prerelease, resolve_version

__all__ = [
    "ReleaseError",
    "ReleaseOutcome",
    "ReleaseService",
    "ResolvedVersion",
    "is_prerelease",
    "resolve_version",
]
