"""Result type for explicit error handling.

Every step of the build and release workflows returns a Result instead of
raising, so the CLI layer decides how a failure is reported and which exit
code it maps to.

Usage:
    match resolve_version(repo):
        case Ok(version):
            console.info(f"Using git tag: {version.tag}")
        case Err(error):
            console.error(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful step carrying its value."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed step carrying its error."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
