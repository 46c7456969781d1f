# SPDX-License-Identifier: MIT
"""Build and release services."""

from .build import BuildReport, BuildService
from .release import ReleaseService

__all__ = [
    "BuildReport",
    "BuildService",
    "ReleaseService",
]
