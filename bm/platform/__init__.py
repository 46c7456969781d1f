"""Platform abstraction layer."""

from .files import human_size, replace_tree
from .process import (
    ProcessError,
    run,
    run_silent,
)

__all__ = [
    # files
    "human_size",
    "replace_tree",
    # process
    "ProcessError",
    "run",
    "run_silent",
]
