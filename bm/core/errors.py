"""Exit codes for `bm` commands.

The numeric values are the process exit status and should remain stable so
CI jobs can tell a missing tag from a broken build.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success
    - 1: User error (no version tag on HEAD, bad arguments)
    - 2: Environment error (missing or unauthenticated tool, missing build dir)
    - 3: Build error (xcodebuild failed)
    - 4: Network error (release publishing failed)
    - 5: I/O error (required artifact missing, archive could not be written)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5
