"""Process exit codes.

Values follow the BSD ``sysexits.h`` convention so that shell scripts and CI
jobs wrapping ``shipfw`` can tell failure kinds apart. They are part of the
CLI contract and must remain stable.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USAGE = 64
    DATA_ERROR = 65  # release already published for this version
    NO_INPUT = 66  # expected input file missing (build output, pubspec.yaml)
    NO_USER = 67  # not authenticated
    UNAVAILABLE = 69  # unsupported host platform
    SOFTWARE = 70  # build, toolchain or remote API failure
    TEMP_FAIL = 75  # upload failed; re-running resumes with the draft release
    CONFIG = 78  # project not initialized or validators failed

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
