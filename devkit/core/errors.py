"""Process exit codes used by the devkit CLI."""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    The numeric values are part of the CLI contract and must stay stable:
    - 0: Success (including "nothing to release")
    - 1: User error, or a release that is not ready yet
    - 2: Environment error (gh missing, not authenticated)
    - 4: Network error (GitHub unreachable, unexpected payloads)
    - 5: I/O error (config file unreadable)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
