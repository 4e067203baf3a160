"""Exit codes for the ovrpack CLI.

Each failure kind maps to one stable process exit code so that callers
(CI jobs, the web front end shelling out to us) can tell a bad request
apart from a broken environment or a misbehaving Oculus CLI.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success
    - 1: User error (invalid options file, bad arguments)
    - 2: Environment error (config missing, Oculus CLI or SDK not found)
    - 3: Tool error (Oculus CLI exited with failure or timed out)
    - 4: Output error (Oculus CLI reported success but produced no APK)
    - 5: I/O error (key staging or other filesystem failure)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    TOOL_ERROR = 3
    OUTPUT_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
