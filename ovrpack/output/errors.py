"""Error presentation utilities.

Captured streams were already reported where the failure was detected;
these helpers only add the closing summary line and the exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ovrpack.core.errors import ErrorCode
from ovrpack.output.console import Style
from ovrpack.services.package_errors import (
    ExternalToolError,
    IncompleteOutputError,
    PackageError,
    StagingError,
    UnclassifiedError,
)

if TYPE_CHECKING:
    from ovrpack.output.console import ConsoleProtocol

__all__ = ["print_package_error", "package_error_exit_code"]


def print_package_error(error: PackageError, console: ConsoleProtocol) -> None:
    """Print a dim closing line for a failure already reported as an error."""
    match error:
        case StagingError():
            console.print("hint: signingKey.keyStoreFile must be base64", Style.DIM)
        case ExternalToolError(returncode=rc):
            console.print(f"Oculus CLI failed (exit {rc})", Style.DIM)
        case IncompleteOutputError(path=path):
            console.print(f"no APK at {path}", Style.DIM)
        case UnclassifiedError(reason=reason):
            console.print(f"packaging failed: {reason}", Style.DIM)


def package_error_exit_code(error: PackageError) -> int:
    """Get exit code for a packaging error."""
    match error:
        case ExternalToolError():
            return int(ErrorCode.TOOL_ERROR)
        case IncompleteOutputError():
            return int(ErrorCode.OUTPUT_ERROR)
        case StagingError() | UnclassifiedError():
            return int(ErrorCode.IO_ERROR)
