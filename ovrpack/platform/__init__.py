"""Platform abstraction layer."""

from .files import atomic_write_text, write_new_bytes
from .process import ProcessError, ProcessOutput, run, tool_command

__all__ = [
    # files
    "atomic_write_text",
    "write_new_bytes",
    # process
    "ProcessError",
    "ProcessOutput",
    "run",
    "tool_command",
]
