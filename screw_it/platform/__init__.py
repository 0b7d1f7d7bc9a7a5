"""Platform abstraction layer."""

from .process import (
    CommandRunner,
    ProcessError,
    SubprocessRunner,
    format_command,
    run,
)

__all__ = [
    "CommandRunner",
    "ProcessError",
    "SubprocessRunner",
    "format_command",
    "run",
]
