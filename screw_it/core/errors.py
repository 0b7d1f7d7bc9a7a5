"""Process exit codes.

Any failed step maps to ``FAILURE``; there is no finer distinction.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the ``screw-it`` command."""

    OK = 0
    FAILURE = 1
