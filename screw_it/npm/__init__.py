"""npm registry operations."""

from screw_it.npm.client import NpmClient, is_not_found, requires_otp

__all__ = [
    "NpmClient",
    "is_not_found",
    "requires_otp",
]
