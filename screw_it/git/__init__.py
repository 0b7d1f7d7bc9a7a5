"""Git operations module.

Usage:
    from screw_it.git import Repository

    repo = Repository(runner)
    match repo.status():
        case Ok(status):
            print(status.is_clean)
"""

from screw_it.git.repository import (
    GitError,
    GitStatus,
    Repository,
    StatusEntry,
    parse_status,
)

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "StatusEntry",
    "parse_status",
]
