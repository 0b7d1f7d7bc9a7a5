from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "config",
    "environment",
    "dirty_state",
    "invalid_version",
    "registry",
    "duplicate_version",
    "no_selection",
    "bump_failure",
    "publish",
    "recording",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Why a release step failed.

    Every kind is terminal for the run; ``hint`` carries tool output or a
    suggested fix and is printed dimmed under the message.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
