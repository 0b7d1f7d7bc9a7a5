from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Protocol

from screw_it.services.release.semver import BumpKind


@dataclass(frozen=True, slots=True)
class ReleaseContext:
    """State threaded through the release steps.

    Each field is filled by exactly one step. ``with_*`` refuses to overwrite
    a field and ``require_*`` refuses to read one that is still unset.
    """

    current_version: str | None = None
    registry_version: str | None = None
    new_version: str | None = None

    def with_current_version(self, version: str) -> ReleaseContext:
        _ensure_unset("current_version", self.current_version)
        return replace(self, current_version=version)

    def with_registry_version(self, version: str | None) -> ReleaseContext:
        _ensure_unset("registry_version", self.registry_version)
        return replace(self, registry_version=version)

    def with_new_version(self, version: str) -> ReleaseContext:
        _ensure_unset("new_version", self.new_version)
        return replace(self, new_version=version)

    def require_current_version(self) -> str:
        return _ensure_set("current_version", self.current_version)

    def require_new_version(self) -> str:
        return _ensure_set("new_version", self.new_version)


def _ensure_unset(name: str, value: str | None) -> None:
    if value is not None:
        raise AssertionError(f"{name} already set to {value}")


def _ensure_set(name: str, value: str | None) -> str:
    if value is None:
        raise AssertionError(f"{name} read before it was set")
    return value


@dataclass(frozen=True, slots=True)
class BumpOption:
    """A bump kind and the version it would produce (None if not applicable)."""

    kind: BumpKind
    version: str | None

    @property
    def label(self) -> str:
        return f"{self.kind} - {self.version or 'n/a'}"


class UserInteraction(Protocol):
    """The two questions a release asks."""

    def select_bump(self, options: list[BumpOption]) -> BumpOption | None:
        """Let the user pick one option; None when cancelled."""
        ...

    def ask_otp(self) -> str | None:
        """Ask for a one-time passcode; None or empty when cancelled."""
        ...
