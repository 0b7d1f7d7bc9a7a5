"""Semantic versions with npm's increment rules.

``parse``/``valid`` accept the same strict syntax as node-semver (an optional
leading ``v``, build metadata dropped from the normalised form) and ``inc``
reproduces ``semver.inc(version, kind)`` without a prerelease identifier.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Literal

BumpKind = Literal[
    "patch",
    "minor",
    "major",
    "premajor",
    "preminor",
    "prepatch",
    "prerelease",
    "release",
]

BUMP_KINDS: tuple[BumpKind, ...] = (
    "patch",
    "minor",
    "major",
    "premajor",
    "preminor",
    "prepatch",
    "prerelease",
    "release",
)

_MAX_LENGTH = 256
_MAX_SAFE_INTEGER = 2**53 - 1

_NUM = r"0|[1-9]\d*"
_PRE_ID = rf"(?:{_NUM}|\d*[a-zA-Z-][a-zA-Z0-9-]*)"
_BUILD_ID = r"[0-9A-Za-z-]+"
_FULL_RE = re.compile(
    rf"^v?({_NUM})\.({_NUM})\.({_NUM})"
    rf"(?:-({_PRE_ID}(?:\.{_PRE_ID})*))?"
    rf"(?:\+({_BUILD_ID}(?:\.{_BUILD_ID})*))?$",
    re.ASCII,
)

PrereleaseId = int | str


@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: tuple[PrereleaseId, ...] = ()

    def __str__(self) -> str:
        core = f"{self.major}.{self.minor}.{self.patch}"
        if not self.prerelease:
            return core
        return f"{core}-{'.'.join(str(p) for p in self.prerelease)}"

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def bump(self, kind: BumpKind) -> SemVer | None:
        """Next version for ``kind``, or None when ``kind`` does not apply."""
        match kind:
            case "major":
                if self.prerelease and self.minor == 0 and self.patch == 0:
                    return replace(self, prerelease=())
                return SemVer(self.major + 1, 0, 0)
            case "minor":
                if self.prerelease and self.patch == 0:
                    return replace(self, prerelease=())
                return SemVer(self.major, self.minor + 1, 0)
            case "patch":
                if self.prerelease:
                    return replace(self, prerelease=())
                return SemVer(self.major, self.minor, self.patch + 1)
            case "premajor":
                return SemVer(self.major + 1, 0, 0)._next_prerelease()
            case "preminor":
                return SemVer(self.major, self.minor + 1, 0)._next_prerelease()
            case "prepatch":
                return SemVer(self.major, self.minor, self.patch + 1)._next_prerelease()
            case "prerelease":
                base = self if self.prerelease else SemVer(self.major, self.minor, self.patch + 1)
                return base._next_prerelease()
            case "release":
                if not self.prerelease:
                    return None
                return replace(self, prerelease=())
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")

    def _next_prerelease(self) -> SemVer:
        # Increment the right-most numeric identifier, or start a new one at 0.
        ids = list(self.prerelease)
        for i in range(len(ids) - 1, -1, -1):
            current = ids[i]
            if isinstance(current, int):
                ids[i] = current + 1
                return replace(self, prerelease=tuple(ids))
        return replace(self, prerelease=(*ids, 0))


def _prerelease_id(raw: str) -> PrereleaseId:
    if raw.isdigit():
        value = int(raw)
        if value <= _MAX_SAFE_INTEGER:
            return value
    return raw


def parse(version: str) -> SemVer | None:
    """Parse a strict semantic version, or return None."""
    text = version.strip()
    if len(text) > _MAX_LENGTH:
        return None
    m = _FULL_RE.match(text)
    if m is None:
        return None

    major, minor, patch = int(m.group(1)), int(m.group(2)), int(m.group(3))
    if max(major, minor, patch) > _MAX_SAFE_INTEGER:
        return None

    prerelease: tuple[PrereleaseId, ...] = ()
    if m.group(4):
        prerelease = tuple(_prerelease_id(p) for p in m.group(4).split("."))
    return SemVer(major, minor, patch, prerelease)


def valid(version: str) -> str | None:
    """Normalised form of ``version`` if it is valid, else None."""
    parsed = parse(version)
    return None if parsed is None else str(parsed)


def inc(version: str, kind: BumpKind) -> str | None:
    """Increment ``version`` by ``kind``; None if invalid or not applicable."""
    parsed = parse(version)
    if parsed is None:
        return None
    bumped = parsed.bump(kind)
    return None if bumped is None else str(bumped)
