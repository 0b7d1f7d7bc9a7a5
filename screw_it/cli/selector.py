from __future__ import annotations

import os
import shutil
import sys
from dataclasses import dataclass
from typing import Literal, TypeVar

T = TypeVar("T")

Key = Literal["up", "down", "enter", "cancel", "other"]

_POSIX_KEYS: dict[str, Key] = {
    "\r": "enter",
    "\n": "enter",
    "q": "cancel",
    "Q": "cancel",
    "\x03": "cancel",
    "k": "up",
    "K": "up",
    "j": "down",
    "J": "down",
}

# Second byte after the "\x00"/"\xe0" prefix msvcrt reports for arrow keys.
_WINDOWS_ARROWS: dict[str, Key] = {"H": "up", "P": "down"}

# Final byte of the ANSI "ESC [ x" arrow sequences.
_ANSI_ARROWS: dict[str, Key] = {"A": "up", "B": "down"}


@dataclass(frozen=True, slots=True)
class SelectorOption[T]:
    value: T
    label: str


@dataclass(frozen=True, slots=True)
class SelectorResult[T]:
    action: Literal["select", "cancel"]
    value: T | None
    index: int


def is_interactive_terminal() -> bool:
    return bool(sys.stdin.isatty() and sys.stdout.isatty())


def _color_enabled() -> bool:
    if not is_interactive_terminal() or os.getenv("NO_COLOR") is not None:
        return False
    return os.getenv("TERM", "").lower() != "dumb"


def _paint(text: str, *codes: str) -> str:
    if not _color_enabled():
        return text
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


def _read_key_windows() -> Key:
    import msvcrt

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        return _WINDOWS_ARROWS.get(msvcrt.getwch(), "other")
    if ch == "\x1b":
        return "cancel"
    return _POSIX_KEYS.get(ch, "other")


def _read_key() -> Key:
    if os.name == "nt":
        return _read_key_windows()

    import termios
    import tty

    fd = sys.stdin.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
        if ch != "\x1b":
            return _POSIX_KEYS.get(ch, "other")
        # A lone Esc, or any escape sequence that is not an arrow, cancels.
        if sys.stdin.read(1) != "[":
            return "cancel"
        return _ANSI_ARROWS.get(sys.stdin.read(1), "cancel")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def _render(title: str, labels: list[str], index: int) -> int:
    """Draw the menu and return how many lines were written."""
    width = max(40, min(120, shutil.get_terminal_size((80, 24)).columns)) - 1
    lines = [_paint(title, "1", "96")]
    for i, label in enumerate(labels):
        selected = i == index
        text = f"{'>' if selected else ' '} {label}"[:width]
        lines.append(_paint(text, "1", "30", "46") if selected else _paint(text, "97"))
    lines.append(_paint("Up/Down + Enter to select, q to cancel", "2", "37"))

    for line in lines:
        sys.stdout.write(f"\x1b[2K{line}\n")
    sys.stdout.flush()
    return len(lines)


def select_one[T](*, title: str, options: list[SelectorOption[T]]) -> SelectorResult[T]:
    """Arrow-key single selection drawn in place below the cursor.

    The list wraps around at both ends; the first option starts highlighted.
    """
    if not options:
        raise ValueError("selector requires at least one option")
    if not is_interactive_terminal():
        raise RuntimeError("interactive selector requires a TTY")

    labels = [o.label for o in options]
    idx = 0
    drawn = 0
    while True:
        if drawn:
            sys.stdout.write(f"\x1b[{drawn}A")
        drawn = _render(title, labels, idx)

        match _read_key():
            case "up":
                idx = (idx - 1) % len(options)
            case "down":
                idx = (idx + 1) % len(options)
            case "enter":
                return SelectorResult(action="select", value=options[idx].value, index=idx)
            case "cancel":
                return SelectorResult(action="cancel", value=None, index=idx)
            case _:
                pass
