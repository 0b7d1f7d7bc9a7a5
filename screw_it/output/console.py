"""Console output abstraction.

Release steps report progress through ``ConsoleProtocol`` so they do not
depend on Rich directly. ``RichConsole`` is the terminal implementation and
``MockConsole`` captures output for tests.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for plain ``print`` calls and recorded output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    DIM = auto()
    BOLD = auto()
    HEADER = auto()


class ConsoleProtocol(Protocol):
    """What the release run needs from a console."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def step(self, message: str) -> AbstractContextManager[None]:
        """Show ``message`` with a spinner while the block runs."""
        ...

    def intro(self, message: str) -> None:
        """Opening banner of a run."""
        ...

    def outro(self, message: str) -> None:
        """Closing line of a successful run."""
        ...

    def cancel(self, message: str) -> None:
        """Closing line of an aborted run."""
        ...


class RichConsole:
    """Console implementation using Rich library."""

    _STYLES = {
        Style.SUCCESS: "green",
        Style.ERROR: "red bold",
        Style.DIM: "dim",
        Style.BOLD: "bold",
        Style.HEADER: "blue bold",
    }

    def __init__(self) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console()

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(
            message, style=self._STYLES.get(style), markup=False, highlight=False
        )

    def success(self, message: str) -> None:
        self._console.print(f"[green]OK[/green] {_escape(message)}")

    def error(self, message: str) -> None:
        self._console.print(f"[red bold]error:[/red bold] {_escape(message)}")

    @contextmanager
    def step(self, message: str) -> Iterator[None]:
        with self._console.status(_escape(message), spinner="dots"):
            yield

    def intro(self, message: str) -> None:
        self._console.rule(f"[blue bold]{_escape(message)}[/blue bold]", align="left")

    def outro(self, message: str) -> None:
        self._console.print(f"\n[green bold]{_escape(message)}[/green bold]")

    def cancel(self, message: str) -> None:
        self._console.print(f"\n[red]{_escape(message)}[/red]")


def _escape(message: str) -> str:
    from rich.markup import escape

    return escape(message)


@dataclass
class OutputRecord:
    message: str
    style: Style


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=list)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    @contextmanager
    def step(self, message: str) -> Iterator[None]:
        self.outputs.append(OutputRecord(message, Style.DIM))
        yield

    def intro(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    def outro(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.SUCCESS))

    def cancel(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.ERROR))

    # Test helper methods

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]
