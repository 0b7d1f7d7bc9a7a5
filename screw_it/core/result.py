"""Result type for explicit error handling.

Every release step returns either ``Ok(value)`` or ``Err(error)`` instead of
raising, so the pipeline can stop at the first failure without try/except
blocks around each external command.

Callers narrow with ``isinstance`` or ``match``:

    match repo.status():
        case Ok(status):
            ...
        case Err(error):
            ...
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result holding ``value``."""

    value: T

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Apply ``f`` to the contained value."""
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result holding ``error``."""

    error: E

    def map(self, f: Callable[[T], U]) -> Err[E]:
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
