"""Scripted stand-ins for the external tools and the user."""

from __future__ import annotations

from collections import defaultdict, deque
from dataclasses import dataclass, field

from screw_it.core.result import Err, Ok, Result
from screw_it.platform.process import ProcessError
from screw_it.services.release.model import BumpOption
from screw_it.services.release.semver import BumpKind


def fail(
    cmd: list[str], *, stderr: str = "", stdout: str = "", returncode: int = 1
) -> Err[ProcessError]:
    return Err(
        ProcessError(command=tuple(cmd), returncode=returncode, stdout=stdout, stderr=stderr)
    )


class FakeRunner:
    """CommandRunner answering from a script; unscripted commands succeed with no output."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self._script: defaultdict[tuple[str, ...], deque[Result[str, ProcessError]]] = (
            defaultdict(deque)
        )

    def on(self, cmd: list[str], *results: Result[str, ProcessError]) -> FakeRunner:
        """Queue results for ``cmd``; the last one repeats once the queue runs dry."""
        self._script[tuple(cmd)].extend(results)
        return self

    def run(self, cmd: list[str]) -> Result[str, ProcessError]:
        self.calls.append(list(cmd))
        queue = self._script.get(tuple(cmd))
        if not queue:
            return Ok("")
        if len(queue) == 1:
            return queue[0]
        return queue.popleft()

    def ran(self, cmd: list[str]) -> bool:
        return list(cmd) in self.calls


@dataclass
class FakeInteraction:
    """UserInteraction that picks a fixed bump kind and passcode."""

    kind: BumpKind | None = None
    otp: str | None = None
    offered: list[BumpOption] = field(default_factory=list)
    otp_asked: int = 0

    def select_bump(self, options: list[BumpOption]) -> BumpOption | None:
        self.offered = list(options)
        if self.kind is None:
            return None
        return next(o for o in options if o.kind == self.kind)

    def ask_otp(self) -> str | None:
        self.otp_asked += 1
        return self.otp
