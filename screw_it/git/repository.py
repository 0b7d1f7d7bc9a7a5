"""Git repository abstraction.

The release only needs a handful of git operations: detect a work tree,
read the porcelain status, and stage/commit/tag the release. All operations
return Result types.

Usage:
    repo = Repository(runner)

    match repo.status():
        case Ok(status):
            if status.is_clean:
                print("Working tree clean")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass, field

from screw_it.core.result import Err, Ok, Result
from screw_it.platform.process import CommandRunner, ProcessError

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "StatusEntry",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single entry in ``git status --porcelain``.

    Attributes:
        xy: Two-character status code (e.g., "M ", " M", "??")
        path: File path
    """

    xy: str
    path: str


@dataclass(frozen=True, slots=True)
class GitStatus:
    """Parsed porcelain status of the working tree.

    Attributes:
        raw: Porcelain output exactly as git printed it
        entries: One entry per non-blank status line
    """

    raw: str = ""
    entries: tuple[StatusEntry, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        """True only if git printed nothing at all, not even whitespace."""
        return self.raw == ""

    @property
    def paths(self) -> list[str]:
        return [e.path for e in self.entries]


class Repository:
    """Git operations for the repository the runner works in."""

    def __init__(self, runner: CommandRunner, *, git: str = "git") -> None:
        self._runner = runner
        self._git = git

    def is_inside_work_tree(self) -> Result[None, GitError]:
        """Check ``git rev-parse --is-inside-work-tree``.

        Any failure (including git missing) means "not a repository".
        """
        return self._simple(["rev-parse", "--is-inside-work-tree"], "rev-parse")

    def status(self) -> Result[GitStatus, GitError]:
        """Get working tree status from ``git status --porcelain``."""
        result = self._run(["status", "--porcelain"])
        match result:
            case Err(e):
                return Err(_git_error("status", e, "git status failed"))
            case Ok(stdout):
                return Ok(parse_status(stdout))

    def add(self, path: str) -> Result[None, GitError]:
        return self._simple(["add", path], "add")

    def commit(self, message: str) -> Result[None, GitError]:
        return self._simple(["commit", "-m", message], "commit")

    def tag(self, name: str) -> Result[None, GitError]:
        """Create a lightweight tag at HEAD."""
        return self._simple(["tag", name], "tag")

    def _simple(self, args: list[str], command: str) -> Result[None, GitError]:
        result = self._run(args)
        if isinstance(result, Err):
            return Err(_git_error(command, result.error, f"git {command} failed"))
        return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return self._runner.run([self._git, *args])


def _git_error(command: str, error: ProcessError, fallback: str) -> GitError:
    return GitError(
        command=command,
        message=error.stderr.strip() or error.stdout.strip() or fallback,
        returncode=error.returncode,
    )


def parse_status(output: str) -> GitStatus:
    """Parse ``git status --porcelain`` output.

    Blank lines carry no path and are not listed, but they still make the
    status unclean.
    """
    entries: list[StatusEntry] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        entries.append(StatusEntry(xy=line[:2], path=line[3:]))
    return GitStatus(raw=output, entries=tuple(entries))
