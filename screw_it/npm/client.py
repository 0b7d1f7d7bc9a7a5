from __future__ import annotations

from screw_it.core.result import Err, Ok, Result
from screw_it.platform.process import CommandRunner, ProcessError

# The file `npm version` rewrites; the release commit stages it.
MANIFEST = "package.json"

# npm >= 10 prints "npm error code E404", older releases "npm ERR! code E404".
_NOT_FOUND_MARKERS = (
    "npm error code E404",
    "npm ERR! code E404",
)

_OTP_MARKERS = (
    "one-time passcode",
    "OTP",
)


def is_not_found(error: ProcessError) -> bool:
    """True if a registry query failed because the package is unpublished."""
    text = error.output
    return any(marker in text for marker in _NOT_FOUND_MARKERS)


def requires_otp(error: ProcessError) -> bool:
    """True if a publish failed because the registry wants a one-time passcode."""
    text = error.output
    return any(marker in text for marker in _OTP_MARKERS)


class NpmClient:
    """The npm commands a release needs, run in the package directory."""

    def __init__(self, runner: CommandRunner, *, npm: str = "npm") -> None:
        self._runner = runner
        self._npm = npm

    def local_version(self) -> Result[str, ProcessError]:
        """Raw ``npm pkg get version`` output (a JSON string, quotes included)."""
        return self._runner.run([self._npm, "pkg", "get", "version"])

    def published_version(self) -> Result[str | None, ProcessError]:
        """Version on the registry, or None if the package was never published."""
        result = self._runner.run([self._npm, "view", ".", "version"])
        if isinstance(result, Err):
            if is_not_found(result.error):
                return Ok(None)
            return result
        return Ok(result.value.strip())

    def set_version(self, version: str, *, allow_same: bool = False) -> Result[None, ProcessError]:
        """Write ``version`` to ``package.json`` without creating a commit or tag."""
        cmd = [self._npm, "version", version, "--no-git-tag-version"]
        if allow_same:
            cmd.append("--allow-same-version")
        return self._runner.run(cmd).map(lambda _: None)

    def publish(self, *, otp: str | None = None) -> Result[None, ProcessError]:
        cmd = [self._npm, "publish"]
        if otp is not None:
            cmd.extend(["--otp", otp])
        return self._runner.run(cmd).map(lambda _: None)
