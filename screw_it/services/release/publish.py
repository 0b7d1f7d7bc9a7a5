from __future__ import annotations

from screw_it.core.result import Err, Ok, Result
from screw_it.npm.client import NpmClient, requires_otp
from screw_it.platform.process import ProcessError
from screw_it.services.release.errors import ReleaseError
from screw_it.services.release.model import ReleaseContext, UserInteraction


def publish_package(
    ctx: ReleaseContext, *, npm: NpmClient, ui: UserInteraction
) -> Result[ReleaseContext, ReleaseError]:
    """Publish, retrying once with a passcode if the registry asks for one.

    Any failure puts package.json back to the pre-bump version. The revert is
    best effort: it cannot undo anything another publisher did meanwhile.
    """
    current = ctx.require_current_version()
    ctx.require_new_version()

    first = npm.publish()
    if isinstance(first, Ok):
        return Ok(ctx)

    if not requires_otp(first.error):
        return Err(_revert(npm, current, "Failed to publish", first.error))

    otp = ui.ask_otp()
    if not otp:
        return Err(
            _revert(
                npm,
                current,
                "Failed to publish after OTP",
                None,
                cause="no one-time passcode entered",
            )
        )

    retry = npm.publish(otp=otp.strip())
    if isinstance(retry, Err):
        return Err(_revert(npm, current, "Failed to publish after OTP", retry.error))
    return Ok(ctx)


def _revert(
    npm: NpmClient,
    version: str,
    message: str,
    error: ProcessError | None,
    *,
    cause: str | None = None,
) -> ReleaseError:
    reason = cause if error is None else error.detail()
    reverted = npm.set_version(version, allow_same=True)
    hint = None
    if isinstance(reverted, Err):
        hint = f"could not restore version {version} in package.json, restore it by hand"
    return ReleaseError(kind="publish", message=f"{message}: {reason}", hint=hint)
