from __future__ import annotations

from screw_it.core.result import Err, Ok, Result
from screw_it.npm.client import NpmClient
from screw_it.services.release.errors import ReleaseError
from screw_it.services.release.model import BumpOption, ReleaseContext, UserInteraction
from screw_it.services.release.semver import BUMP_KINDS, inc


def bump_options(current_version: str) -> list[BumpOption]:
    """All eight bump kinds with the version each would produce."""
    return [BumpOption(kind=kind, version=inc(current_version, kind)) for kind in BUMP_KINDS]


def bump_version(
    ctx: ReleaseContext, *, npm: NpmClient, ui: UserInteraction
) -> Result[ReleaseContext, ReleaseError]:
    """Ask for a bump kind and write the new version to package.json.

    No commit or tag is created here; that happens after publishing.
    """
    choice = ui.select_bump(bump_options(ctx.require_current_version()))
    if choice is None:
        return Err(ReleaseError(kind="no_selection", message="No version selected"))

    if choice.version is None:
        return Err(
            ReleaseError(
                kind="bump_failure",
                message=f"Failed to bump version: {choice.kind} does not apply to "
                f"{ctx.require_current_version()}",
            )
        )

    applied = npm.set_version(choice.version)
    if isinstance(applied, Err):
        return Err(
            ReleaseError(
                kind="bump_failure",
                message=f"Failed to bump version: {applied.error}",
                hint=applied.error.output or None,
            )
        )
    return Ok(ctx.with_new_version(choice.version))
