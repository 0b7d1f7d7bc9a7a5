from __future__ import annotations

from screw_it.core.config import ReleaseConfig
from screw_it.core.result import Err, Ok, Result
from screw_it.git.repository import GitError, Repository
from screw_it.npm.client import MANIFEST
from screw_it.services.release.errors import ReleaseError
from screw_it.services.release.model import ReleaseContext


def record_release(
    ctx: ReleaseContext, *, repo: Repository, config: ReleaseConfig
) -> Result[ReleaseContext, ReleaseError]:
    """Stage ``package.json``, commit and tag the published version.

    The package is already public at this point, so a partial failure is
    reported as is and nothing is rolled back.
    """
    version = ctx.require_new_version()
    tag = config.tag_for(version)

    steps = (
        lambda: repo.add(MANIFEST),
        lambda: repo.commit(config.commit_message_for(version)),
        lambda: repo.tag(tag),
    )
    for step in steps:
        result = step()
        if isinstance(result, Err):
            return Err(_recording_error(result.error, version))
    return Ok(ctx)


def _recording_error(error: GitError, version: str) -> ReleaseError:
    return ReleaseError(
        kind="recording",
        message=f"git {error.command} failed: {error.message}",
        hint=f"{version} is published; finish the commit and tag by hand",
    )
