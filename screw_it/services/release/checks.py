"""Pre-flight checks: repository, working tree, local and published version."""

from __future__ import annotations

from screw_it.core.result import Err, Ok, Result
from screw_it.git.repository import Repository
from screw_it.npm.client import NpmClient
from screw_it.services.release.errors import ReleaseError
from screw_it.services.release.model import ReleaseContext
from screw_it.services.release.semver import valid

_MAX_LISTED_PATHS = 5


def check_repository(
    ctx: ReleaseContext, *, repo: Repository
) -> Result[ReleaseContext, ReleaseError]:
    result = repo.is_inside_work_tree()
    if isinstance(result, Err):
        return Err(
            ReleaseError(
                kind="environment",
                message="Not a git repository",
                hint=result.error.message,
            )
        )
    return Ok(ctx)


def check_clean_tree(
    ctx: ReleaseContext, *, repo: Repository
) -> Result[ReleaseContext, ReleaseError]:
    status = repo.status()
    if isinstance(status, Err):
        return Err(
            ReleaseError(
                kind="dirty_state",
                message="Unable to read working tree status",
                hint=status.error.message,
            )
        )

    if not status.value.is_clean:
        paths = status.value.paths
        listed = ", ".join(paths[:_MAX_LISTED_PATHS])
        if len(paths) > _MAX_LISTED_PATHS:
            listed += f" (+{len(paths) - _MAX_LISTED_PATHS} more)"
        return Err(
            ReleaseError(
                kind="dirty_state",
                message="Unclean working tree. Commit or stash changes first.",
                hint=listed or None,
            )
        )
    return Ok(ctx)


def read_current_version(
    ctx: ReleaseContext, *, npm: NpmClient
) -> Result[ReleaseContext, ReleaseError]:
    raw = npm.local_version()
    if isinstance(raw, Err):
        return Err(
            ReleaseError(
                kind="invalid_version",
                message="Unable to read package version",
                hint=raw.error.detail(),
            )
        )

    version = valid(raw.value.replace('"', ""))
    if version is None:
        return Err(
            ReleaseError(
                kind="invalid_version",
                message="Invalid semver version in package.json",
                hint=raw.value.strip() or None,
            )
        )
    return Ok(ctx.with_current_version(version))


def check_registry_version(
    ctx: ReleaseContext, *, npm: NpmClient
) -> Result[ReleaseContext, ReleaseError]:
    """Refuse to release a version the registry already has.

    An unpublished package is fine; any other registry failure is passed on.
    """
    current = ctx.require_current_version()
    published = npm.published_version()
    if isinstance(published, Err):
        return Err(
            ReleaseError(
                kind="registry",
                message=str(published.error),
                hint=published.error.output or None,
            )
        )

    if published.value == current:
        return Err(
            ReleaseError(
                kind="duplicate_version",
                message="Version already exists on registry",
                hint=f"{current} is already published; bump the version locally first",
            )
        )
    return Ok(ctx.with_registry_version(published.value))
