"""Ordered release steps and the loop that runs them.

Steps run strictly in order; the first ``Err`` stops the run and is returned
to the caller, which decides the exit status.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import partial

from screw_it.core.config import ReleaseConfig
from screw_it.core.result import Err, Ok, Result
from screw_it.git.repository import Repository
from screw_it.npm.client import NpmClient
from screw_it.output.console import ConsoleProtocol, Style
from screw_it.platform.process import CommandRunner
from screw_it.services.release.bump import bump_version
from screw_it.services.release.checks import (
    check_clean_tree,
    check_registry_version,
    check_repository,
    read_current_version,
)
from screw_it.services.release.errors import ReleaseError
from screw_it.services.release.model import ReleaseContext, UserInteraction
from screw_it.services.release.publish import publish_package
from screw_it.services.release.record import record_release

StepHandler = Callable[[ReleaseContext], Result[ReleaseContext, ReleaseError]]


@dataclass(frozen=True, slots=True)
class ReleaseStep:
    """One stage of the release.

    Attributes:
        name: Short identifier, used in tests and verbose output.
        title: Shown while the step runs.
        done: Builds the success line from the updated context.
        handler: The step itself.
        interactive: Prompts the user, so no spinner is drawn over it.
    """

    name: str
    title: str
    done: Callable[[ReleaseContext], str]
    handler: StepHandler
    interactive: bool = False


def _registry_done(ctx: ReleaseContext) -> str:
    if ctx.registry_version is None:
        return "Registry version OK (not published yet)"
    return f"Registry version OK (published: {ctx.registry_version})"


def build_steps(
    *,
    repo: Repository,
    npm: NpmClient,
    ui: UserInteraction,
    config: ReleaseConfig,
) -> list[ReleaseStep]:
    return [
        ReleaseStep(
            name="repository",
            title="Checking git repository...",
            done=lambda _: "Git repository validated",
            handler=partial(check_repository, repo=repo),
        ),
        ReleaseStep(
            name="status",
            title="Checking git status...",
            done=lambda _: "Working tree is clean",
            handler=partial(check_clean_tree, repo=repo),
        ),
        ReleaseStep(
            name="version",
            title="Validating package version...",
            done=lambda ctx: f"Package version is {ctx.current_version}",
            handler=partial(read_current_version, npm=npm),
        ),
        ReleaseStep(
            name="registry",
            title="Checking registry version...",
            done=_registry_done,
            handler=partial(check_registry_version, npm=npm),
        ),
        ReleaseStep(
            name="bump",
            title="Bumping version...",
            done=lambda ctx: f"Version bumped to {ctx.new_version}",
            handler=partial(bump_version, npm=npm, ui=ui),
            interactive=True,
        ),
        ReleaseStep(
            name="publish",
            title="Publishing to npm...",
            done=lambda _: "Published to npm",
            handler=partial(publish_package, npm=npm, ui=ui),
            interactive=True,
        ),
        ReleaseStep(
            name="record",
            title="Creating git tag and commit...",
            done=lambda _: "Git tag and commit created",
            handler=partial(record_release, repo=repo, config=config),
        ),
    ]


def run_pipeline(
    steps: Sequence[ReleaseStep],
    *,
    console: ConsoleProtocol,
    initial: ReleaseContext | None = None,
) -> Result[ReleaseContext, ReleaseError]:
    ctx = initial if initial is not None else ReleaseContext()

    for step in steps:
        if step.interactive:
            console.print(step.title, Style.DIM)
            outcome = step.handler(ctx)
        else:
            with console.step(step.title):
                outcome = step.handler(ctx)

        if isinstance(outcome, Err):
            console.error(outcome.error.message)
            if outcome.error.hint:
                console.print(f"hint: {outcome.error.hint}", Style.DIM)
            return outcome

        ctx = outcome.value
        console.success(step.done(ctx))

    return Ok(ctx)


def run_release(
    *,
    runner: CommandRunner,
    ui: UserInteraction,
    console: ConsoleProtocol,
    config: ReleaseConfig,
) -> Result[ReleaseContext, ReleaseError]:
    """Run the whole release against real (or scripted) git and npm."""
    repo = Repository(runner, git=config.commands.git)
    npm = NpmClient(runner, npm=config.commands.npm)
    steps = build_steps(repo=repo, npm=npm, ui=ui, config=config)
    return run_pipeline(steps, console=console)
