from __future__ import annotations

from screw_it.core.config import ReleaseConfig
from screw_it.core.result import Err, Ok, Result
from screw_it.output.console import MockConsole
from screw_it.services.release.errors import ReleaseError
from screw_it.services.release.model import ReleaseContext
from screw_it.services.release.pipeline import ReleaseStep, run_pipeline, run_release
from screw_it.test.fakes import FakeInteraction, FakeRunner, fail

_VIEW = ["npm", "view", ".", "version"]


def _clean_repo(version: str) -> FakeRunner:
    return (
        FakeRunner()
        .on(["git", "rev-parse", "--is-inside-work-tree"], Ok("true\n"))
        .on(["git", "status", "--porcelain"], Ok(""))
        .on(["npm", "pkg", "get", "version"], Ok(f'"{version}"\n'))
    )


def test_run_pipeline_stops_at_first_error() -> None:
    seen: list[str] = []

    def ok_step(ctx: ReleaseContext) -> Result[ReleaseContext, ReleaseError]:
        seen.append("ok")
        return Ok(ctx)

    def bad_step(_: ReleaseContext) -> Result[ReleaseContext, ReleaseError]:
        seen.append("bad")
        return Err(ReleaseError(kind="environment", message="boom", hint="why"))

    steps = [
        ReleaseStep(name="a", title="A...", done=lambda _: "A done", handler=ok_step),
        ReleaseStep(name="b", title="B...", done=lambda _: "B done", handler=bad_step),
        ReleaseStep(name="c", title="C...", done=lambda _: "C done", handler=ok_step),
    ]
    console = MockConsole()

    result = run_pipeline(steps, console=console)

    assert isinstance(result, Err)
    assert result.error.message == "boom"
    assert seen == ["ok", "bad"]
    assert "OK A done" in console.messages
    assert "error: boom" in console.messages
    assert "hint: why" in console.messages
    assert not console.find("C done")


def test_release_end_to_end() -> None:
    runner = _clean_repo("0.1.0").on(_VIEW, fail(_VIEW, stderr="npm error code E404"))
    console = MockConsole()

    result = run_release(
        runner=runner,
        ui=FakeInteraction(kind="minor"),
        console=console,
        config=ReleaseConfig(),
    )

    assert isinstance(result, Ok)
    assert result.value == ReleaseContext(
        current_version="0.1.0", registry_version=None, new_version="0.2.0"
    )
    assert runner.calls == [
        ["git", "rev-parse", "--is-inside-work-tree"],
        ["git", "status", "--porcelain"],
        ["npm", "pkg", "get", "version"],
        ["npm", "view", ".", "version"],
        ["npm", "version", "0.2.0", "--no-git-tag-version"],
        ["npm", "publish"],
        ["git", "add", "package.json"],
        ["git", "commit", "-m", "chore: release v0.2.0"],
        ["git", "tag", "v0.2.0"],
    ]
    assert "OK Registry version OK (not published yet)" in console.messages
    assert "OK Version bumped to 0.2.0" in console.messages
    assert not console.has_error()


def test_dirty_tree_stops_before_version_steps() -> None:
    runner = (
        FakeRunner()
        .on(["git", "rev-parse", "--is-inside-work-tree"], Ok("true\n"))
        .on(["git", "status", "--porcelain"], Ok(" M index.js\n"))
    )
    ui = FakeInteraction(kind="patch")

    result = run_release(runner=runner, ui=ui, console=MockConsole(), config=ReleaseConfig())

    assert isinstance(result, Err)
    assert result.error.kind == "dirty_state"
    assert all(call[0] == "git" for call in runner.calls)
    assert ui.offered == []


def test_duplicate_version_stops_before_bump() -> None:
    runner = _clean_repo("1.2.3").on(_VIEW, Ok("1.2.3\n"))
    ui = FakeInteraction(kind="patch")

    result = run_release(runner=runner, ui=ui, console=MockConsole(), config=ReleaseConfig())

    assert isinstance(result, Err)
    assert result.error.kind == "duplicate_version"
    assert ui.offered == []


def test_publish_failure_leaves_no_commit() -> None:
    publish = ["npm", "publish"]
    runner = (
        _clean_repo("1.2.3")
        .on(_VIEW, Ok("1.2.2\n"))
        .on(publish, fail(publish, stderr="npm error code E403"))
    )

    result = run_release(
        runner=runner,
        ui=FakeInteraction(kind="patch"),
        console=MockConsole(),
        config=ReleaseConfig(),
    )

    assert isinstance(result, Err)
    assert result.error.kind == "publish"
    assert runner.ran(["npm", "version", "1.2.3", "--no-git-tag-version", "--allow-same-version"])
    assert not any(call[:2] == ["git", "commit"] for call in runner.calls)


def test_configured_executables_are_used() -> None:
    config = ReleaseConfig.from_dict({"commands": {"git": "/opt/git", "npm": "/opt/npm"}})
    runner = FakeRunner().on(
        ["/opt/git", "rev-parse", "--is-inside-work-tree"], fail(["/opt/git"], stderr="nope")
    )

    result = run_release(
        runner=runner, ui=FakeInteraction(), console=MockConsole(), config=config
    )

    assert isinstance(result, Err)
    assert result.error.kind == "environment"
    assert runner.calls == [["/opt/git", "rev-parse", "--is-inside-work-tree"]]
