from __future__ import annotations

import pytest

from screw_it.output.console import MockConsole, RichConsole, Style


def test_mock_console_prefixes() -> None:
    console = MockConsole()

    console.success("done")
    console.error("broke")

    assert console.messages == ["OK done", "error: broke"]
    assert console.has_error()


def test_mock_console_step_records_title() -> None:
    console = MockConsole()

    with console.step("Publishing..."):
        console.print("inside")

    assert [(o.message, o.style) for o in console.outputs] == [
        ("Publishing...", Style.DIM),
        ("inside", Style.DEFAULT),
    ]


def test_mock_console_lifecycle() -> None:
    console = MockConsole()

    console.intro("Starting screw-it...")
    console.outro("Successfully published version 1.0.0")
    console.cancel("Exiting...")

    assert [o.style for o in console.outputs] == [Style.HEADER, Style.SUCCESS, Style.ERROR]
    assert console.find("screw-it")[0].message == "Starting screw-it..."


def test_rich_console_escapes_markup(capsys: pytest.CaptureFixture[str]) -> None:
    console = RichConsole()

    console.print("[bold]literal[/bold]")
    console.success("[v1.0.0]")

    out = capsys.readouterr().out
    assert "[bold]literal[/bold]" in out
    assert "OK [v1.0.0]" in out
