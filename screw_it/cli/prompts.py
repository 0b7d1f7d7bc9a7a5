from __future__ import annotations

import typer

from screw_it.cli.selector import SelectorOption, is_interactive_terminal, select_one
from screw_it.output.console import ConsoleProtocol, Style
from screw_it.services.release.model import BumpOption


class TerminalInteraction:
    """UserInteraction for a human at a terminal.

    Uses the arrow-key selector on a TTY and numbered prompts otherwise
    (for example when stdin is piped).
    """

    def __init__(self, console: ConsoleProtocol) -> None:
        self._console = console

    def select_bump(self, options: list[BumpOption]) -> BumpOption | None:
        if is_interactive_terminal():
            choice = select_one(
                title="Select version:",
                options=[SelectorOption(value=o, label=o.label) for o in options],
            )
            if choice.action == "cancel":
                return None
            return choice.value
        return self._select_numbered(options)

    def _select_numbered(self, options: list[BumpOption]) -> BumpOption | None:
        self._console.print("Select version:", Style.BOLD)
        for i, option in enumerate(options, start=1):
            self._console.print(f"{i:2}. {option.label}", Style.DIM)

        while True:
            try:
                raw = typer.prompt(
                    "Version number (empty to cancel)", default="", show_default=False
                )
            except typer.Abort:
                return None
            raw = raw.strip()
            if not raw:
                return None
            try:
                idx = int(raw)
            except ValueError:
                self._console.error("invalid number")
                continue
            if idx < 1 or idx > len(options):
                self._console.error("out of range")
                continue
            return options[idx - 1]

    def ask_otp(self) -> str | None:
        try:
            code = typer.prompt("Enter OTP for npm", default="", show_default=False)
        except typer.Abort:
            return None
        return code.strip() or None
