from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from screw_it.cli.prompts import TerminalInteraction
from screw_it.core.config import ReleaseConfig, load_config_or_default
from screw_it.core.errors import ErrorCode
from screw_it.core.result import Err
from screw_it.output.console import ConsoleProtocol, RichConsole, Style
from screw_it.platform.process import CommandRunner, SubprocessRunner
from screw_it.services.release.model import UserInteraction


@dataclass(frozen=True, slots=True)
class CLIContext:
    cwd: Path
    config: ReleaseConfig
    console: ConsoleProtocol
    runner: CommandRunner
    ui: UserInteraction


def build_context(cwd: Path | None = None) -> CLIContext:
    root = (cwd or Path.cwd()).resolve()
    console = RichConsole()

    config_result = load_config_or_default(root)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.FAILURE))
    config = config_result.value

    def echo(line: str) -> None:
        console.print(line, Style.DIM)

    return CLIContext(
        cwd=root,
        config=config,
        console=console,
        runner=SubprocessRunner(root, echo=echo if config.verbose else None),
        ui=TerminalInteraction(console),
    )
