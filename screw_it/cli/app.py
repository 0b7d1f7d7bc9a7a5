from __future__ import annotations

import typer

from screw_it.cli.context import build_context
from screw_it.core.errors import ErrorCode
from screw_it.core.result import Err
from screw_it.services.release.pipeline import run_release


app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)


@app.command()
def release() -> None:
    """Check, bump, publish and tag the npm package in the current directory."""
    ctx = build_context()
    ctx.console.intro("Starting screw-it...")

    result = run_release(runner=ctx.runner, ui=ctx.ui, console=ctx.console, config=ctx.config)
    if isinstance(result, Err):
        ctx.console.cancel("Exiting...")
        raise typer.Exit(code=int(ErrorCode.FAILURE))

    ctx.console.outro(f"Successfully published version {result.value.new_version}")


def main() -> None:
    app()
