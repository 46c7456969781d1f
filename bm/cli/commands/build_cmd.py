"""Build command - compile every Bubblemon variant with xcodebuild."""

from __future__ import annotations

import typer

from bm.cli.context import build_context
from bm.core.result import Err, Ok
from bm.output.errors import build_error_exit_code, print_build_error
from bm.services.build import BuildService


def build(
    dry_run: bool = typer.Option(False, "--dry-run", help="Print commands without running them"),
) -> None:
    """Build the Bubblemon apps for macOS ARM64 into build/."""
    ctx = build_context(require_git=False)
    ctx.console.info("Building Bubblemon for macOS ARM64...")

    svc = BuildService(workspace=ctx.workspace, config=ctx.config, console=ctx.console)
    match svc.build_all(dry_run=dry_run):
        case Ok(_):
            ctx.console.success("Build completed successfully!")
        case Err(error):
            print_build_error(error, ctx.console)
            raise typer.Exit(code=build_error_exit_code(error))
