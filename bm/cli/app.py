from __future__ import annotations

import os
from pathlib import Path

import typer

from bm import __version__
from bm.cli.commands.build_cmd import build
from bm.cli.commands.release_cmd import RELEASE_HELP, release
from bm.core.errors import ErrorCode
from bm.core.workspace import ROOT_ENV_VAR


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


# Commands
app.command()(build)
app.command(help=RELEASE_HELP)(release)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    root: Path | None = typer.Option(
        None,
        "--root",
        help="Repository root (defaults to the current directory)",
    ),
) -> None:
    """Bubblemon macOS build and release tooling."""
    del version
    if root is not None:
        try:
            resolved = root.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --root: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not resolved.is_dir():
            typer.echo(f"error: --root '{resolved}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

        os.environ[ROOT_ENV_VAR] = str(resolved)


def main() -> None:
    app()
