"""Release command - package build/ and publish a GitHub release."""

from __future__ import annotations

import typer

from bm.cli.context import build_context
from bm.core.result import Err, Ok
from bm.output.errors import print_release_error, release_error_exit_code
from bm.services.release import ReleaseService

RELEASE_HELP = """Create a GitHub release with the built Bubblemon applications.

[bold]Prerequisites[/bold]

1. Build the applications first: bm build
2. Install GitHub CLI: brew install gh
3. Authenticate: gh auth login

[bold]Steps[/bold]

1. Check that gh is installed and authenticated and build/ exists
2. Take the version from the git tag on the current commit
3. Package the built apps, README.md, COPYING and INSTALL.txt into one archive
4. Create the GitHub release and upload the archive as its asset

[bold]Version detection[/bold]

The current commit must carry a tag; it is used verbatim as the version.
Tags containing alpha, beta, rc or dev are published as prereleases.
An untagged commit is refused: tag it first (git tag v1.0.0 && git push origin v1.0.0).
"""


def release(
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Build the archive but do not publish anything"
    ),
) -> None:
    ctx = build_context()

    svc = ReleaseService(workspace=ctx.workspace, config=ctx.config, console=ctx.console)
    match svc.run(dry_run=dry_run):
        case Ok(_):
            return
        case Err(error):
            print_release_error(error, ctx.console)
            raise typer.Exit(code=release_error_exit_code(error))
