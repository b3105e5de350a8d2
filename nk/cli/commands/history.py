from __future__ import annotations

import typer

from nk.cli.commands._helpers import fail
from nk.cli.context import build_context
from nk.core.result import Err
from nk.output.console import Style
from nk.release.service import history as release_history
from nk.release.tags import parse_tags


def history(
    ctx: typer.Context,
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Number of releases to show."),
) -> None:
    """List release tags, newest version first."""
    cli = build_context(ctx)
    console = cli.console

    refs = cli.repository.list_tags()
    if isinstance(refs, Err):
        fail(refs.error, console)

    releases = release_history(parse_tags(refs.value))
    if not releases:
        console.print("No version tags found.", Style.DIM)
        return

    console.header("Version history")
    for tag in releases[:limit]:
        typer.echo(f"{tag.raw_name}\t{tag.version}\t{tag.commit_hash[:7]}")
