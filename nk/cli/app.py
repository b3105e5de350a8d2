from __future__ import annotations

from pathlib import Path

import typer

from nk import __version__
from nk.cli.commands.create_release import create_release
from nk.cli.commands.history import history
from nk.cli.commands.release_notes import release_notes
from nk.cli.context import GlobalOptions
from nk.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Release notes, changelog and version bookkeeping from git history.",
)

app.command("release-notes")(release_notes)
app.command("create-release")(create_release)
app.command()(history)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        is_eager=True,
        callback=_show_version,
    ),
    repo: Path = typer.Option(
        Path("."),
        "--repo",
        "-C",
        help="Run as if started in this directory.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show diagnostic output."),
) -> None:
    try:
        resolved = repo.expanduser().resolve()
    except OSError as e:
        typer.echo(f"error: invalid --repo: {e}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    if not resolved.is_dir():
        typer.echo(f"error: --repo '{resolved}' is not a directory", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    ctx.obj = GlobalOptions(repo=resolved, verbose=verbose)


def main() -> None:
    app()
