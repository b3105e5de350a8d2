from __future__ import annotations

from pathlib import Path

import typer

from nk.cli.commands._helpers import (
    fail,
    notes_filename,
    now,
    require_bump_kind,
    resolve_bump,
    write_output,
)
from nk.cli.context import build_context
from nk.core.result import Err
from nk.release.service import generate_release_notes


def release_notes(
    ctx: typer.Context,
    from_ref: str | None = typer.Option(
        None, "--from", help="Start of the range (exclusive). Defaults to the latest release tag."
    ),
    to_ref: str | None = typer.Option(None, "--to", help="End of the range (inclusive). Defaults to HEAD."),
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="File to write, or '-' for stdout. Defaults to RELEASE_NOTES_<tag>.md.",
    ),
    bump: str | None = typer.Option(
        None, "--bump", help="patch, minor or major. Suggested from the commits when omitted."
    ),
    version: str | None = typer.Option(None, "--version", help="Explicit version for the notes."),
) -> None:
    """Generate release notes from the commits since the previous release."""
    require_bump_kind(bump)
    cli = build_context(ctx)
    console = cli.console

    result = generate_release_notes(
        cli.repository,
        console=console,
        now=now(),
        bump=resolve_bump(bump, version),
        from_ref=from_ref,
        to_ref=to_ref,
        tag_prefix=cli.config.tag_prefix,
        remote=cli.config.remote,
    )
    if isinstance(result, Err):
        fail(result.error, console)
    notes = result.value

    if output == "-":
        typer.echo(notes.markdown, nl=False)
        return

    if output is not None:
        path = Path(output)
        if not path.is_absolute():
            path = Path.cwd() / path
    else:
        path = cli.root / cli.config.notes_dir / notes_filename(notes.document.tag_name)

    write_output(path, notes.markdown, console)
    console.success(f"release notes for {notes.document.tag_name} written to {path}")
