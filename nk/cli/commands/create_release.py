from __future__ import annotations

import json
from pathlib import Path

import typer

from nk.cli.commands._helpers import exit_usage, fail, now, resolve_bump, write_output
from nk.cli.context import build_context
from nk.core.result import Err
from nk.output.console import Style
from nk.release.service import create_release as run_create_release


def create_release(
    ctx: typer.Context,
    bump: str | None = typer.Argument(None, help="patch, minor, major, or an explicit X.Y.Z."),
    version: str | None = typer.Option(None, "--version", help="Explicit version, bypasses the bump."),
    message: str | None = typer.Option(None, "--message", "-m", help="Tag annotation message."),
    draft: bool | None = typer.Option(None, "--draft/--no-draft", help="Mark the release payload as draft."),
    push: bool | None = typer.Option(None, "--push/--no-push", help="Push the new tag to the remote."),
    payload: Path | None = typer.Option(
        None, "--payload", help="Write the release-creation payload (JSON) to this file."
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would happen, change nothing."),
) -> None:
    """Bump the version, update the changelog, commit and tag."""
    spec = resolve_bump(bump, version)
    if spec is None:
        exit_usage("missing bump: give patch, minor, major or --version X.Y.Z")

    cli = build_context(ctx)
    console = cli.console
    config = cli.config

    result = run_create_release(
        cli.repository,
        console=console,
        root=cli.root,
        changelog_path=cli.root / config.changelog,
        bump=spec,
        now=now(),
        tag_prefix=config.tag_prefix,
        remote=config.remote,
        message=message,
        draft=config.draft if draft is None else draft,
        push=config.push if push is None else push,
        dry_run=dry_run,
        version_file=cli.root / config.version_file if config.version_file else None,
    )
    if isinstance(result, Err):
        fail(result.error, console)
    created = result.value

    if dry_run:
        console.header(created.notes.changelog_section.splitlines()[0])
        console.print(created.notes.changelog_section, Style.DIM)

    if payload is not None:
        body = json.dumps(created.payload.to_dict(), indent=2, ensure_ascii=False) + "\n"
        if dry_run:
            console.info(f"dry run: would write release payload to {payload}")
        else:
            write_output(payload, body, console)
            console.success(f"release payload written to {payload}")

    if not dry_run:
        console.success(f"released {created.payload.tag_name}")
