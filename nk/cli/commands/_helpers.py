from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import NoReturn

import typer

from nk.core.config import ConfigError
from nk.core.errors import ErrorCode
from nk.output.console import ConsoleProtocol
from nk.output.errors import error_exit_code, print_error
from nk.platform.files import atomic_write_text
from nk.release.semver import BUMP_KINDS, BumpSpec, ExplicitVersion, parse_bump_spec
from nk.release.service import ReleaseError


def now() -> datetime:
    return datetime.now(UTC)


def exit_usage(message: str) -> NoReturn:
    typer.echo(f"error: {message}", err=True)
    raise typer.Exit(code=int(ErrorCode.USER_ERROR))


def fail(error: ReleaseError | ConfigError, console: ConsoleProtocol) -> NoReturn:
    print_error(error, console)
    raise typer.Exit(code=error_exit_code(error))


def resolve_bump(bump: str | None, version: str | None) -> BumpSpec | None:
    """Combine a bump argument and a `--version` override.

    `--version` wins over a bump kind; giving two different explicit
    versions is a usage error.
    """
    parsed = parse_bump_spec(bump) if bump is not None else None
    if version is None:
        return parsed
    if isinstance(parsed, ExplicitVersion) and parsed.spec != version.strip():
        exit_usage(f"conflicting versions: {parsed.spec} and --version {version}")
    return ExplicitVersion(version.strip())


def require_bump_kind(bump: str | None) -> None:
    if bump is not None and bump.strip().lower() not in BUMP_KINDS:
        exit_usage(f"invalid --bump: {bump} (expected one of: {', '.join(BUMP_KINDS)})")


def write_output(path: Path, content: str, console: ConsoleProtocol) -> None:
    try:
        atomic_write_text(path, content)
    except OSError as e:
        console.error(f"failed to write {path}: {e}")
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))


def notes_filename(tag: str) -> str:
    return f"RELEASE_NOTES_{tag.replace('/', '_')}.md"
