from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from nk.core.config import Config, load_repo_config
from nk.core.errors import ErrorCode
from nk.core.result import Err
from nk.git.repository import Repository
from nk.output.console import ConsoleProtocol, RichConsole
from nk.output.errors import error_exit_code, print_error


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    repo: Path
    verbose: bool = False


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    repository: Repository
    config: Config
    console: ConsoleProtocol


def global_options(ctx: typer.Context) -> GlobalOptions:
    obj = ctx.find_root().obj
    if isinstance(obj, GlobalOptions):
        return obj
    return GlobalOptions(repo=Path.cwd())


def build_context(ctx: typer.Context) -> CLIContext:
    """Locate the repository, load its config, set up the console.

    Exits with ENV_ERROR when the directory is not a git repository or the
    config is invalid.
    """
    options = global_options(ctx)
    console = RichConsole(verbose=options.verbose, timestamps=options.verbose)

    repository = Repository(options.repo)
    root_r = repository.root()
    if isinstance(root_r, Err):
        print_error(root_r.error, console)
        raise typer.Exit(code=error_exit_code(root_r.error))
    root = root_r.value

    config_r = load_repo_config(root)
    if isinstance(config_r, Err):
        print_error(config_r.error, console)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(
        root=root,
        repository=Repository(root),
        config=config_r.value,
        console=console,
    )
