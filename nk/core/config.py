"""Typed configuration loading.

Configuration is optional. It is read from `nk.toml` at the repository root,
or from the `[tool.nk]` table of `pyproject.toml`; missing keys fall back to
the defaults on `Config`.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "Config",
    "ConfigError",
    "load_config",
    "load_repo_config",
]

CONFIG_FILE_NAME = "nk.toml"
PYPROJECT_FILE_NAME = "pyproject.toml"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """Release settings.

    Attributes:
        changelog: Changelog path, relative to the repository root.
        tag_prefix: Prefix prepended to the version when naming new tags.
        remote: Git remote used for links and pushing tags.
        notes_dir: Directory for `RELEASE_NOTES_<tag>.md` files.
        draft: Mark prepared release payloads as drafts.
        push: Push newly created tags to `remote`.
        version_file: Manifest whose package version is bumped with each
            release (`pyproject.toml`, `Cargo.toml`), relative to the root.
    """

    changelog: str = "CHANGELOG.md"
    tag_prefix: str = "v"
    remote: str = "origin"
    notes_dir: str = "."
    draft: bool = False
    push: bool = False
    version_file: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a parsed TOML table.

        Raises:
            TypeError: If a key holds a value of the wrong type.
        """
        defaults = cls()
        tag_prefix = data.get("tag_prefix")
        if tag_prefix is not None and not isinstance(tag_prefix, str):
            raise TypeError("'tag_prefix' must be a string")
        return cls(
            changelog=get_str(data, "changelog") or defaults.changelog,
            # "" is a valid prefix: tags named 1.2.3
            tag_prefix=defaults.tag_prefix if tag_prefix is None else tag_prefix.strip(),
            remote=get_str(data, "remote") or defaults.remote,
            notes_dir=get_str(data, "notes_dir") or defaults.notes_dir,
            draft=_bool_or(get_bool(data, "draft"), defaults.draft),
            push=_bool_or(get_bool(data, "push"), defaults.push),
            version_file=get_str(data, "version_file"),
        )


def _bool_or(value: bool | None, default: bool) -> bool:
    return default if value is None else value


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and syntax errors."""
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load configuration from a dedicated `nk.toml` file."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except TypeError as e:
        return Err(ConfigError(f"Invalid config: {e}", path=path))


def load_repo_config(root: Path) -> Result[Config, ConfigError]:
    """Load configuration for the repository rooted at `root`.

    `nk.toml` wins over `[tool.nk]` in `pyproject.toml`. When neither is
    present the defaults are returned.
    """
    dedicated = root / CONFIG_FILE_NAME
    if dedicated.is_file():
        return load_config(dedicated)

    pyproject = root / PYPROJECT_FILE_NAME
    if not pyproject.is_file():
        return Ok(Config())

    parsed = _parse_toml(pyproject)
    if isinstance(parsed, Err):
        return parsed

    try:
        tool = get_table(parsed.value, "tool") or {}
        section = get_table(tool, "nk")
        if section is None:
            return Ok(Config())
        return Ok(Config.from_dict(section))
    except TypeError as e:
        return Err(ConfigError(f"Invalid [tool.nk] config: {e}", path=pyproject))
