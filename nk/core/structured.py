"""Helpers for reading untyped TOML tables.

Use these at the boundary where parsed TOML enters the program. Each getter
distinguishes "missing" (None) from "present but the wrong type" (TypeError),
so bad configuration is reported instead of silently replaced by defaults.
"""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    """Return True if obj is a dict with string keys."""
    if not isinstance(obj, dict):
        return False
    d = cast(dict[object, object], obj)
    return all(isinstance(k, str) for k in d.keys())


def as_str_dict(obj: object) -> StrDict | None:
    if is_str_dict(obj):
        return obj
    return None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    """Get a nested table from a mapping, or None when missing."""
    value = table.get(key)
    if value is None:
        return None
    nested = as_str_dict(value)
    if nested is None:
        raise TypeError(f"'{key}' must be a table")
    return nested


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Get a string value, stripped. Empty strings count as missing."""
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"'{key}' must be a string")
    s = value.strip()
    return s or None


def get_bool(table: Mapping[str, object], key: str) -> bool | None:
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, bool):
        raise TypeError(f"'{key}' must be true or false")
    return value
