from __future__ import annotations

from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

DEFAULT_CONFIG_NAME = "propsort.toml"
SECTION_NAME = "sort_props"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]

_KEY_ALIASES = {
    "reactPropsFirst": "react_props_first",
    "reactPropsList": "react_props_list",
}


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def _prop_names(value: TomlValue) -> list[str]:
    """Accept a list of names or one comma-separated string."""
    entries = [value] if isinstance(value, str) else value
    if not isinstance(entries, list):
        return []
    names: list[str] = []
    for entry in entries:
        if isinstance(entry, str):
            names.extend(part.strip() for part in entry.split(",") if part.strip())
    return names


def _as_bool(value: TomlValue) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return False


def sort_props_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    """Return the ``[sort_props]`` table normalized to snake_case option keys."""
    data = load_config(root=root, config_path=config_path)
    section = data.get(SECTION_NAME, {})
    if not isinstance(section, dict):
        return {}
    out: TomlTable = {}
    for key, value in section.items():
        name = _KEY_ALIASES.get(key, key)
        if name == "react_props_first":
            out[name] = _as_bool(value)
        elif name == "react_props_list":
            out[name] = _prop_names(value)
        else:
            # Left for option validation to reject.
            out[name] = value
    return out


def merge_payload(payload: TomlTable, defaults: TomlTable) -> TomlTable:
    merged = dict(defaults)
    for key, value in payload.items():
        if value is None:
            continue
        merged[key] = value
    return merged
