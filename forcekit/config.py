"""Discovery and loading of the TOML scripts kept in a project's .force/ directory."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

FORCE_DIR_NAME = ".force"

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


class ConfigError(Exception):
    """Raised when the .force/ directory or one of its scripts cannot be used."""


@dataclass(frozen=True)
class ScriptMeta:
    """Ordering information for a script."""

    category: str
    priority: int | None = None


@dataclass(frozen=True)
class ScriptCommand:
    """A shell command with an optional human-readable description."""

    run: str
    description: str | None = None


@dataclass(frozen=True)
class Script:
    """A parsed script file: metadata, an up command and an optional down command."""

    meta: ScriptMeta
    up: ScriptCommand
    down: ScriptCommand | None = None


@dataclass(frozen=True)
class LoadedScript:
    """A script together with the name taken from its file."""

    name: str
    script: Script

    @property
    def sort_key(self) -> tuple[str, int, str]:
        """Category, then priority (default 0), then file name."""
        priority = self.script.meta.priority
        return (self.script.meta.category, 0 if priority is None else priority, self.name)


def _table(data: dict[str, Any], key: str, *, required: bool) -> dict[str, Any] | None:
    if key not in data:
        if required:
            raise ConfigError(f"missing field `{key}`")
        return None
    value = data[key]
    if not isinstance(value, dict):
        raise ConfigError(f"invalid type for `{key}`: expected a table")
    return value


def _string(data: dict[str, Any], key: str, *, required: bool) -> str | None:
    if key not in data:
        if required:
            raise ConfigError(f"missing field `{key}`")
        return None
    value = data[key]
    if not isinstance(value, str):
        raise ConfigError(f"invalid type for `{key}`: expected a string")
    return value


def _priority(data: dict[str, Any]) -> int | None:
    if "priority" not in data:
        return None
    value = data["priority"]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError("invalid type for `priority`: expected an integer")
    if not _I32_MIN <= value <= _I32_MAX:
        raise ConfigError(f"invalid value for `priority`: {value} is out of range")
    return value


def _command(table: dict[str, Any]) -> ScriptCommand:
    return ScriptCommand(
        run=_string(table, "run", required=True),
        description=_string(table, "description", required=False),
    )


def parse_script(text: str) -> Script:
    """Parse the text of a script file, raising ConfigError if it is invalid."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(str(exc)) from exc

    meta_table = _table(data, "meta", required=True)
    up_table = _table(data, "up", required=True)
    down_table = _table(data, "down", required=False)

    meta = ScriptMeta(
        category=_string(meta_table, "category", required=True),
        priority=_priority(meta_table),
    )
    return Script(
        meta=meta,
        up=_command(up_table),
        down=None if down_table is None else _command(down_table),
    )


def find_force_dir(start: str | Path | None = None) -> Path:
    """Return the nearest .force/ directory at or above ``start`` (default: cwd)."""
    current = Path.cwd() if start is None else Path(start).absolute()
    for directory in (current, *current.parents):
        candidate = directory / FORCE_DIR_NAME
        if candidate.is_dir():
            return candidate
    raise ConfigError(".force/ directory not found. Run 'force init' to create one.")


def load_scripts(force_dir: str | Path) -> list[LoadedScript]:
    """Load every ``*.toml`` script in ``force_dir``, sorted in run order."""
    scripts: list[LoadedScript] = []
    for path in Path(force_dir).iterdir():
        if path.suffix != ".toml":
            continue
        content = path.read_text(encoding="utf-8")
        try:
            script = parse_script(content)
        except ConfigError as exc:
            raise ConfigError(f"Failed to parse {path}: {exc}") from exc
        scripts.append(LoadedScript(name=path.stem or "unknown", script=script))

    scripts.sort(key=lambda loaded: loaded.sort_key)
    return scripts