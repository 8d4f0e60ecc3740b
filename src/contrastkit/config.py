"""Run configuration and its JSON loader."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from contrastkit.errors import ConfigError
from contrastkit.ignore import IgnoreConfig

__all__ = ["ContrastConfig", "load_config", "LEVELS", "DEFAULT_INCLUDE"]

LEVELS = ("aa", "aaa")
DEFAULT_INCLUDE = (".astro", ".html", ".htm")


@dataclass(frozen=True)
class ContrastConfig:
    css_files: tuple[str, ...] = ()
    token_files: tuple[str, ...] = ()
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    utility_classes: bool = True
    level: str = "aa"  # "aa" or "aaa"
    max_workers: int | None = None
    include: tuple[str, ...] = DEFAULT_INCLUDE

    def __post_init__(self) -> None:
        if self.level not in LEVELS:
            raise ConfigError(f"level must be one of {', '.join(LEVELS)}, got {self.level!r}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigError(f"max_workers must be at least 1, got {self.max_workers}")

    def merged(self, **overrides: Any) -> ContrastConfig:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _string_tuple(data: dict[str, Any], key: str) -> tuple[str, ...]:
    value = data.get(key, [])
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{key} must be a list of strings")
    return tuple(value)


def _ignore_config(data: Any) -> IgnoreConfig:
    if data is None:
        return IgnoreConfig()
    if not isinstance(data, dict):
        raise ConfigError("ignore must be an object")
    unknown = set(data) - {"colors", "pairs", "selectors"}
    if unknown:
        raise ConfigError(f"Unknown ignore keys: {', '.join(sorted(unknown))}")

    pairs: list[tuple[str, str]] = []
    for entry in data.get("pairs", []):
        if isinstance(entry, dict) and {"foreground", "background"} <= set(entry):
            pairs.append((str(entry["foreground"]), str(entry["background"])))
        elif isinstance(entry, list) and len(entry) == 2:
            pairs.append((str(entry[0]), str(entry[1])))
        else:
            raise ConfigError(f"Invalid ignore pair: {entry!r}")

    return IgnoreConfig(
        colors=_string_tuple(data, "colors"),
        pairs=tuple(pairs),
        selectors=_string_tuple(data, "selectors"),
    )


# JSON key -> dataclass field, for the camelCase spellings.
_ALIASES = {
    "cssFiles": "css_files",
    "tokenFiles": "token_files",
    "utilityClasses": "utility_classes",
    "maxWorkers": "max_workers",
}


def load_config(path: str | Path) -> ContrastConfig:
    """Load a :class:`ContrastConfig` from a JSON file.

    Relative ``css_files`` and ``token_files`` entries are resolved against
    the directory holding the config file. Raises :class:`ConfigError` for a
    missing or malformed file and for unknown keys.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain an object")

    data = {_ALIASES.get(key, key): value for key, value in data.items()}
    known = {f.name for f in fields(ContrastConfig)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

    base = path.parent
    kwargs: dict[str, Any] = {}
    for key in ("css_files", "token_files"):
        if key in data:
            kwargs[key] = tuple(str(base / p) for p in _string_tuple(data, key))
    if "include" in data:
        kwargs["include"] = _string_tuple(data, "include")
    if "ignore" in data:
        kwargs["ignore"] = _ignore_config(data["ignore"])
    if "utility_classes" in data:
        if not isinstance(data["utility_classes"], bool):
            raise ConfigError("utility_classes must be true or false")
        kwargs["utility_classes"] = data["utility_classes"]
    if "level" in data:
        kwargs["level"] = str(data["level"]).lower()
    if "max_workers" in data:
        if data["max_workers"] is not None and not isinstance(data["max_workers"], int):
            raise ConfigError("max_workers must be an integer")
        kwargs["max_workers"] = data["max_workers"]
    return ContrastConfig(**kwargs)
