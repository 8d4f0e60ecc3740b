"""Design-token readers: flatten token files into a custom-property map.

JSON (``.json``, ``.tokens``) and YAML files follow the Design Tokens
Community Group layout (``$value``/``$type``, with the legacy ``value``/
``type`` spelling also accepted). A token at ``color.brand.primary`` becomes
``--color-brand-primary``. CSS files contribute the custom properties of
their ``:root`` and ``html`` rules.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Iterable, Mapping

import yaml

from contrastkit.color.spaces import clamp_byte, round_half_up
from contrastkit.errors import TokenFileError
from contrastkit.stylesheet import parse_stylesheet

__all__ = [
    "MAX_ALIAS_DEPTH",
    "flatten_tokens",
    "parse_css_tokens",
    "read_token_file",
    "read_token_files",
]

logger = logging.getLogger(__name__)

MAX_ALIAS_DEPTH = 10

_ALIAS_RE = re.compile(r"\{([^{}]+)\}")
_COLOR_LIKE_RE = re.compile(r"(#|rgb|hsl|hwb|oklch|oklab|lab|lch|color-mix)", re.IGNORECASE)


def _token_parts(node: Mapping[str, Any]) -> tuple[Any, Any] | None:
    if "$value" in node:
        return node["$value"], node.get("$type")
    if "value" in node:
        return node["value"], node.get("type")
    return None


def _is_color_like(value: Any) -> bool:
    if isinstance(value, Mapping):
        return True
    if not isinstance(value, str):
        return False
    text = value.strip()
    return bool(_COLOR_LIKE_RE.match(text) or _ALIAS_RE.fullmatch(text))


def _color_text(value: Any) -> str | None:
    """Turn a token value into CSS color text."""
    if isinstance(value, str):
        return value.strip()
    if not isinstance(value, Mapping):
        return None
    if isinstance(value.get("hex"), str):
        return value["hex"]
    components = value.get("components")
    if value.get("colorSpace") == "srgb" and isinstance(components, list) and len(components) >= 3:
        try:
            channels = [clamp_byte(float(c) * 255) for c in components[:3]]
        except (TypeError, ValueError):
            return None
        text = "#" + "".join(f"{c:02x}" for c in channels)
        alpha = value.get("alpha")
        if isinstance(alpha, (int, float)) and alpha < 1:
            text += f"{round_half_up(max(0.0, float(alpha)) * 255):02x}"
        return text
    return None


def _flatten(
    node: Mapping[str, Any],
    path: list[str],
    inherited_type: str | None,
    out: dict[str, str],
) -> None:
    group_type = node.get("$type", inherited_type)
    for key, child in node.items():
        name = str(key)
        if name.startswith("$") or not isinstance(child, Mapping):
            continue
        child_path = [*path, name]
        parts = _token_parts(child)
        if parts is None:
            if child.get("$type", group_type) in (None, "color"):
                _flatten(child, child_path, group_type, out)
            continue

        raw, token_type = parts
        token_type = token_type or group_type
        if not (token_type == "color" or (token_type is None and _is_color_like(raw))):
            logger.debug("Skipping non-color token %s", ".".join(child_path))
            continue
        text = _color_text(raw)
        if text is not None:
            out[".".join(child_path)] = text


def _resolve_alias(value: str, tokens: Mapping[str, str], depth: int = 0) -> str:
    match = _ALIAS_RE.fullmatch(value.strip())
    if match is None or depth >= MAX_ALIAS_DEPTH:
        return value
    target = tokens.get(match.group(1))
    if target is None:
        return value
    return _resolve_alias(target, tokens, depth + 1)


def flatten_tokens(data: Mapping[str, Any]) -> dict[str, str]:
    """Flatten a token document into ``--path-to-token -> value``.

    Only color tokens are kept: an explicit or inherited ``color`` type, or
    no type and a color-looking value. ``{group.token}`` aliases resolve
    through up to :data:`MAX_ALIAS_DEPTH` hops; an alias that cannot be
    resolved is kept as written.
    """
    flat: dict[str, str] = {}
    _flatten(data, [], None, flat)
    return {
        "--" + path.replace(".", "-"): _resolve_alias(value, flat)
        for path, value in flat.items()
    }


def parse_css_tokens(source: str) -> dict[str, str]:
    return dict(parse_stylesheet(source).custom_properties)


def read_token_file(path: str | Path) -> dict[str, str]:
    """Read one token file, choosing the format by extension.

    Raises :class:`TokenFileError` when the file cannot be read or decoded.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TokenFileError(f"Cannot read token file {path}: {e}") from e

    suffix = path.suffix.lower()
    if suffix == ".css":
        return parse_css_tokens(content)

    try:
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        else:
            data = json.loads(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise TokenFileError(f"Invalid token file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise TokenFileError(f"Token file {path} must contain an object at the top level")
    return flatten_tokens(data)


def read_token_files(paths: Iterable[str | Path]) -> dict[str, str]:
    """Read several token files; later files win on name collisions."""
    merged: dict[str, str] = {}
    for path in paths:
        merged.update(read_token_file(path))
    return merged
