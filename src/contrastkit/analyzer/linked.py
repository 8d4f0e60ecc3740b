"""Follow stylesheet references from a document to the CSS files they name."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from contrastkit.stylesheet import Stylesheet, parse_stylesheet

__all__ = ["load_linked_css", "resolve_reference"]

logger = logging.getLogger(__name__)

_EXTERNAL_PREFIXES = ("http://", "https://", "//", "data:")


def resolve_reference(href: str, base_dir: str | Path) -> Path | None:
    """Map an href or import target to a local path, None for external URLs."""
    href = href.strip()
    if not href or href.startswith(_EXTERNAL_PREFIXES):
        return None
    for sep in ("?", "#"):
        href = href.split(sep, 1)[0]
    if not href:
        return None
    return (Path(base_dir) / href).resolve()


def load_linked_css(
    hrefs: Iterable[str],
    base_dir: str | Path,
    seen: set[Path] | None = None,
) -> Stylesheet:
    """Read every local stylesheet in *hrefs*, following ``@import`` chains.

    Each file's rules come before the rules of the files it imports. A file
    is read at most once per call chain, which also breaks import cycles.
    Unreadable files are skipped.
    """
    seen = set() if seen is None else seen
    combined = Stylesheet()
    for href in hrefs:
        path = resolve_reference(href, base_dir)
        if path is None or path in seen:
            continue
        seen.add(path)

        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Skipping linked stylesheet %s: %s", path, e)
            continue

        sheet = parse_stylesheet(source)
        logger.debug("Loaded %d rule(s) from %s", len(sheet.rules), path)
        combined = combined + Stylesheet(sheet.rules, sheet.custom_properties)
        if sheet.imports:
            combined = combined + load_linked_css(sheet.imports, path.parent, seen)
    return combined
