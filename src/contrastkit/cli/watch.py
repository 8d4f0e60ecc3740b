"""Re-run a check whenever a watched markup, CSS or token file changes."""

from __future__ import annotations

import logging
import os
import threading
import time
from pathlib import Path
from typing import Callable, Iterable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)

# Style and token files trigger a re-run along with the markup suffixes.
WATCHED_SUFFIXES = frozenset({".css", ".json", ".tokens", ".yaml", ".yml"})
_SKIPPED_DIRS = frozenset({"node_modules", ".git", "dist", ".astro"})


class ChangeHandler(FileSystemEventHandler):
    """Flags a pending re-run when a relevant file changes."""

    def __init__(self, suffixes: Iterable[str]) -> None:
        super().__init__()
        self.suffixes = {s.lower() for s in suffixes} | WATCHED_SUFFIXES
        self.pending = threading.Event()

    def is_relevant(self, path: Path) -> bool:
        if _SKIPPED_DIRS.intersection(path.parts):
            return False
        return path.suffix.lower() in self.suffixes

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        for raw in (event.src_path, getattr(event, "dest_path", "")):
            if raw and self.is_relevant(Path(os.fsdecode(raw))):
                logger.debug("Change detected: %s", os.fsdecode(raw))
                self.pending.set()
                return


def watch_roots(paths: Iterable[str | Path]) -> list[Path]:
    """Directories to observe: each directory argument, or a file's parent."""
    roots: list[Path] = []
    for raw in paths:
        path = Path(raw).resolve()
        root = path if path.is_dir() else path.parent
        if root not in roots:
            roots.append(root)
    return roots


def watch(
    paths: Iterable[str | Path],
    suffixes: Iterable[str],
    rerun: Callable[[], None],
    delay: float = 0.3,
) -> None:
    """Block until interrupted, calling *rerun* after each burst of changes."""
    handler = ChangeHandler(suffixes)
    observer = Observer()
    for root in watch_roots(paths):
        observer.schedule(handler, str(root), recursive=True)
    observer.start()
    try:
        while True:
            if not handler.pending.wait(timeout=1.0):
                continue
            # Let editors finish writing before reading the files back.
            time.sleep(delay)
            handler.pending.clear()
            rerun()
    except KeyboardInterrupt:
        pass
    finally:
        observer.stop()
        observer.join()
