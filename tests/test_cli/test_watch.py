"""Tests for the file-change handling behind ``check --watch``."""

from pathlib import Path

import pytest
from watchdog.events import DirModifiedEvent, FileCreatedEvent, FileModifiedEvent, FileMovedEvent

from contrastkit.cli.watch import ChangeHandler, watch_roots
from contrastkit.config import DEFAULT_INCLUDE


@pytest.fixture()
def handler() -> ChangeHandler:
    return ChangeHandler(DEFAULT_INCLUDE)


class TestChangeHandler:
    @pytest.mark.parametrize("name", ["page.html", "styles/site.css", "tokens.json", "theme.YAML"])
    def test_relevant_changes_flag_a_rerun(self, handler: ChangeHandler, tmp_path: Path, name: str) -> None:
        handler.dispatch(FileModifiedEvent(str(tmp_path / name)))
        assert handler.pending.is_set()

    def test_created_files_count(self, handler: ChangeHandler, tmp_path: Path) -> None:
        handler.dispatch(FileCreatedEvent(str(tmp_path / "new.html")))
        assert handler.pending.is_set()

    def test_rename_to_a_watched_suffix(self, handler: ChangeHandler, tmp_path: Path) -> None:
        handler.dispatch(FileMovedEvent(str(tmp_path / "page.tmp"), str(tmp_path / "page.html")))
        assert handler.pending.is_set()

    @pytest.mark.parametrize("name", ["notes.txt", "image.png", "node_modules/pkg/style.css", ".git/index.html"])
    def test_unrelated_changes_are_ignored(self, handler: ChangeHandler, tmp_path: Path, name: str) -> None:
        handler.dispatch(FileModifiedEvent(str(tmp_path / name)))
        assert not handler.pending.is_set()

    def test_directory_events_are_ignored(self, handler: ChangeHandler, tmp_path: Path) -> None:
        handler.dispatch(DirModifiedEvent(str(tmp_path / "styles.css")))
        assert not handler.pending.is_set()


class TestWatchRoots:
    def test_file_and_its_directory_are_watched_once(self, tmp_path: Path) -> None:
        page = tmp_path / "page.html"
        page.write_text("<p>x</p>")
        assert watch_roots([page, tmp_path]) == [tmp_path.resolve()]

    def test_distinct_directories(self, tmp_path: Path) -> None:
        (tmp_path / "a").mkdir()
        (tmp_path / "b").mkdir()
        roots = watch_roots([tmp_path / "a", tmp_path / "b"])
        assert roots == [(tmp_path / "a").resolve(), (tmp_path / "b").resolve()]
