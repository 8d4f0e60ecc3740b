"""Per-file orchestration: markup in, filtered contrast results out."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable

from contrastkit.analyzer.linked import load_linked_css
from contrastkit.config import ContrastConfig
from contrastkit.contrast import evaluate
from contrastkit.errors import ConfigError, MarkupParseError
from contrastkit.ignore import IgnoreFilter
from contrastkit.markup import parse_markup
from contrastkit.model.diagnostic import AnalysisError, ErrorKind
from contrastkit.model.pair import ContrastResult, FileAnalysis, FileStats
from contrastkit.pairing import analyze_elements
from contrastkit.properties import merge_properties
from contrastkit.stylesheet import Stylesheet, parse_stylesheet
from contrastkit.tokens import read_token_files
from contrastkit.utilities import TailwindResolver

__all__ = ["Analyzer", "analyze_file", "analyze_files", "discover_files"]

logger = logging.getLogger(__name__)

_SKIPPED_DIRS = frozenset({"node_modules", ".git", "dist", ".astro"})


class Analyzer:
    """Runs the resolution engine over markup files.

    Everything read from the configuration (design tokens, manually supplied
    CSS files, ignore rules) is loaded once here and shared read-only by
    every file, so one instance may analyze files from several threads.

    Raises :class:`ConfigError` when a configured CSS file cannot be read and
    :class:`TokenFileError` when a token file cannot be decoded.
    """

    def __init__(self, config: ContrastConfig | None = None) -> None:
        self.config = config or ContrastConfig()
        self.tokens = read_token_files(self.config.token_files)
        self.stylesheet = self._load_css_files(self.config.css_files)
        self.ignore = IgnoreFilter(self.config.ignore)
        self.utilities = TailwindResolver() if self.config.utility_classes else None

    @staticmethod
    def _load_css_files(paths: Iterable[str]) -> Stylesheet:
        combined = Stylesheet()
        seen: set[Path] = set()
        for raw in paths:
            path = Path(raw).resolve()
            try:
                source = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise ConfigError(f"Cannot read CSS file {raw}: {e}") from e
            seen.add(path)
            sheet = parse_stylesheet(source)
            combined = combined + Stylesheet(sheet.rules, sheet.custom_properties)
            if sheet.imports:
                combined = combined + load_linked_css(sheet.imports, path.parent, seen)
        return combined

    # ------------------------------------------------------------------
    # Single file
    # ------------------------------------------------------------------

    def analyze_file(self, path: str | Path) -> FileAnalysis:
        """Read and analyze one file; read failures become a parse diagnostic."""
        path = Path(path)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return _parse_failure(str(path), e)
        return self.analyze_source(source, str(path), base_dir=path.parent)

    def analyze_source(
        self,
        source: str,
        file_path: str = "<string>",
        base_dir: str | Path | None = None,
    ) -> FileAnalysis:
        """Analyze markup text.

        Linked stylesheets are looked up relative to *base_dir*, or to the
        current directory when it is not given.
        """
        logger.debug("Analyzing %s", file_path)
        try:
            document = parse_markup(source, path=file_path)
        except MarkupParseError as e:
            return _parse_failure(file_path, e)

        linked = load_linked_css(
            [*document.linked_css, *document.stylesheet.imports],
            base_dir if base_dir is not None else Path.cwd(),
        )
        # Later sources win: tokens < linked CSS < configured CSS < the document itself.
        properties = merge_properties(
            self.tokens,
            linked.custom_properties,
            self.stylesheet.custom_properties,
            document.stylesheet.custom_properties,
        )
        rules = linked.rules + self.stylesheet.rules + document.stylesheet.rules
        pairs = analyze_elements(document.tree, rules, properties, self.utilities)

        errors: list[AnalysisError] = []
        evaluated: list[ContrastResult] = []
        for pair in pairs:
            verdict = evaluate(pair)
            if verdict is None:
                errors.append(
                    AnalysisError(
                        ErrorKind.COLOR_RESOLVE_ERROR,
                        f"Could not resolve color: fg={pair.foreground.original}, "
                        f"bg={pair.background.original}",
                        element=pair.element,
                    )
                )
                continue
            evaluated.append(ContrastResult(file_path, pair, verdict))

        kept = [r for r in evaluated if not self.ignore.should_ignore(r.pair)]
        stats = FileStats(
            elements_analyzed=len(document.tree),
            pairs_checked=len(evaluated),
            ignored=len(evaluated) - len(kept),
            passing=sum(1 for r in kept if r.meets_aa),
            aa_failing=sum(1 for r in kept if not r.meets_aa),
            aaa_only_failing=sum(1 for r in kept if r.meets_aa and not r.meets_aaa),
            unresolvable=len(errors),
        )
        logger.info(
            "%s: %d pair(s) checked, %d failing AA, %d unresolvable",
            file_path,
            stats.pairs_checked,
            stats.aa_failing,
            stats.unresolvable,
        )
        return FileAnalysis(file_path, tuple(kept), tuple(errors), stats)

    # ------------------------------------------------------------------
    # Many files
    # ------------------------------------------------------------------

    def analyze_files(self, paths: Iterable[str | Path]) -> list[FileAnalysis]:
        """Analyze *paths*, concurrently when ``max_workers`` allows.

        Results come back in the order the paths were given.
        """
        paths = list(paths)
        if self.config.max_workers == 1 or len(paths) <= 1:
            return [self.analyze_file(p) for p in paths]
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
            return list(pool.map(self.analyze_file, paths))


def _parse_failure(file_path: str, exc: Exception) -> FileAnalysis:
    logger.warning("Failed to parse %s: %s", file_path, exc)
    error = AnalysisError(ErrorKind.PARSE_ERROR, f"Failed to parse file: {exc}")
    return FileAnalysis(file_path, errors=(error,))


def discover_files(paths: Iterable[str | Path], include: Iterable[str]) -> list[Path]:
    """Expand directories into the files under them whose suffix is in *include*.

    Files named directly are kept whatever their suffix. Dependency and
    build directories are not descended into. The result is sorted per
    argument and free of duplicates.
    """
    suffixes = {s.lower() for s in include}
    found: list[Path] = []
    seen: set[Path] = set()
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            candidates = sorted(
                p
                for p in path.rglob("*")
                if p.is_file()
                and p.suffix.lower() in suffixes
                and not _SKIPPED_DIRS.intersection(p.relative_to(path).parts[:-1])
            )
        elif path.exists():
            candidates = [path]
        else:
            logger.warning("No such file or directory: %s", path)
            continue
        for candidate in candidates:
            if candidate not in seen:
                seen.add(candidate)
                found.append(candidate)
    return found


def analyze_file(path: str | Path, config: ContrastConfig | None = None) -> FileAnalysis:
    return Analyzer(config).analyze_file(path)


def analyze_files(
    paths: Iterable[str | Path], config: ContrastConfig | None = None
) -> list[FileAnalysis]:
    return Analyzer(config).analyze_files(paths)
