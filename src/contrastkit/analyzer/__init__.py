from contrastkit.analyzer.core import Analyzer, analyze_file, analyze_files, discover_files
from contrastkit.analyzer.linked import load_linked_css, resolve_reference

__all__ = [
    "Analyzer",
    "analyze_file",
    "analyze_files",
    "discover_files",
    "load_linked_css",
    "resolve_reference",
]
