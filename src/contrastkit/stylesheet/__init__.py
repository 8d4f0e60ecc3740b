from contrastkit.stylesheet.model import Stylesheet
from contrastkit.stylesheet.parser import IGNORE_MARKER, parse_stylesheet, split_selector_list

__all__ = ["Stylesheet", "parse_stylesheet", "split_selector_list", "IGNORE_MARKER"]
