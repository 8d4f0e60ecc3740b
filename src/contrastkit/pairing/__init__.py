from contrastkit.pairing.engine import HEADING_DEFAULTS, PairEngine, analyze_elements

__all__ = ["HEADING_DEFAULTS", "PairEngine", "analyze_elements"]
