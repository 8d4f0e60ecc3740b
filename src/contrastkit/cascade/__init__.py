from contrastkit.cascade.resolver import (
    ROOT_SELECTORS,
    MatchedDeclaration,
    find_best_declaration,
    find_root_background,
)

__all__ = ["ROOT_SELECTORS", "MatchedDeclaration", "find_best_declaration", "find_root_background"]
