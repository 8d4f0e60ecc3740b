from contrastkit.values.tree import (
    ValueNode,
    parse_value,
    serialize,
    split_arguments,
    strip_space,
)

__all__ = ["ValueNode", "parse_value", "serialize", "split_arguments", "strip_space"]
