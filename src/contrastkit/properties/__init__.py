from contrastkit.properties.resolver import (
    MAX_DEPTH,
    merge_properties,
    resolve_custom_property,
    resolve_declarations,
)

__all__ = ["MAX_DEPTH", "resolve_custom_property", "resolve_declarations", "merge_properties"]
