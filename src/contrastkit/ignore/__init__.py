from contrastkit.ignore.filter import IgnoreConfig, IgnoreFilter

__all__ = ["IgnoreConfig", "IgnoreFilter"]
