"""Element markup parsing, dynamically typed values, widget parameters and a widget registry."""

__version__ = "0.1.0"

__all__ = ["variant", "params", "registry", "eml"]