"""File system operations that report their results as JSON-ready dictionaries."""

__version__ = "0.1.0"
__all__ = ["operations", "cli"]