"""Export a bookmark list to a single CSV document."""

__version__ = "0.1.0"
