"""Simple Docker App: a welcome endpoint and a health probe."""

__version__ = "1.0.0"
