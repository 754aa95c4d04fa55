"""String Analyzer Service - analyze, store and query strings."""

__version__ = "1.0.0"
