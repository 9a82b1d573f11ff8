"""Client-side engine for the resume screener dashboard."""

__version__ = "0.3.0"
