"""Block explorer core: block detail, summaries and date-windowed listings."""

__version__ = "0.1.0"
