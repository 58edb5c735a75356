"""Cost and profit summaries for a construction contracting dashboard."""

__version__ = "0.1.0"
