"""Building blocks for a two-dimensional free-surface flow solver."""

__version__ = "0.1.0"