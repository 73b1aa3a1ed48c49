"""Version information for seqcite."""

__version__ = "0.4.0"
