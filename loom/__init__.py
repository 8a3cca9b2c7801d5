"""Timeline-based music sequencing core."""

__version__ = "0.1.0"