"""Building blocks for probing TCP ports and turning state changes into quiet alerts."""

__version__ = "0.1.0"