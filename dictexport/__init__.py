"""Dictionary extraction and multi-language lookup table export."""

__version__ = "0.1.0"
