"""Edge Notes: a minimal multi-page note editor on a key-value store."""

__version__ = "0.1.0"
