"""Bus and flight trip reservation service."""

__version__ = "1.0.0"
