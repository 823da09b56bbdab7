"""chordscan - chord recognition for decoded audio recordings."""

__version__ = "0.1.0"
