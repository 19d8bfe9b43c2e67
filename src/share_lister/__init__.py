"""Paged directory listing for Azure Files shares."""

__version__ = "0.1.0"
