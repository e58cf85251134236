"""Cached lookup of the Brandenburg forest-fire danger index per district."""

from waldbrandindex.version import __version__

__all__ = ["__version__"]
