"""Fully-qualified symbol name index with IDE-style "go to symbol" search."""

from .__version__ import __version__

__all__ = ["__version__"]
