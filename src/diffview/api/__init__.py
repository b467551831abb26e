"""HTTP API for diffview."""

from .. import __version__

__all__ = ["__version__"]
