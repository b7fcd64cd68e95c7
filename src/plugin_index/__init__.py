"""Discover plugins published in XML plugin registries."""

from plugin_index.version import __version__

__all__ = ["__version__"]
