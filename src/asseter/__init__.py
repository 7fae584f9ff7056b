"""
HTML asset tag builders and instance lifecycle registries.
"""

from importlib import metadata as _metadata

try:
    __version__ = _metadata.version("asseter")
except _metadata.PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = ["__version__"]
