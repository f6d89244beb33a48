"""Descriptor-driven loading of tabular data for decision-forest training."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("forest-data")
except PackageNotFoundError:  # pragma: no cover - fallback for local usage before install
    __version__ = "0.0.0"

__all__ = ["__version__"]
