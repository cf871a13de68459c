"""MarkForge: deterministic procedural logo-mark generation."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("markforge")
except PackageNotFoundError:  # pragma: no cover - fallback for editable installs
    __version__ = "0.1.0"

__all__ = ["__version__"]
