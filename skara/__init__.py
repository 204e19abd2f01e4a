"""Front-end tooling for the skara suite of version-control commands."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("skara-cli")
except PackageNotFoundError:
    __version__ = "unknown"
