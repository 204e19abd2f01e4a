"""Logging setup shared by the console scripts."""

from __future__ import annotations

import logging
import os

DEBUG_ENV_VAR = "SKARA_DEBUG"
_TRUTHY = {"1", "true", "yes", "on"}


def configure_logging() -> None:
    """Enable debug logging to stderr when SKARA_DEBUG is set."""
    if os.environ.get(DEBUG_ENV_VAR, "").strip().lower() in _TRUTHY:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
