"""Root logger configuration shared by the CLI and the GUI."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "SHIPLIST_LOG_LEVEL"

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DEFAULT_DATEFMT = "%H:%M:%S"


def coerce_level(value: str | int | None, fallback: int = logging.INFO) -> int:
    """
    Turn a level name or number into a logging level.

    Unknown names fall back to ``fallback``.
    """
    if value is None:
        return fallback
    if isinstance(value, int):
        return value
    text = value.strip()
    if not text:
        return fallback
    if text.isdigit():
        return int(text)
    candidate = getattr(logging, text.upper(), None)
    if isinstance(candidate, int):
        return candidate
    return fallback


def configure_root(level: str | int | None = None) -> int:
    """
    Configure the root logger with a compact format.

    An explicit ``level`` wins over ``SHIPLIST_LOG_LEVEL``; INFO otherwise.

    Returns
    -------
    int
        The effective level.
    """
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV)
    effective = coerce_level(level, logging.INFO)

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=effective, format=_DEFAULT_FORMAT, datefmt=_DEFAULT_DATEFMT)
    root.setLevel(effective)
    return effective
