"""
Filesystem locations for ship list data.

All runtime data lives under a single "data root". This module is the only
place that decides where that root is.
"""

from __future__ import annotations

import os
from pathlib import Path

DATA_ROOT_ENV = "SHIPLIST_DATA_ROOT"
DB_FILENAME = "ships.sqlite"


def default_data_root() -> Path:
    """
    Resolve the default data root.

    Preference order:
    1) %SHIPLIST_DATA_ROOT% if set
    2) %LOCALAPPDATA% (Windows)
    3) %APPDATA% (Windows, roaming)
    4) $XDG_DATA_HOME
    5) ~/.local/share
    """
    explicit = os.environ.get(DATA_ROOT_ENV)
    if explicit:
        return Path(explicit)

    for var in ("LOCALAPPDATA", "APPDATA", "XDG_DATA_HOME"):
        base = os.environ.get(var)
        if base:
            return Path(base) / "shiplist"

    return Path.home() / ".local" / "share" / "shiplist"


def ship_store_db_path(data_root: Path | None) -> Path:
    """
    Return the canonical path of the SQLite database.

    Parameters
    ----------
    data_root:
        Optional override for the data root.

    Returns
    -------
    pathlib.Path
        ``<data_root>/ships.sqlite``.
    """
    root = default_data_root() if data_root is None else data_root
    return root / DB_FILENAME
