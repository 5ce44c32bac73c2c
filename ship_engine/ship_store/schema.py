"""SQLite schema for ShipStore.

Notes
-----
``seq`` is assigned at insert time (before commit) so that pending and
committed records share one insertion order.
"""

from __future__ import annotations

SCHEMA_V1 = """
PRAGMA journal_mode = WAL;

CREATE TABLE IF NOT EXISTS store_meta (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS ships (
    ship_id  TEXT PRIMARY KEY,
    seq      INTEGER NOT NULL UNIQUE,
    name     TEXT NULL,
    universe TEXT NULL
);

CREATE INDEX IF NOT EXISTS idx_ships_seq ON ships(seq);
"""

SCHEMA_VERSION = "1"
