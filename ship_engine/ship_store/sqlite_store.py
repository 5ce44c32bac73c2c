"""
SQLite implementation of ShipStore.

This module owns the on-disk persistence format for ship records.

Threading
---------
sqlite3 connections are not shared across threads. Every call opens its own
connection; the store object itself must be used from a single thread.

Transactions
------------
Inserted records are held in memory until ``commit``. A commit writes all of
them in one transaction, so readers see either none or all of a batch.
"""

from __future__ import annotations

import logging
import sqlite3
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from ..errors import PersistenceError
from ..paths import ship_store_db_path
from .api import Predicate, Ship, ShipStore, SortDescriptor
from .ordering import sort_ships
from .schema import SCHEMA_V1, SCHEMA_VERSION

logger = logging.getLogger(__name__)


def _row_to_ship(row: sqlite3.Row) -> Ship:
    return Ship(
        ship_id=str(row["ship_id"]),
        seq=int(row["seq"]),
        name=str(row["name"]) if row["name"] is not None else None,
        universe=str(row["universe"]) if row["universe"] is not None else None,
    )


@dataclass(slots=True)
class SqliteShipStore(ShipStore):
    """
    SQLite-backed ShipStore.

    Parameters
    ----------
    db_path:
        Path to the SQLite database.

    Notes
    -----
    The database file is created if absent. The parent directory is created as
    needed.
    """

    db_path: Path
    _pending: list[Ship] = field(default_factory=list, init=False, repr=False)
    _next_seq: int = field(default=1, init=False, repr=False)

    def __post_init__(self) -> None:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            with self._connect() as conn:
                conn.executescript(SCHEMA_V1)
                conn.execute(
                    "INSERT OR IGNORE INTO store_meta(key, value) VALUES('schema_version', ?)",
                    (SCHEMA_VERSION,),
                )
                row = conn.execute("SELECT COALESCE(MAX(seq), 0) AS max_seq FROM ships").fetchone()
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Could not open ship store at {self.db_path}: {e}") from e
        self._next_seq = int(row["max_seq"]) + 1

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    @property
    def pending_count(self) -> int:
        """See ShipStore.pending_count."""
        return len(self._pending)

    def insert_record(self, name: str | None, universe: str | None) -> Ship:
        """See ShipStore.insert_record."""
        ship = Ship(ship_id=uuid.uuid4().hex, seq=self._next_seq, name=name, universe=universe)
        self._next_seq += 1
        self._pending.append(ship)
        return ship

    def query_records(
        self, predicate: Predicate, sort_order: Sequence[SortDescriptor] = ()
    ) -> Sequence[Ship]:
        """See ShipStore.query_records."""
        try:
            with self._connect() as conn:
                rows = conn.execute(
                    "SELECT ship_id, seq, name, universe FROM ships ORDER BY seq ASC"
                ).fetchall()
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not read ships from {self.db_path}: {e}") from e

        committed = [_row_to_ship(r) for r in rows]
        matching = [s for s in (*committed, *self._pending) if predicate(s)]
        return sort_ships(matching, sort_order)

    def commit(self) -> None:
        """See ShipStore.commit."""
        if not self._pending:
            return

        batch = tuple(self._pending)
        try:
            with self._connect() as conn:
                conn.executemany(
                    "INSERT INTO ships(ship_id, seq, name, universe) VALUES(?, ?, ?, ?)",
                    [(s.ship_id, s.seq, s.name, s.universe) for s in batch],
                )
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not commit {len(batch)} ship(s): {e}") from e

        del self._pending[: len(batch)]
        logger.debug("Wrote %d ship(s) to %s", len(batch), self.db_path)


def open_ship_store(data_root: Path | None = None) -> SqliteShipStore:
    """
    Convenience constructor using the configured data root.

    Parameters
    ----------
    data_root:
        Optional override for the data root.

    Returns
    -------
    SqliteShipStore
        Ready-to-use SQLite-backed store.
    """
    return SqliteShipStore(db_path=ship_store_db_path(data_root))
