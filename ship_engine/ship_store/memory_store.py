"""
In-memory ShipStore.

Not durable. Used for previews and tests; commit failures can be injected to
exercise the error path.
"""

from __future__ import annotations

import uuid
from typing import Sequence

from ..errors import PersistenceError
from .api import Predicate, Ship, ShipStore, SortDescriptor
from .ordering import sort_ships


class InMemoryShipStore(ShipStore):
    """
    ShipStore backed by two Python lists.

    Parameters
    ----------
    failing_commits:
        Number of upcoming commits that should raise PersistenceError.
    """

    def __init__(self, failing_commits: int = 0) -> None:
        self._committed: list[Ship] = []
        self._pending: list[Ship] = []
        self._next_seq = 1
        self.failing_commits = failing_commits

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def committed(self) -> tuple[Ship, ...]:
        """Records that survived a commit."""
        return tuple(self._committed)

    def insert_record(self, name: str | None, universe: str | None) -> Ship:
        ship = Ship(ship_id=uuid.uuid4().hex, seq=self._next_seq, name=name, universe=universe)
        self._next_seq += 1
        self._pending.append(ship)
        return ship

    def query_records(
        self, predicate: Predicate, sort_order: Sequence[SortDescriptor] = ()
    ) -> Sequence[Ship]:
        matching = [s for s in (*self._committed, *self._pending) if predicate(s)]
        return sort_ships(matching, sort_order)

    def commit(self) -> None:
        if self.failing_commits > 0:
            self.failing_commits -= 1
            raise PersistenceError("Injected commit failure")
        self._committed.extend(self._pending)
        self._pending.clear()
