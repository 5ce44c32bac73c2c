"""
Filtered ship list view model.

The view model holds a predicate fixed at construction time and exposes the
matching ships as a pull-based query against the store it was handed. Every
mutation is followed by an explicit change notification so a rendering layer
can re-read ``ships``.

Notes
-----
- Reads are live: ``ships`` is evaluated against store state on each access.
- ``commit`` never raises; failures come back in a CommitResult and pending
  inserts are kept for a retry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

from .errors import PersistenceError
from .ship_store.api import Predicate, Ship, ShipStore, SortDescriptor
from .ship_store.seed import sample_ships

logger = logging.getLogger(__name__)

PLACEHOLDER = "N/A"

ChangeListener = Callable[[], None]


@dataclass(frozen=True, slots=True)
class CommitResult:
    """
    Outcome of a commit.

    Attributes
    ----------
    committed:
        Number of records flushed (0 when nothing was pending or on failure).
    error:
        The failure, or None on success.
    """

    committed: int
    error: PersistenceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def display_text(value: str | None) -> str:
    """Substitute the placeholder for an absent value. Empty strings pass through."""
    return PLACEHOLDER if value is None else value


class ShipListViewModel:
    """
    View model for a list of ships filtered by a predicate.

    Parameters
    ----------
    store:
        The persistence handle. Owned by the caller.
    predicate:
        Filter applied to every read.
    sort_order:
        Optional sort descriptors. Empty means insertion order.
    """

    def __init__(
        self,
        store: ShipStore,
        predicate: Predicate,
        sort_order: Sequence[SortDescriptor] = (),
    ) -> None:
        self._store = store
        self._predicate = predicate
        self._sort_order = tuple(sort_order)
        self._listeners: list[ChangeListener] = []

    @property
    def predicate(self) -> Predicate:
        return self._predicate

    @property
    def ships(self) -> list[Ship]:
        """Ships matching the view model's predicate, read now."""
        return self.query()

    @property
    def has_unsaved_changes(self) -> bool:
        return self._store.pending_count > 0

    def query(self, predicate: Predicate | None = None) -> list[Ship]:
        """
        Return all stored ships satisfying a predicate.

        Parameters
        ----------
        predicate:
            Overrides the view model's predicate for this read only.

        Returns
        -------
        list[Ship]
            Matching ships, pending inserts included.

        Raises
        ------
        PersistenceError
            If the store cannot be read.
        """
        chosen = self._predicate if predicate is None else predicate
        return list(self._store.query_records(chosen, self._sort_order))

    def display_rows(self) -> list[str]:
        """Display names of ``ships``, with the placeholder for absent names."""
        return [display_text(s.name) for s in self.ships]

    def insert(self, name: str | None, universe: str | None) -> Ship:
        """
        Add a ship to the store. No validation; duplicates are allowed.

        Returns
        -------
        Ship
            The new, not yet committed, record.
        """
        ship = self._store.insert_record(name, universe)
        logger.debug("Inserted ship %s (name=%r, universe=%r)", ship.ship_id, name, universe)
        self._notify()
        return ship

    def commit(self) -> CommitResult:
        """
        Flush pending inserts to durable storage.

        Returns
        -------
        CommitResult
            ``ok`` is False when the store refused the write. The in-memory
            state is unchanged in that case and commit may be retried.
        """
        pending = self._store.pending_count
        if pending == 0:
            return CommitResult(committed=0)
        try:
            self._store.commit()
        except PersistenceError as e:
            logger.warning("Commit of %d ship(s) failed: %s", pending, e)
            return CommitResult(committed=0, error=e)

        logger.info("Committed %d ship(s)", pending)
        self._notify()
        return CommitResult(committed=pending)

    def create_sample_ships(self) -> CommitResult:
        """Insert the four sample ships and commit them."""
        for name, universe in sample_ships():
            self.insert(name, universe)
        return self.commit()

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """
        Register a callback run after each mutation.

        Returns
        -------
        Callable[[], None]
            Call it to unsubscribe.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        for listener in tuple(self._listeners):
            listener()
