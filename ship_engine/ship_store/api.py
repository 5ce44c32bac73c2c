"""
ShipStore public API.

This module defines the persistence surface the view model is allowed to call.
The view model must not depend on SQLite details; it speaks only in typed
domain objects.

Notes
-----
- Queries see committed and pending records alike.
- Insertion order is the default display order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol, Sequence

ShipId = str

SHIP_FIELDS: tuple[str, ...] = ("name", "universe")


@dataclass(frozen=True, slots=True)
class Ship:
    """
    A persisted ship record.

    Attributes
    ----------
    ship_id:
        Stable identifier assigned at insert time.
    seq:
        Insertion sequence number. Defines the default order.
    name:
        Optional ship name. ``None`` means "no value", distinct from ``""``.
    universe:
        Optional franchise name.
    """

    ship_id: ShipId
    seq: int
    name: str | None
    universe: str | None


Predicate = Callable[[Ship], bool]


@dataclass(frozen=True, slots=True)
class SortDescriptor:
    """
    One sort key.

    Attributes
    ----------
    key:
        Field name; one of ``SHIP_FIELDS``.
    ascending:
        Sort direction. Absent values come first when ascending.
    """

    key: str
    ascending: bool = True

    def __post_init__(self) -> None:
        if self.key not in SHIP_FIELDS:
            raise ValueError(f"Unknown sort key: {self.key!r}")


def match_all(ship: Ship) -> bool:
    return True


class ShipStore(Protocol):
    """
    Persistence API for ship records.

    Implementations own durability. Mutations happen on a single thread.
    """

    @property
    def pending_count(self) -> int:
        """Number of inserted records not yet committed."""
        raise NotImplementedError

    def insert_record(self, name: str | None, universe: str | None) -> Ship:
        """
        Create a record and add it to the store as pending.

        Parameters
        ----------
        name:
            Ship name, or None.
        universe:
            Universe name, or None.

        Returns
        -------
        Ship
            The new record.
        """
        raise NotImplementedError

    def query_records(
        self, predicate: Predicate, sort_order: Sequence[SortDescriptor] = ()
    ) -> Sequence[Ship]:
        """
        Return every record for which ``predicate`` holds.

        Parameters
        ----------
        predicate:
            Boolean test over a Ship.
        sort_order:
            Sort descriptors, applied in priority order. Empty means
            insertion order.

        Returns
        -------
        Sequence[Ship]
            Matching records, evaluated against current store state.
        """
        raise NotImplementedError

    def commit(self) -> None:
        """
        Flush pending records to durable storage.

        Raises
        ------
        PersistenceError
            If the records could not be written. Pending records are kept.
        """
        raise NotImplementedError
