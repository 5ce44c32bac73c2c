"""Sorting of query results by SortDescriptor."""

from __future__ import annotations

from typing import Iterable, Sequence

from .api import Ship, SortDescriptor


def _sort_key(key: str):
    def _key(ship: Ship) -> tuple[bool, str]:
        value = getattr(ship, key)
        return (value is not None, value or "")

    return _key


def sort_ships(ships: Iterable[Ship], sort_order: Sequence[SortDescriptor]) -> list[Ship]:
    """
    Order ships by insertion sequence, then by the given descriptors.

    Python's sort is stable, so applying descriptors from lowest to highest
    priority yields a lexicographic order with insertion order as tiebreak.
    """
    out = sorted(ships, key=lambda s: s.seq)
    for descriptor in reversed(tuple(sort_order)):
        out.sort(key=_sort_key(descriptor.key), reverse=not descriptor.ascending)
    return out
