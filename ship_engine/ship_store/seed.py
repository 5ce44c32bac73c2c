"""
Sample ships inserted by the "Create ships" action.
"""

from __future__ import annotations

SAMPLE_SHIPS: tuple[tuple[str, str], ...] = (
    ("Enterprise", "Star Trek"),
    ("Defiant", "Star Trek"),
    ("Millennium Falcon", "Star Wars"),
    ("Executor", "Star Wars"),
)


def sample_ships() -> list[tuple[str, str]]:
    """Return (name, universe) pairs in insertion order."""
    return list(SAMPLE_SHIPS)
