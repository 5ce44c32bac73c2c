"""
Domain exceptions for the ship list engine.

Notes
-----
Engine code raises domain exceptions only. Callers at the edges (CLI, GUI
adapter, view model commit) translate them into exit codes or messages.
"""

from __future__ import annotations


class ShipError(RuntimeError):
    """Base exception for all ship list domain failures."""


class PersistenceError(ShipError):
    """Raised when the durable store cannot be opened, read, or committed."""


class PredicateSyntaxError(ShipError, ValueError):
    """Raised when filter text cannot be parsed into a predicate."""
