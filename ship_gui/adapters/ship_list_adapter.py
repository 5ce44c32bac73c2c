"""Qt adapter for the engine ShipListViewModel.

The engine owns persistence and filtering. The GUI talks to this adapter via
signals/slots and never sees SQLite or store internals.

Threading model
--------------
Everything runs on the Qt main thread. The view model's change callback is
re-emitted as ``ships_changed`` so widgets can repaint from the fresh rows.
"""

from __future__ import annotations

from PySide6.QtCore import QObject, Signal, Slot

from ship_engine.errors import PersistenceError
from ship_engine.view_model import CommitResult, ShipListViewModel


class ShipListAdapter(QObject):
    """Qt adapter that exposes a ShipListViewModel through signals."""

    ships_changed = Signal(object)  # list[str] of display names
    committed = Signal(int)  # number of ships written
    unsaved_changed = Signal(bool)  # has_unsaved_changes
    error = Signal(str)  # message

    def __init__(self, view_model: ShipListViewModel) -> None:
        super().__init__()
        self._vm = view_model
        self._unsubscribe = view_model.subscribe(self.refresh)

    @property
    def view_model(self) -> ShipListViewModel:
        return self._vm

    @Slot()
    def refresh(self) -> None:
        """Re-read the filtered list and emit display rows."""
        try:
            rows = self._vm.display_rows()
        except PersistenceError as e:
            self.error.emit(str(e))
            return
        self.ships_changed.emit(rows)
        self.unsaved_changed.emit(self._vm.has_unsaved_changes)

    @Slot(object, object)
    def insert_ship(self, name: str | None, universe: str | None) -> None:
        """Insert a ship without committing it."""
        self._vm.insert(name, universe)

    @Slot()
    def commit(self) -> None:
        """Commit pending ships and report the outcome."""
        self._handle_result(self._vm.commit())

    @Slot()
    def create_sample_ships(self) -> None:
        """Insert the sample ships and commit them."""
        self._handle_result(self._vm.create_sample_ships())

    def _handle_result(self, result: CommitResult) -> None:
        if result.error is not None:
            # error is emitted last; it is the final status update
            self.unsaved_changed.emit(self._vm.has_unsaved_changes)
            self.error.emit(f"Could not save ships: {result.error}")
            return
        self.committed.emit(result.committed)

    def shutdown(self) -> None:
        """Detach from the view model."""
        self._unsubscribe()
