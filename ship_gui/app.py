"""
Ship list GUI app.

One window: the filtered list of ship names and a button that inserts the
sample ships. Backed by the engine view model through a Qt adapter.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Sequence

from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ship_engine.errors import PersistenceError, PredicateSyntaxError
from ship_engine.logging_setup import configure_root
from ship_engine.predicates import parse_predicate
from ship_engine.ship_store.sqlite_store import open_ship_store
from ship_engine.view_model import ShipListViewModel
from ship_gui.adapters.ship_list_adapter import ShipListAdapter

DEFAULT_FILTER = "NOT name BEGINSWITH[c] %@"
DEFAULT_FILTER_ARGS: tuple[str, ...] = ("e",)


class ShipListWindow(QWidget):
    """
    Main window for the ship list.

    Responsibilities
    ----------------
    - Render the adapter's display rows
    - Forward the "Create ships" action
    - Show commit failures without closing
    """

    def __init__(self, adapter: ShipListAdapter, filter_text: str = "") -> None:
        super().__init__()
        self.setWindowTitle("Ships")
        self.resize(420, 520)

        self._adapter = adapter
        self._adapter.ships_changed.connect(self._on_ships_changed)
        self._adapter.committed.connect(self._on_committed)
        self._adapter.unsaved_changed.connect(self._on_unsaved_changed)
        self._adapter.error.connect(self._on_error)

        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)

        if filter_text:
            filter_label = QLabel(f"Filter: {filter_text}")
            filter_label.setStyleSheet("color: #666;")
            root.addWidget(filter_label)

        self.ship_list = QListWidget()
        root.addWidget(self.ship_list, 1)

        bottom = QWidget()
        bottom_layout = QHBoxLayout(bottom)
        bottom_layout.setContentsMargins(0, 0, 0, 0)

        self.status_label = QLabel("")
        self.status_label.setStyleSheet("color: #999;")

        self.btn_create = QPushButton("Create ships")
        self.btn_create.clicked.connect(self._adapter.create_sample_ships)

        bottom_layout.addWidget(self.status_label, 1)
        bottom_layout.addWidget(self.btn_create)
        root.addWidget(bottom)

        self._adapter.refresh()

    def _on_ships_changed(self, rows: list[str]) -> None:
        self.ship_list.clear()
        self.ship_list.addItems([str(r) for r in rows])

    def _on_committed(self, count: int) -> None:
        self.status_label.setText(f"Saved {count} ship(s).")

    def _on_unsaved_changed(self, unsaved: bool) -> None:
        if unsaved:
            self.status_label.setText("Unsaved changes")

    def _on_error(self, message: str) -> None:
        self.status_label.setText("Save failed")
        QMessageBox.warning(self, "Ships", message)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """Detach the adapter before closing."""
        try:
            self._adapter.shutdown()
        finally:
            super().closeEvent(event)


def main(
    argv: Sequence[str] | None = None,
    *,
    data_root: Path | None = None,
    filter_text: str = DEFAULT_FILTER,
    filter_args: Sequence[str] = DEFAULT_FILTER_ARGS,
    log_level: str | int | None = None,
) -> int:
    """
    Run the ship list GUI.

    Parameters
    ----------
    argv:
        Qt arguments. Defaults to sys.argv.
    data_root:
        Optional override for the data root.
    filter_text:
        Filter applied to the list.
    filter_args:
        Values for ``%@`` placeholders in ``filter_text``.
    log_level:
        Logging level. None defers to ``SHIPLIST_LOG_LEVEL``, then INFO.

    Returns
    -------
    int
        Qt application exit code, or 1 if the store could not be opened.
    """
    configure_root(log_level)
    app =QApplication(list(sys.argv if argv is None else argv))

    try:
        predicate = parse_predicate(filter_text, *filter_args)
        store = open_ship_store(data_root=data_root)
    except (PersistenceError, PredicateSyntaxError) as e:
        QMessageBox.critical(None, "Ships", str(e))
        return 1

    shown_filter = filter_text
    for arg in filter_args:
        shown_filter = shown_filter.replace("%@", repr(arg), 1)

    adapter = ShipListAdapter(ShipListViewModel(store, predicate))
    w = ShipListWindow(adapter, filter_text=shown_filter)
    w.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
