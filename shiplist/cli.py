"""
Command-line interface for the ship list.

Notes
-----
The CLI is intentionally thin. It parses arguments and delegates to the engine
view model. Domain errors print ``ERROR: ...`` and exit with code 2.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from ship_engine.errors import ShipError
from ship_engine.logging_setup import configure_root
from ship_engine.predicates import parse_predicate
from ship_engine.ship_store.api import SHIP_FIELDS, Predicate, SortDescriptor, match_all
from ship_engine.ship_store.sqlite_store import open_ship_store
from ship_engine.view_model import ShipListViewModel, display_text


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser.
    """
    parser = argparse.ArgumentParser(
        prog="shiplist",
        description="Filtered list of persisted ships",
    )
    parser.add_argument(
        "--data-root",
        default=None,
        help="Override the data root (primarily for testing). If omitted, defaults are used.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level name or number (default: $SHIPLIST_LOG_LEVEL or INFO).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    list_p = sub.add_parser("list", help="Print ships matching a filter")
    list_p.add_argument(
        "--where",
        default=None,
        help='Filter text, e.g. \'NOT name BEGINSWITH[c] %%@\'. Omit to list all ships.',
    )
    list_p.add_argument(
        "--arg",
        action="append",
        default=[],
        help="Value for the next %%@ placeholder in --where. Repeatable.",
    )
    list_p.add_argument("--sort", choices=SHIP_FIELDS, default=None, help="Sort by this field")
    list_p.add_argument(
        "--descending",
        action="store_true",
        help="Reverse the --sort direction.",
    )
    list_p.add_argument(
        "--show-universe",
        action="store_true",
        help="Print the universe next to each name.",
    )

    add_p = sub.add_parser("add", help="Insert one ship and commit it")
    add_p.add_argument("--name", default=None, help="Ship name (omit for no value)")
    add_p.add_argument("--universe", default=None, help="Universe (omit for no value)")

    sub.add_parser("seed", help="Insert the sample ships and commit them")

    gui_p = sub.add_parser("gui", help="Open the ship list window")
    gui_p.add_argument("--where", default=None, help="Filter text (default: the sample filter)")
    gui_p.add_argument("--arg", action="append", default=[], help="Placeholder value. Repeatable.")

    return parser


def _predicate(where: str | None, args: list[str]) -> Predicate:
    if where is None:
        return match_all
    return parse_predicate(where, *args)


def main(argv: list[str] | None = None) -> int:
    """
    CLI entry point.

    Parameters
    ----------
    argv:
        Optional argument vector. If None, argparse uses sys.argv.

    Returns
    -------
    int
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_root(args.log_level)
    data_root = Path(args.data_root) if args.data_root else None

    if args.command == "gui":
        # Qt is imported lazily so the text commands work without a display.
        from ship_gui.app import DEFAULT_FILTER, DEFAULT_FILTER_ARGS
        from ship_gui.app import main as gui_main

        if args.where is None:
            return gui_main(
                data_root=data_root,
                filter_text=DEFAULT_FILTER,
                filter_args=DEFAULT_FILTER_ARGS,
                log_level=args.log_level,
            )
        return gui_main(
            data_root=data_root,
            filter_text=args.where,
            filter_args=args.arg,
            log_level=args.log_level,
        )

    try:
        store = open_ship_store(data_root=data_root)

        if args.command == "list":
            sort_order = (
                (SortDescriptor(args.sort, ascending=not args.descending),) if args.sort else ()
            )
            vm = ShipListViewModel(store, _predicate(args.where, args.arg), sort_order)
            for ship in vm.ships:
                if args.show_universe:
                    print(f"{display_text(ship.name)}\t{display_text(ship.universe)}")
                else:
                    print(display_text(ship.name))
            return 0

        vm = ShipListViewModel(store, match_all)
        if args.command == "add":
            vm.insert(args.name, args.universe)
            result = vm.commit()
        else:
            result = vm.create_sample_ships()
    except ShipError as exc:
        print(f"ERROR: {exc}")
        return 2

    if result.error is not None:
        print(f"ERROR: {result.error}")
        return 2
    print(f"Saved {result.committed} ship(s).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
