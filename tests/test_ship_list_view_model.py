from __future__ import annotations

from pathlib import Path

from ship_engine.predicates import begins_with, equals, parse_predicate
from ship_engine.ship_store.api import SortDescriptor, match_all
from ship_engine.ship_store.memory_store import InMemoryShipStore
from ship_engine.ship_store.sqlite_store import SqliteShipStore
from ship_engine.view_model import PLACEHOLDER, ShipListViewModel, display_text

NOT_E = parse_predicate("NOT name BEGINSWITH[c] %@", "e")


def test_empty_store_query_is_empty() -> None:
    vm = ShipListViewModel(InMemoryShipStore(), NOT_E)
    assert vm.ships == []
    assert vm.query(match_all) == []


def test_sample_scenario_filters_in_insertion_order() -> None:
    vm = ShipListViewModel(InMemoryShipStore(), NOT_E)
    result = vm.create_sample_ships()

    assert result.ok
    assert result.committed == 4
    assert [s.name for s in vm.ships] == ["Defiant", "Millennium Falcon"]
    assert vm.display_rows() == ["Defiant", "Millennium Falcon"]


def test_query_returns_exact_subset_in_store_order() -> None:
    vm = ShipListViewModel(InMemoryShipStore(), match_all)
    vm.create_sample_ships()

    every = vm.query()
    for predicate in (NOT_E, equals("universe", "Star Wars"), begins_with("name", "Z")):
        assert vm.query(predicate) == [s for s in every if predicate(s)]


def test_query_is_live_not_a_snapshot() -> None:
    vm = ShipListViewModel(InMemoryShipStore(), NOT_E)
    assert vm.ships == []

    vm.insert("Defiant", "Star Trek")
    assert [s.name for s in vm.ships] == ["Defiant"]


def test_insert_commit_query_includes_record_once(tmp_path: Path) -> None:
    vm = ShipListViewModel(SqliteShipStore(db_path=tmp_path / "ships.sqlite"), NOT_E)
    ship = vm.insert("Serenity", "Firefly")
    assert vm.commit().ok

    matches = vm.query(equals("name", "Serenity"))
    assert matches == [ship]


def test_duplicates_are_kept() -> None:
    vm = ShipListViewModel(InMemoryShipStore(), match_all)
    a = vm.insert("Defiant", "Star Trek")
    b = vm.insert("Defiant", "Star Trek")
    vm.commit()

    assert vm.ships == [a, b]
    assert a.ship_id != b.ship_id


def test_absent_name_renders_placeholder() -> None:
    vm = ShipListViewModel(InMemoryShipStore(), match_all)
    vm.insert(None, "Star Wars")
    vm.insert("", "Star Wars")

    assert vm.display_rows() == [PLACEHOLDER, ""]
    assert display_text(None) == "N/A"


def test_sort_order_is_applied() -> None:
    vm = ShipListViewModel(InMemoryShipStore(), match_all, (SortDescriptor("name"),))
    vm.create_sample_ships()
    assert [s.name for s in vm.ships] == ["Defiant", "Enterprise", "Executor", "Millennium Falcon"]


def test_unsaved_state_tracks_commit() -> None:
    vm = ShipListViewModel(InMemoryShipStore(), match_all)
    assert not vm.has_unsaved_changes

    vm.insert("Enterprise", "Star Trek")
    assert vm.has_unsaved_changes

    vm.commit()
    assert not vm.has_unsaved_changes


def test_commit_with_nothing_pending_is_a_no_op() -> None:
    result = ShipListViewModel(InMemoryShipStore(), match_all).commit()
    assert result.ok
    assert result.committed == 0


def test_failed_commit_is_reported_and_retryable() -> None:
    store = InMemoryShipStore(failing_commits=1)
    vm = ShipListViewModel(store, match_all)
    vm.insert("Executor", "Star Wars")

    failed = vm.commit()
    assert not failed.ok
    assert failed.committed == 0
    assert vm.has_unsaved_changes
    assert [s.name for s in vm.ships] == ["Executor"]
    assert store.committed == ()

    retried = vm.commit()
    assert retried.ok
    assert retried.committed == 1
    assert [s.name for s in store.committed] == ["Executor"]


def test_listeners_run_after_each_mutation() -> None:
    vm = ShipListViewModel(InMemoryShipStore(), NOT_E)
    seen: list[list[str]] = []
    unsubscribe = vm.subscribe(lambda: seen.append(vm.display_rows()))

    vm.insert("Enterprise", "Star Trek")
    vm.insert("Defiant", "Star Trek")
    vm.commit()
    assert seen == [[], ["Defiant"], ["Defiant"]]

    unsubscribe()
    vm.insert("Voyager", "Star Trek")
    assert len(seen) == 3


def test_failed_commit_does_not_notify() -> None:
    vm = ShipListViewModel(InMemoryShipStore(failing_commits=1), match_all)
    vm.insert("Executor", "Star Wars")
    calls: list[None] = []
    vm.subscribe(lambda: calls.append(None))

    vm.commit()
    assert calls == []
