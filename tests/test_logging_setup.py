from __future__ import annotations

import logging

import pytest

from ship_engine.logging_setup import coerce_level, configure_root


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, logging.INFO),
        ("", logging.INFO),
        ("debug", logging.DEBUG),
        ("WARNING", logging.WARNING),
        ("15", 15),
        (logging.ERROR, logging.ERROR),
        ("verbose", logging.INFO),
    ],
)
def test_coerce_level(value: object, expected: int) -> None:
    assert coerce_level(value) == expected  # type: ignore[arg-type]


def test_configure_root_honors_env(monkeypatch: pytest.MonkeyPatch) -> None:
    root = logging.getLogger()
    previous = root.level
    monkeypatch.setenv("SHIPLIST_LOG_LEVEL", "warning")
    try:
        assert configure_root() == logging.WARNING
        assert configure_root("debug") == logging.DEBUG
    finally:
        root.setLevel(previous)
