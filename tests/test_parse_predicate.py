from __future__ import annotations

import pytest

from ship_engine.errors import PredicateSyntaxError
from ship_engine.predicates import parse_predicate
from ship_engine.ship_store.api import Ship

SHIPS = [
    Ship("1", 1, "Enterprise", "Star Trek"),
    Ship("2", 2, "Defiant", "Star Trek"),
    Ship("3", 3, "Millennium Falcon", "Star Wars"),
    Ship("4", 4, "Executor", "Star Wars"),
]


def _names(text: str, *args: object) -> list[str | None]:
    p = parse_predicate(text, *args)
    return [s.name for s in SHIPS if p(s)]


def test_inline_literal() -> None:
    assert _names("universe == 'Star Wars'") == ["Millennium Falcon", "Executor"]


def test_placeholder_argument() -> None:
    assert _names("universe == %@", "Star Wars") == ["Millennium Falcon", "Executor"]


def test_less_than() -> None:
    assert _names('name < %@', "F") == ["Enterprise", "Defiant", "Executor"]


def test_in_with_array_argument() -> None:
    assert _names("universe IN %@", ["Aliens", "Firefly", "Star Trek"]) == [
        "Enterprise",
        "Defiant",
    ]


def test_in_with_list_literal() -> None:
    assert _names('universe IN {"Aliens", "Star Wars"}') == ["Millennium Falcon", "Executor"]


def test_begins_with_case_sensitive() -> None:
    assert _names("name BEGINSWITH %@", "E") == ["Enterprise", "Executor"]
    assert _names("name BEGINSWITH %@", "e") == []


def test_begins_with_case_insensitive_modifier() -> None:
    assert _names("name BEGINSWITH[c] %@", "e") == ["Enterprise", "Executor"]


def test_contains_case_insensitive_modifier() -> None:
    assert _names("name CONTAINS[c] %@", "e") == [
        "Enterprise",
        "Defiant",
        "Millennium Falcon",
        "Executor",
    ]


def test_not_begins_with() -> None:
    assert _names("NOT name BEGINSWITH[c] %@", "e") == ["Defiant", "Millennium Falcon"]


def test_and_or_precedence_and_parentheses() -> None:
    assert _names("universe == 'Star Trek' AND name BEGINSWITH 'D' OR name == 'Executor'") == [
        "Defiant",
        "Executor",
    ]
    assert _names("universe == 'Star Trek' AND (name BEGINSWITH 'D' OR name == 'Executor')") == [
        "Defiant"
    ]


def test_symbolic_aliases() -> None:
    assert _names("!(name = 'Defiant') && universe <> 'Star Wars'") == ["Enterprise"]


def test_keywords_are_case_insensitive() -> None:
    assert _names("not name beginswith[c] 'e'") == ["Defiant", "Millennium Falcon"]


def test_escaped_quote_in_string() -> None:
    p = parse_predicate(r"name == 'Rocinante\'s Shuttle'")
    assert p(Ship("5", 5, "Rocinante's Shuttle", None))


def test_nil_literal() -> None:
    p = parse_predicate("name == nil")
    assert p(Ship("5", 5, None, None))
    assert not p(Ship("6", 6, "", None))


@pytest.mark.parametrize(
    "text,args",
    [
        ("", ()),
        ("name", ()),
        ("name ==", ()),
        ("hull == 'x'", ()),
        ("name LIKE 'x'", ()),
        ("name == 'x' AND", ()),
        ("(name == 'x'", ()),
        ("name == 'x')", ()),
        ("name == %@", ()),
        ("name == %@", ("a", "b")),
        ("name BEGINSWITH[q] 'x'", ()),
        ("name == 'x' # comment", ()),
    ],
)
def test_malformed_text_rejected(text: str, args: tuple[object, ...]) -> None:
    with pytest.raises(PredicateSyntaxError):
        parse_predicate(text, *args)


def test_syntax_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        parse_predicate("name ==")


def test_ends_with_case_insensitive_modifier() -> None:
    assert _names("name ENDSWITH %@", "R") == []
    assert _names("name ENDSWITH[c] %@", "r") == ["Executor"]
    assert _names("name ENDSWITH 'iant'") == ["Defiant"]


def test_diacritic_modifiers() -> None:
    cafe = Ship("5", 5, "Café", None)
    assert not parse_predicate("name == 'cafe'")(cafe)
    assert not parse_predicate("name ==[d] 'cafe'")(Ship("6", 6, "CAFÉ", None))
    assert parse_predicate("name ==[d] 'Cafe'")(cafe)
    assert parse_predicate("name ==[cd] 'cafe'")(cafe)
    assert parse_predicate("name BEGINSWITH[cd] %@", "CAF")(cafe)


def test_in_with_nil_member_matches_absent_only() -> None:
    p = parse_predicate("name IN {nil, 'Defiant'}")
    assert p(Ship("5", 5, None, None))
    assert p(Ship("6", 6, "Defiant", None))
    assert not p(Ship("7", 7, "None", None))
    assert not p(Ship("8", 8, "", None))


def test_in_without_nil_rejects_absent() -> None:
    p = parse_predicate("name IN %@", ["Defiant", "None"])
    assert not p(Ship("5", 5, None, None))
    assert p(Ship("6", 6, "None", None))
