"""
Declarative filter predicates over Ship records.

Predicates are small frozen objects that are callable with a Ship and compose
with ``~``, ``&`` and ``|``. They can be built directly or parsed from filter
text such as::

    NOT name BEGINSWITH[c] %@

Semantics
---------
- A comparison against an absent field (None) is false, except ``== nil``,
  ``!= <value>`` and ``IN`` a list holding ``nil``.
- ``[c]`` makes a comparison case-insensitive, ``[d]`` diacritic-insensitive.
- ``IN`` takes a ``{...}`` list literal or a sequence placeholder argument.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Any, Iterator, Sequence

from .errors import PredicateSyntaxError
from .ship_store.api import SHIP_FIELDS, Ship

COMPARISON_OPERATORS: tuple[str, ...] = (
    "==",
    "!=",
    "<",
    "<=",
    ">",
    ">=",
    "IN",
    "BEGINSWITH",
    "ENDSWITH",
    "CONTAINS",
)


class PredicateBase:
    """Composition operators shared by all predicates."""

    __slots__ = ()

    def __call__(self, ship: Ship) -> bool:  # pragma: no cover - abstract
        raise NotImplementedError

    def __invert__(self) -> "Not":
        return Not(self)

    def __and__(self, other: "PredicateBase") -> "And":
        return And((self, other))

    def __or__(self, other: "PredicateBase") -> "Or":
        return Or((self, other))


def _fold(text: str, *, case_insensitive: bool, diacritic_insensitive: bool) -> str:
    if diacritic_insensitive:
        decomposed = unicodedata.normalize("NFKD", text)
        text = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    if case_insensitive:
        text = text.casefold()
    return text


@dataclass(frozen=True, slots=True)
class Comparison(PredicateBase):
    """
    Compare one Ship field against a literal.

    Attributes
    ----------
    key:
        Field name; one of ``SHIP_FIELDS``.
    operator:
        One of ``COMPARISON_OPERATORS``.
    value:
        A string, None (only with ``==``/``!=``), or a tuple of strings for ``IN``.
    case_insensitive:
        Compare case-folded text.
    diacritic_insensitive:
        Compare text with combining marks removed.
    """

    key: str
    operator: str
    value: Any
    case_insensitive: bool = False
    diacritic_insensitive: bool = False

    def __post_init__(self) -> None:
        if self.key not in SHIP_FIELDS:
            raise PredicateSyntaxError(f"Unknown field: {self.key!r}")
        if self.operator not in COMPARISON_OPERATORS:
            raise PredicateSyntaxError(f"Unknown operator: {self.operator!r}")
        if self.operator == "IN":
            if isinstance(self.value, str) or not isinstance(self.value, (tuple, list)):
                raise PredicateSyntaxError("IN requires a list of values.")
            object.__setattr__(self, "value", tuple(self.value))
        elif self.value is None and self.operator not in ("==", "!="):
            raise PredicateSyntaxError(f"{self.operator} cannot compare against nil.")

    def _norm(self, text: str) -> str:
        return _fold(
            text,
            case_insensitive=self.case_insensitive,
            diacritic_insensitive=self.diacritic_insensitive,
        )

    def __call__(self, ship: Ship) -> bool:
        actual = getattr(ship, self.key)
        op = self.operator

        if op == "IN":
            if actual is None:
                return None in self.value
            members = {self._norm(str(v)) for v in self.value if v is not None}
            return self._norm(actual) in members
        if self.value is None:
            return (actual is None) == (op == "==")
        if actual is None:
            return op == "!="

        left = self._norm(actual)
        right = self._norm(str(self.value))
        if op == "==":
            return left == right
        if op == "!=":
            return left != right
        if op == "<":
            return left < right
        if op == "<=":
            return left <= right
        if op == ">":
            return left > right
        if op == ">=":
            return left >= right
        if op == "BEGINSWITH":
            return left.startswith(right)
        if op == "ENDSWITH":
            return left.endswith(right)
        return right in left


@dataclass(frozen=True, slots=True)
class Not(PredicateBase):
    """Logical negation."""

    operand: PredicateBase

    def __call__(self, ship: Ship) -> bool:
        return not self.operand(ship)


@dataclass(frozen=True, slots=True)
class And(PredicateBase):
    """True when every operand holds. Empty is true."""

    operands: tuple[PredicateBase, ...]

    def __call__(self, ship: Ship) -> bool:
        return all(p(ship) for p in self.operands)


@dataclass(frozen=True, slots=True)
class Or(PredicateBase):
    """True when any operand holds. Empty is false."""

    operands: tuple[PredicateBase, ...]

    def __call__(self, ship: Ship) -> bool:
        return any(p(ship) for p in self.operands)


def equals(key: str, value: str | None, *, case_insensitive: bool = False) -> Comparison:
    return Comparison(key, "==", value, case_insensitive)


def less_than(key: str, value: str, *, case_insensitive: bool = False) -> Comparison:
    return Comparison(key, "<", value, case_insensitive)


def is_in(key: str, values: Sequence[str], *, case_insensitive: bool = False) -> Comparison:
    return Comparison(key, "IN", tuple(values), case_insensitive)


def begins_with(key: str, prefix: str, *, case_insensitive: bool = False) -> Comparison:
    return Comparison(key, "BEGINSWITH", prefix, case_insensitive)


def contains(key: str, part: str, *, case_insensitive: bool = False) -> Comparison:
    return Comparison(key, "CONTAINS", part, case_insensitive)


# ---------------------------------------------------------------------------
# Filter text parsing
# ---------------------------------------------------------------------------

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<string>"(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*')
  | (?P<placeholder>%@)
  | (?P<modifier>\[[A-Za-z]+\])
  | (?P<op>==|!=|<>|<=|>=|=|<|>|&&|\|\||!)
  | (?P<punct>[(){},])
  | (?P<word>[A-Za-z_][A-Za-z0-9_]*)
    """,
    re.VERBOSE,
)

_KEYWORDS = {"AND", "OR", "NOT", "NIL", "NULL", "IN", "BEGINSWITH", "ENDSWITH", "CONTAINS"}
_OP_ALIASES = {"=": "==", "<>": "!=", "&&": "AND", "||": "OR", "!": "NOT"}
_ESCAPE_RE = re.compile(r"\\(.)")


@dataclass(frozen=True, slots=True)
class _Token:
    kind: str  # "string" | "placeholder" | "modifier" | "op" | "punct" | "keyword" | "ident" | "end"
    text: str
    pos: int


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise PredicateSyntaxError(f"Unexpected character {text[pos]!r} at position {pos}.")
        kind = m.lastgroup or ""
        raw = m.group()
        if kind == "string":
            tokens.append(_Token("string", _ESCAPE_RE.sub(r"\1", raw[1:-1]), pos))
        elif kind == "op":
            alias = _OP_ALIASES.get(raw, raw)
            tokens.append(_Token("keyword" if alias in _KEYWORDS else "op", alias, pos))
        elif kind == "word":
            upper = raw.upper()
            if upper in _KEYWORDS:
                tokens.append(_Token("keyword", upper, pos))
            else:
                tokens.append(_Token("ident", raw, pos))
        elif kind != "ws":
            tokens.append(_Token(kind, raw, pos))
        pos = m.end()
    tokens.append(_Token("end", "", len(text)))
    return tokens


class _Parser:
    """Recursive descent parser: OR binds loosest, then AND, then NOT."""

    def __init__(self, text: str, args: Sequence[Any]) -> None:
        self._tokens = _tokenize(text)
        self._i = 0
        self._args: Iterator[Any] = iter(args)
        self._arg_count = len(args)
        self._args_used = 0

    def _peek(self) -> _Token:
        return self._tokens[self._i]

    def _next(self) -> _Token:
        tok = self._tokens[self._i]
        self._i += 1
        return tok

    def _accept(self, kind: str, text: str) -> bool:
        tok = self._peek()
        if tok.kind == kind and tok.text == text:
            self._i += 1
            return True
        return False

    def _expect(self, kind: str, text: str) -> None:
        if not self._accept(kind, text):
            tok = self._peek()
            raise PredicateSyntaxError(f"Expected {text!r} at position {tok.pos}.")

    def parse(self) -> PredicateBase:
        result = self._or()
        tok = self._peek()
        if tok.kind != "end":
            raise PredicateSyntaxError(f"Unexpected {tok.text!r} at position {tok.pos}.")
        if self._args_used != self._arg_count:
            raise PredicateSyntaxError(
                f"Got {self._arg_count} argument(s) for {self._args_used} placeholder(s)."
            )
        return result

    def _or(self) -> PredicateBase:
        operands = [self._and()]
        while self._accept("keyword", "OR"):
            operands.append(self._and())
        return operands[0] if len(operands) == 1 else Or(tuple(operands))

    def _and(self) -> PredicateBase:
        operands = [self._not()]
        while self._accept("keyword", "AND"):
            operands.append(self._not())
        return operands[0] if len(operands) == 1 else And(tuple(operands))

    def _not(self) -> PredicateBase:
        if self._accept("keyword", "NOT"):
            return Not(self._not())
        return self._primary()

    def _primary(self) -> PredicateBase:
        if self._accept("punct", "("):
            inner = self._or()
            self._expect("punct", ")")
            return inner
        return self._comparison()

    def _comparison(self) -> Comparison:
        tok = self._next()
        if tok.kind != "ident":
            raise PredicateSyntaxError(f"Expected a field name at position {tok.pos}.")
        if tok.text not in SHIP_FIELDS:
            raise PredicateSyntaxError(f"Unknown field {tok.text!r} at position {tok.pos}.")

        op_tok = self._next()
        if op_tok.kind not in ("op", "keyword") or op_tok.text not in COMPARISON_OPERATORS:
            raise PredicateSyntaxError(f"Expected an operator at position {op_tok.pos}.")

        case_insensitive = diacritic_insensitive = False
        if self._peek().kind == "modifier":
            mod_tok = self._next()
            flags = mod_tok.text[1:-1].lower()
            if set(flags) - {"c", "d"}:
                raise PredicateSyntaxError(
                    f"Unknown modifier {mod_tok.text!r} at position {mod_tok.pos}."
                )
            case_insensitive = "c" in flags
            diacritic_insensitive = "d" in flags

        value = self._value()
        return Comparison(tok.text, op_tok.text, value, case_insensitive, diacritic_insensitive)

    def _value(self) -> Any:
        tok = self._next()
        if tok.kind == "string":
            return tok.text
        if tok.kind == "keyword" and tok.text in ("NIL", "NULL"):
            return None
        if tok.kind == "placeholder":
            try:
                arg = next(self._args)
            except StopIteration:
                raise PredicateSyntaxError(
                    f"Missing argument for placeholder at position {tok.pos}."
                ) from None
            self._args_used += 1
            return arg
        if tok.kind == "punct" and tok.text == "{":
            items: list[Any] = []
            if not self._accept("punct", "}"):
                items.append(self._value())
                while self._accept("punct", ","):
                    items.append(self._value())
                self._expect("punct", "}")
            return tuple(items)
        raise PredicateSyntaxError(f"Expected a value at position {tok.pos}.")


def parse_predicate(text: str, *args: Any) -> PredicateBase:
    """
    Parse filter text into a predicate.

    Parameters
    ----------
    text:
        Filter text, e.g. ``universe IN {"Aliens", "Firefly"}`` or
        ``NOT name BEGINSWITH[c] %@``.
    *args:
        Values substituted for ``%@`` placeholders, in order.

    Returns
    -------
    PredicateBase
        A callable predicate.

    Raises
    ------
    PredicateSyntaxError
        If the text is malformed or the placeholder count does not match.
    """
    return _Parser(text, args).parse()
