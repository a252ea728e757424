"""
data_model/facts.py — fakty programu logicznego jako niezmienne rekordy.

Każdy rekord ma parę:
  fact.render()      → tekst faktu, np. field(cardA, "priority", "high").
  parse_fact(text)   → rekord albo None, gdy tekst nie jest znanym faktem

Argumenty tekstowe (nazwy pól, wartości) są renderowane jako literały
w cudzysłowach z ucieczką znaków \\, " oraz nowej linii; klucze kart
są stałymi (bez cudzysłowów).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, TypeAlias

# ---------------------------------------------------------------------------
# Literały
# ---------------------------------------------------------------------------

_ESCAPES   = {"\\": "\\\\", '"': '\\"', "\n": "\\n"}
_UNESCAPE  = re.compile(r"\\(.)", re.DOTALL)
_FACT_RE   = re.compile(r"^\s*([a-z_][a-zA-Z0-9_]*)\((.*)\)\s*\.?\s*$", re.DOTALL)


def quote(value: str) -> str:
    """Zwraca literał tekstowy w cudzysłowach, z ucieczką znaków specjalnych."""
    return '"' + "".join(_ESCAPES.get(ch, ch) for ch in value) + '"'


def unquote(text: str) -> str:
    """Odwraca quote(); tekst bez cudzysłowów (stała, liczba) zwracany bez zmian."""
    text = text.strip()
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        return _UNESCAPE.sub(lambda m: "\n" if m.group(1) == "n" else m.group(1), text[1:-1])
    return text


def split_args(text: str) -> list[str]:
    """
    Dzieli listę argumentów po przecinkach leżących poza literałami.

    Przykład::

        'cardA, "a, b", "x\\"y"'  →  ['cardA', '"a, b"', '"x\\"y"']
    """
    args:     list[str] = []
    current:  list[str] = []
    in_quote  = False
    escaped   = False

    for ch in text:
        if escaped:
            current.append(ch)
            escaped = False
        elif ch == "\\" and in_quote:
            current.append(ch)
            escaped = True
        elif ch == '"':
            current.append(ch)
            in_quote = not in_quote
        elif ch == "," and not in_quote:
            args.append("".join(current).strip())
            current = []
        else:
            current.append(ch)

    tail = "".join(current).strip()
    if tail or args:
        args.append(tail)
    return args


# ---------------------------------------------------------------------------
# Rekordy faktów
# ---------------------------------------------------------------------------

class _Fact:
    """Wspólna część rekordów: renderowanie pred(arg1, arg2, ...)."""

    __slots__ = ()
    pred: ClassVar[str]

    def args(self) -> tuple[str, ...]:
        raise NotImplementedError

    def render(self) -> str:
        return f"{self.pred}({', '.join(self.args())})."

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True, slots=True)
class CardFact(_Fact):
    """card(Key): klucz jest znaną kartą."""
    pred: ClassVar[str] = "card"
    key: str

    def args(self) -> tuple[str, ...]:
        return (self.key,)


@dataclass(frozen=True, slots=True)
class FieldFact(_Fact):
    """field(Key, "Name", "Value"): wartość pola metadanych karty."""
    pred: ClassVar[str] = "field"
    key:   str
    name:  str
    value: str

    def args(self) -> tuple[str, ...]:
        return (self.key, quote(self.name), quote(self.value))


@dataclass(frozen=True, slots=True)
class LabelFact(_Fact):
    """label(Key, "Value"): jedna etykieta karty."""
    pred: ClassVar[str] = "label"
    key:   str
    value: str

    def args(self) -> tuple[str, ...]:
        return (self.key, quote(self.value))


@dataclass(frozen=True, slots=True)
class ParentFact(_Fact):
    """parent(Key, ParentKey): bezpośredni rodzic w drzewie kart."""
    pred: ClassVar[str] = "parent"
    key:        str
    parent_key: str

    def args(self) -> tuple[str, ...]:
        return (self.key, self.parent_key)


@dataclass(frozen=True, slots=True)
class UserFieldFact(_Fact):
    """userfield(Key, "Name"): pole wpisane przez autora, nie jest wyliczane."""
    pred: ClassVar[str] = "userfield"
    key:  str
    name: str

    def args(self) -> tuple[str, ...]:
        return (self.key, quote(self.name))


@dataclass(frozen=True, slots=True)
class FieldTypeFact(_Fact):
    """fieldtype(Key, "Name", "Kind"): wyliczona klasyfikacja pola, np. "cardkeys"."""
    pred: ClassVar[str] = "fieldtype"
    key:  str
    name: str
    kind: str

    def args(self) -> tuple[str, ...]:
        return (self.key, quote(self.name), quote(self.kind))


Fact: TypeAlias = CardFact | FieldFact | LabelFact | ParentFact | UserFieldFact | FieldTypeFact

_RECORDS: dict[str, type] = {
    cls.pred: cls
    for cls in (CardFact, FieldFact, LabelFact, ParentFact, UserFieldFact, FieldTypeFact)
}
_ARITY: dict[str, int] = {
    "card": 1, "field": 3, "label": 2, "parent": 2, "userfield": 2, "fieldtype": 3,
}


# ---------------------------------------------------------------------------
# Parsowanie
# ---------------------------------------------------------------------------

def parse_fact(text: str) -> Fact | None:
    """
    Parsuje pojedynczy fakt (z kropką końcową lub bez).

    Zwraca None, gdy predykat jest nieznany, arność się nie zgadza
    albo tekst w ogóle nie ma postaci pred(...).
    """
    m = _FACT_RE.match(text)
    if not m:
        return None
    pred, raw_args = m.group(1), m.group(2)
    record = _RECORDS.get(pred)
    if record is None:
        return None
    args = split_args(raw_args)
    if len(args) != _ARITY[pred] or any(a == "" for a in args):
        return None
    return record(*(unquote(a) for a in args))
