"""
solver/encoder.py — zamiana metadanych karty na fakty programu logicznego.

Publiczne API:
  parent_key(path)     → klucz rodzica albo None (karta w korzeniu)
  render_value(value)  → tekst wartości pola
  card_facts(card)     → list[Fact]
  encode_card(card)    → tekst jednostki cards/<klucz>.lp

Czysta konstrukcja tekstu, bez I/O. Wynik jest deterministyczny dla danej
kolejności iteracji po metadanych.
"""

from __future__ import annotations

import pathlib

from data_model import Card, Fact, FieldFact, FieldValue, LabelFact, ParentFact

LABELS_FIELD = "labels"
ROOT_FOLDER  = "cardroot"


def parent_key(card_path: pathlib.PurePath | str) -> str | None:
    """
    Klucz rodzica wyprowadzony ze ścieżki folderu karty.

    Karta dziecka leży w <rodzic>/c/<klucz>, więc rodzic to segment dwa
    poziomy wyżej. Gdy bezpośrednim folderem nadrzędnym jest cardroot,
    karta nie ma rodzica.

    Przykłady::

        .../cardroot/root               → None
        .../cardroot/root/c/child_1     → "root"
    """
    parts = pathlib.PurePath(card_path).parts
    if len(parts) < 3 or parts[-2] == ROOT_FOLDER:
        return None
    return parts[-3] or None


def render_value(value: FieldValue) -> str:
    """Listy łączone przecinkiem, bool jako true/false, None jako pusty tekst."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(render_value(v) for v in value)
    return str(value)


def card_facts(card: Card) -> list[Fact]:
    facts: list[Fact] = []
    for name, value in (card.metadata or {}).items():
        if name == LABELS_FIELD:
            labels = value if isinstance(value, (list, tuple)) else [value] if value else []
            facts.extend(LabelFact(card.key, render_value(label)) for label in labels)
        else:
            facts.append(FieldFact(card.key, name, render_value(value)))

    parent = parent_key(card.path)
    if parent:
        facts.append(ParentFact(card.key, parent))
    return facts


def encode_card(card: Card) -> str:
    lines = [f"% {card.key}"]
    lines.extend(fact.render() for fact in card_facts(card))
    return "\n" + "\n".join(lines) + "\n"
