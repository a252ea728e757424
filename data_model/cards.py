"""
Karty i moduły reguł — obiekty dostarczane przez magazyn kart.

Silnik obliczeń tylko je czyta; właścicielem jest card_store.
"""

from __future__ import annotations

import dataclasses
import pathlib
from dataclasses import dataclass, field
from typing import TypeAlias

# Wartość pola metadanych: skalar albo lista napisów (np. labels).
FieldValue: TypeAlias = str | int | float | bool | list[str] | None


@dataclass(slots=True)
class Card:
    """
    Karta w hierarchii projektu.

    - key:      unikalny klucz karty, np. "decision_12"
    - path:     folder karty, np. <projekt>/cardroot/root/c/decision_12
    - metadata: pola metadanych (nazwa → wartość)
    - children: karty potomne; None gdy nie zostały wczytane
    """
    key: str
    path: pathlib.Path
    metadata: dict[str, FieldValue] = field(default_factory=dict)
    children: list[Card] | None = None

    def without_children(self) -> Card:
        return dataclasses.replace(self, children=None)


@dataclass(frozen=True, slots=True)
class ModuleRef:
    """
    Zewnętrzny plik reguł (moduł obliczeń).

    - name: nazwa zasobu, zwykle z prefiksem modułu, np. "base/rules.lp"
    - path: folder, w którym leży plik; None gdy zasób nie ma pliku
    """
    name: str
    path: pathlib.Path | None


def flatten_cards(cards: list[Card] | None) -> list[Card]:
    """Spłaszcza drzewo kart (pre-order); zwrócone karty nie mają children."""
    flat: list[Card] = []
    for card in cards or []:
        flat.append(card.without_children())
        flat.extend(flatten_cards(card.children))
    return flat


def subtree(card: Card) -> list[Card]:
    """Karta wraz z całym poddrzewem, w kolejności pre-order."""
    return [card.without_children(), *flatten_cards(card.children)]
