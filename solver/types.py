"""
solver/types.py — podstawowe typy danych silnika obliczeń.
"""

from __future__ import annotations

import pathlib
from dataclasses import dataclass
from enum import StrEnum
from http import HTTPStatus
from typing import Any


class UnitKind(StrEnum):
    """Rodzaj jednostki programu logicznego (pliku .lp)."""
    BASE     = "base"
    CARD     = "card"
    CARDTREE = "cardtree"
    MODULES  = "modules"
    MAIN     = "main"


@dataclass(frozen=True, slots=True)
class LogicUnit:
    """Nazwany plik programu: fakty, reguły albo lista #include."""
    kind: UnitKind
    path: pathlib.Path
    text: str


@dataclass(frozen=True, slots=True)
class DerivedFact:
    """Wyliczona wartość pola: (karta, pole, wartość) z wyjścia solvera."""
    card_key: str
    field:    str
    value:    str

    def to_dict(self) -> dict[str, str]:
        return {"cardKey": self.card_key, "field": self.field, "value": self.value}


@dataclass(slots=True)
class RequestStatus:
    """
    Wynik publicznej operacji.

    - status_code: 200 sukces, 400 walidacja, 500 środowisko, 504 timeout solvera
    - message:     czytelny opis (dla błędów)
    - payload:     dane wyniku, np. list[DerivedFact]
    """
    status_code: HTTPStatus
    message:     str | None = None
    payload:     Any = None

    @property
    def ok(self) -> bool:
        return self.status_code == HTTPStatus.OK


class ProjectNotFoundError(LookupError):
    """Karta nie leży w strukturze żadnego projektu."""

    def __init__(self, card_key: str, path: pathlib.Path) -> None:
        super().__init__(f"Karta '{card_key}' nie należy do struktury projektu ({path})")
        self.card_key = card_key
        self.path     = path
