"""
card_store — dostęp do kart projektu (kolaborator silnika obliczeń).

Publiczne API:
  CardRepository            protokół wymagany przez silnik
  FolderProject(base_path)  implementacja oparta na katalogach
  find_project_root(path)   → Path | None
  write_card(parent, key, metadata) → Path
"""

from __future__ import annotations

import pathlib
from collections.abc import Iterable
from typing import Protocol

from data_model import Card, ModuleRef

from .folder import (
    CALCULATION_FOLDER,
    CARD_ROOT,
    FolderProject,
    find_project_root,
    write_card,
)


class CardRepository(Protocol):
    """Minimalny interfejs magazynu kart używany przez silnik obliczeń."""

    base_path:          pathlib.Path
    calculation_folder: pathlib.Path

    def cards(self) -> list[Card]:
        ...

    def find_card(self, key: str) -> Card | None:
        ...

    def find_cards(self, keys: Iterable[str]) -> dict[str, Card]:
        ...

    def calculations(self) -> list[ModuleRef]:
        ...


__all__ = [
    "CardRepository",
    "FolderProject",
    "find_project_root",
    "write_card",
    "CALCULATION_FOLDER",
    "CARD_ROOT",
]
