"""
solver/context.py — jawny kontekst obliczeń jednego projektu.

Każda operacja silnika dostaje kontekst jako argument; nie ma globalnego
"bieżącego projektu", więc jeden proces może obsługiwać wiele projektów.
"""

from __future__ import annotations

import pathlib
from dataclasses import dataclass, field

from card_store import CardRepository

from .assembler import CARDS_FOLDER, CARDTREE_FILE, MAIN_FILE
from .config import SolverSettings


@dataclass(slots=True)
class CalculationContext:
    project:  CardRepository
    settings: SolverSettings = field(default_factory=SolverSettings)

    @property
    def folder(self) -> pathlib.Path:
        return pathlib.Path(self.project.calculation_folder)

    @property
    def cards_folder(self) -> pathlib.Path:
        return self.folder / CARDS_FOLDER

    @property
    def cardtree_path(self) -> pathlib.Path:
        return self.folder / CARDTREE_FILE

    @property
    def main_path(self) -> pathlib.Path:
        return self.folder / MAIN_FILE

    def card_unit_path(self, card_key: str) -> pathlib.Path:
        return self.cards_folder / f"{card_key}.lp"

    def corpus_exists(self) -> bool:
        """True gdy folder obliczeń i cardtree.lp już istnieją."""
        return self.folder.is_dir() and self.cardtree_path.is_file()
