"""
solver/config.py — ustawienia uruchamiania solvera.

Zmienne środowiskowe:
  CARDCALC_CLINGO           plik wykonywalny solvera (domyślnie: clingo)
  CARDCALC_SOLVER_TIMEOUT   limit czasu w sekundach; 0 wyłącza limit (domyślnie: 60)
  CARDCALC_WORKERS          liczba wątków zapisu plików .lp (domyślnie: 8)

Opcjonalnie plik .env w katalogu głównym repozytorium albo w bieżącym
katalogu roboczym; zmienne już ustawione w środowisku mają pierwszeństwo.
"""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv(pathlib.Path(__file__).resolve().parent.parent / ".env")
load_dotenv(pathlib.Path.cwd() / ".env")

DEFAULT_BINARY  = "clingo"
DEFAULT_TIMEOUT = 60.0
DEFAULT_WORKERS = 8


@dataclass(frozen=True, slots=True)
class SolverSettings:
    """Ustawienia solvera i zapisu plików."""
    clingo_binary: str          = DEFAULT_BINARY
    timeout:       float | None = DEFAULT_TIMEOUT
    workers:       int          = DEFAULT_WORKERS

    @classmethod
    def from_env(cls) -> SolverSettings:
        """
        Czyta ustawienia ze zmiennych środowiskowych.

        Raises:
            ValueError gdy timeout lub liczba wątków nie są liczbami
            albo liczba wątków jest mniejsza od 1.
        """
        timeout = float(os.getenv("CARDCALC_SOLVER_TIMEOUT", str(DEFAULT_TIMEOUT)))
        workers = int(os.getenv("CARDCALC_WORKERS", str(DEFAULT_WORKERS)))
        if workers < 1:
            raise ValueError(f"CARDCALC_WORKERS musi być >= 1, podano {workers}")
        return cls(
            clingo_binary = os.getenv("CARDCALC_CLINGO", DEFAULT_BINARY),
            timeout       = timeout if timeout > 0 else None,
            workers       = workers,
        )
