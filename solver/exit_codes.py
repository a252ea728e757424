"""
solver/exit_codes.py — kody wyjścia clingo jako pole bitowe.

Sukces = ustawione SAT i EXHAUST (przeszukano wszystko i znaleziono
rozwiązanie) oraz brak ERROR; pozostałe bity nie mają znaczenia.
"""

from __future__ import annotations

from enum import IntEnum


class SolverExit(IntEnum):
    UNKNOWN   = 0
    INTERRUPT = 1
    SAT       = 10
    EXHAUST   = 20
    MEMORY    = 33
    ERROR     = 65
    NO_RUN    = 128


DESCRIPTIONS: dict[SolverExit, str] = {
    SolverExit.UNKNOWN:   "Nieznany błąd",
    SolverExit.INTERRUPT: "Przerwano",
    SolverExit.SAT:       "Spełnialny",
    SolverExit.EXHAUST:   "Przeszukano całą przestrzeń",
    SolverExit.MEMORY:    "Brak pamięci",
    SolverExit.ERROR:     "Błąd",
    SolverExit.NO_RUN:    "Nie uruchomiono",
}

# Kolejność zgodna z kolejnością komunikatów w logu.
_FAILURE_FLAGS = (SolverExit.ERROR, SolverExit.INTERRUPT, SolverExit.MEMORY, SolverExit.NO_RUN)


def has_flag(code: int, flag: SolverExit) -> bool:
    """True gdy wszystkie bity flagi są ustawione w kodzie (UNKNOWN nigdy)."""
    return flag != SolverExit.UNKNOWN and (code & flag) == flag


def is_success(code: int) -> bool:
    return (
        has_flag(code, SolverExit.SAT)
        and has_flag(code, SolverExit.EXHAUST)
        and not has_flag(code, SolverExit.ERROR)
    )


def failing_conditions(code: int) -> list[SolverExit]:
    """
    Warunki błędu zakodowane w kodzie wyjścia.

    Pusta lista dla kodu sukcesu; [UNKNOWN] gdy kod nie jest sukcesem,
    a żaden z nazwanych bitów błędu nie jest ustawiony.
    """
    if is_success(code):
        return []
    found = [flag for flag in _FAILURE_FLAGS if has_flag(code, flag)]
    return found or [SolverExit.UNKNOWN]
