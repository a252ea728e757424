"""
solver/invoker.py — uruchamianie clingo i klasyfikacja wyniku procesu.

Publiczne API:
  query_program(card_key)                     → tekst zapytania (#show ...)
  solver_command(binary, main_path)           → argv procesu
  classify(stdout, stderr, returncode)        → RequestStatus
  install_guidance(platform)                  → instrukcja instalacji clingo
  SolverInvoker(settings).run(main, card_key) → RequestStatus

Zasady klasyfikacji:
  - niepuste stdout                              → 200, payload = list[DerivedFact]
  - puste stdout, niepuste stderr, kod != 0      → 400 "Clingo error"
                                                   (bity błędu trafiają do logu)
  - brak pliku wykonywalnego / brak wyjścia      → 500 z instrukcją instalacji
  - przekroczony limit czasu                     → 504
"""

from __future__ import annotations

import logging
import pathlib
import subprocess
import sys
from http import HTTPStatus

from .config import SolverSettings
from .exit_codes import DESCRIPTIONS, failing_conditions
from .results import parse_solver_output
from .types import RequestStatus

log = logging.getLogger(__name__)

SOLVER_ERROR_MESSAGE = "Clingo error"


def query_program(card_key: str) -> str:
    """Pokazuje tylko wyliczone pola karty, z pominięciem pól użytkownika."""
    return f"""
#show.
#show field(Cardkey, Field, Value):
    field(Cardkey, Field, Value),
    Cardkey = {card_key},
    not userfield(Cardkey, Field).
#show fieldtype(Cardkey, Field, Fieldtype):
    fieldtype(Cardkey, Field, Fieldtype),
    Cardkey = {card_key},
    not userfield(Cardkey, Field).
"""


def solver_command(binary: str, main_path: pathlib.Path) -> list[str]:
    """Zapytanie ze stdin ('-'), jeden atom na wiersz, bez dodatkowych komunikatów."""
    return [binary, "-", "--outf=0", "--out-ifs=\\n", "-V0", str(main_path)]


def install_guidance(platform: str = sys.platform) -> str:
    if platform == "darwin":
        hint = 'MacOS: "brew install clingo".'
    elif platform.startswith(("win", "cygwin")):
        hint = "Windows: pobierz źródła i skompiluj nową wersję."
    else:
        hint = (
            "Linux: sprawdź, czy dystrybucja zawiera gotowy pakiet. "
            "W przeciwnym razie pobierz źródła i skompiluj."
        )
    return f'Nie znaleziono "Clingo". Zainstaluj "Clingo".\n{hint}'


def classify(stdout: str | None, stderr: str | None, returncode: int | None) -> RequestStatus:
    if stdout:
        return RequestStatus(HTTPStatus.OK, payload=parse_solver_output(stdout))

    if stderr and returncode:
        log.debug("clingo stderr:\n%s", stderr.rstrip())
        if returncode < 0:
            log.error("Proces clingo zakończony sygnałem %d", -returncode)
        else:
            for condition in failing_conditions(returncode):
                log.error("%s (kod wyjścia clingo: %d)", DESCRIPTIONS[condition], returncode)
        return RequestStatus(HTTPStatus.BAD_REQUEST, SOLVER_ERROR_MESSAGE)

    return RequestStatus(HTTPStatus.INTERNAL_SERVER_ERROR, install_guidance())


class SolverInvoker:
    """Synchroniczne wywołanie clingo z limitem czasu z SolverSettings."""

    def __init__(self, settings: SolverSettings | None = None) -> None:
        self._settings = settings or SolverSettings()

    def run(self, main_path: pathlib.Path, card_key: str) -> RequestStatus:
        argv = solver_command(self._settings.clingo_binary, main_path)
        log.debug("Uruchamiam: %s", " ".join(argv))
        try:
            proc = subprocess.run(
                argv,
                input=query_program(card_key),
                capture_output=True,
                encoding="utf-8",
                timeout=self._settings.timeout,
                check=False,
            )
        except (FileNotFoundError, PermissionError) as exc:
            log.debug("Nie można uruchomić clingo: %s", exc)
            return RequestStatus(HTTPStatus.INTERNAL_SERVER_ERROR, install_guidance())
        except subprocess.TimeoutExpired:
            log.error("Clingo nie zakończył pracy w ciągu %s s", self._settings.timeout)
            return RequestStatus(
                HTTPStatus.GATEWAY_TIMEOUT,
                f"Clingo nie zakończył pracy w ciągu {self._settings.timeout} s",
            )

        return classify(proc.stdout, proc.stderr, proc.returncode)
