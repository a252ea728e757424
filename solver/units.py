"""
solver/units.py — zapis, odczyt i usuwanie plików jednostek (.lp).

Każda jednostka jest zapisywana do pliku tymczasowego w tym samym folderze
i atomowo podmieniana (os.replace). Partia jednostek jest zapisywana
równolegle; błędy nie przerywają pozostałych zapisów, a po zakończeniu
wszystkie są zgłaszane razem jako ExceptionGroup (bez wycofywania zmian).
"""

from __future__ import annotations

import logging
import os
import pathlib
import threading
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from .config import DEFAULT_WORKERS
from .types import LogicUnit

log = logging.getLogger(__name__)


def write_unit(unit: LogicUnit) -> pathlib.Path:
    """Zapisuje jednostkę atomowo; przy błędzie plik docelowy pozostaje nietknięty."""
    unit.path.parent.mkdir(parents=True, exist_ok=True)
    tmp = unit.path.with_name(f".{unit.path.name}.tmp-{os.getpid()}-{threading.get_ident()}")
    try:
        tmp.write_text(unit.text, encoding="utf-8", newline="\n")
        os.replace(tmp, unit.path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
    return unit.path


def write_units(
    units:       Sequence[LogicUnit],
    max_workers: int = DEFAULT_WORKERS,
) -> list[pathlib.Path]:
    """
    Zapisuje partię jednostek równolegle i czeka na wszystkie.

    Returns:
        Ścieżki zapisanych plików, w kolejności jednostek.

    Raises:
        ExceptionGroup z wszystkimi błędami OSError partii; jednostki,
        które się zapisały, pozostają zapisane.
    """
    if not units:
        return []

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="lp-write") as pool:
        futures = [pool.submit(write_unit, unit) for unit in units]

    written: list[pathlib.Path] = []
    errors:  list[OSError]      = []
    for unit, future in zip(units, futures):
        exc = future.exception()
        if exc is None:
            written.append(future.result())
        elif isinstance(exc, OSError):
            exc.add_note(f"jednostka {unit.kind}: {unit.path}")
            errors.append(exc)
        else:
            raise exc

    log.debug("Zapisano %d/%d jednostek", len(written), len(units))
    if errors:
        raise ExceptionGroup(
            f"Nie udało się zapisać {len(errors)} z {len(units)} plików obliczeń",
            errors,
        )
    return written


def read_rows(path: pathlib.Path) -> list[str]:
    """Niepuste wiersze pliku agregującego; brak pliku → pusta lista."""
    if not path.is_file():
        return []
    return [row for row in path.read_text(encoding="utf-8").splitlines() if row.strip()]


def delete_unit(path: pathlib.Path) -> bool:
    """Usuwa plik jednostki; brak pliku nie jest błędem. Zwraca True gdy usunięto."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True
