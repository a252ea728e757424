"""
solver/assembler.py — stałe programy reguł i pliki agregujące (#include).

Układ folderu obliczeń::

    base.lp         wspólne reguły projektu
    cardtree.lp     #include każdej jednostki cards/<klucz>.lp
    modules.lp      #include zewnętrznych modułów reguł
    main.lp         #include base.lp, cardtree.lp, modules.lp
    cards/<klucz>.lp
"""

from __future__ import annotations

import pathlib
import posixpath
from collections.abc import Iterable

from data_model import ModuleRef

from .types import LogicUnit, UnitKind

BASE_FILE     = "base.lp"
CARDTREE_FILE = "cardtree.lp"
MODULES_FILE  = "modules.lp"
MAIN_FILE     = "main.lp"
CARDS_FOLDER  = "cards"

BASE_PROGRAM = """
%
% Wspólne definicje dla wszystkich projektów kart
%

% rodzic i przodek
ancestor(A, C) :- parent(A, C), card(A), card(C).
ancestor(A, C) :- parent(A, B), ancestor(B, C), card(A), card(B), card(C).

% jeśli podano typ karty, to jest to karta
card(C) :- field(C, "cardtype", _).

% pola domyślne nie są wyliczane, więc oznaczamy je jako pola użytkownika
userfield(Cardkey, "cardtype") :- field(Cardkey, "cardtype", _).
userfield(Cardkey, "summary") :- field(Cardkey, "cardtype", _).
userfield(Cardkey, "workflowState") :- field(Cardkey, "cardtype", _).

% jeśli wszystkie wartości pola są kluczami kart, pole ma typ "cardkeys"
fieldtype(X, Field, "cardkeys") :- field(X, Field, _), card(Value) : field(X, Field, Value).
"""

MAIN_PROGRAM = f"""
#include "{BASE_FILE}".
#include "{CARDTREE_FILE}".
#include "{MODULES_FILE}".
"""


# ---------------------------------------------------------------------------
# Wiersze agregatorów
# ---------------------------------------------------------------------------

def include_row(target: str) -> str:
    return f'#include "{target}".'


def cardtree_row(card_key: str) -> str:
    """Wiersz cardtree.lp dla karty; usuwanie karty szuka dokładnie tego wiersza."""
    return include_row(f"{CARDS_FOLDER}/{card_key}.lp")


def module_row(module: ModuleRef) -> str | None:
    """
    Wiersz modules.lp dla modułu albo None, gdy moduł nie ma pliku.

    Nazwy zasobów modułów mają prefiks nazwy modułu (dla unikalności);
    folder modułu już go zawiera, więc zostaje tylko nazwa pliku.
    """
    if module.path is None:
        return None
    target = pathlib.Path(module.path) / posixpath.basename(module.name)
    return include_row(target.as_posix())


def render_rows(rows: Iterable[str]) -> str:
    return "".join(f"{row}\n" for row in rows)


# ---------------------------------------------------------------------------
# Jednostki
# ---------------------------------------------------------------------------

def base_unit(folder: pathlib.Path) -> LogicUnit:
    return LogicUnit(UnitKind.BASE, folder / BASE_FILE, BASE_PROGRAM)


def main_unit(folder: pathlib.Path) -> LogicUnit:
    return LogicUnit(UnitKind.MAIN, folder / MAIN_FILE, MAIN_PROGRAM)


def modules_unit(folder: pathlib.Path, modules: Iterable[ModuleRef]) -> LogicUnit:
    rows = (module_row(m) for m in modules)
    return LogicUnit(UnitKind.MODULES, folder / MODULES_FILE, render_rows(r for r in rows if r))


def cardtree_unit(folder: pathlib.Path, rows: Iterable[str]) -> LogicUnit:
    return LogicUnit(UnitKind.CARDTREE, folder / CARDTREE_FILE, render_rows(rows))
