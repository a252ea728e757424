"""
solver/results.py — parsowanie wyjścia clingo do listy DerivedFact.

Blok faktów to wiersze poprzedzające wiersz znacznika SATISFIABLE. Znacznik
musi stanowić cały wiersz, więc wartość pola zawierająca to słowo nie
przesuwa granicy bloku. Wynik UNSATISFIABLE lub brak znacznika oznacza
brak wyliczeń (nie błąd). Wiersze niebędące faktami field/fieldtype
(komentarze, diagnostyka kompilacji reguł) są pomijane.
"""

from __future__ import annotations

import logging
import re

from data_model import FieldFact, FieldTypeFact, parse_fact

from .types import DerivedFact

log = logging.getLogger(__name__)

SUCCESS_MARKER = "SATISFIABLE"
FAILURE_MARKER = "UNSATISFIABLE"

_CARD_KEY_RE = re.compile(r"^[A-Za-z0-9_]+$")


def derived_block(output: str) -> str | None:
    """Tekst przed wierszem SATISFIABLE albo None, gdy go nie ma."""
    lines = output.splitlines()
    for i, line in enumerate(lines):
        marker = line.strip()
        if marker == SUCCESS_MARKER:
            return "\n".join(lines[:i])
        if marker == FAILURE_MARKER:
            log.info("Program niespełnialny (UNSATISFIABLE), brak wyliczonych pól")
            return None
    return None


def parse_derived(line: str) -> DerivedFact | None:
    """Jeden wiersz field(...)/fieldtype(...) → DerivedFact; inne wiersze → None."""
    fact = parse_fact(line)
    if not isinstance(fact, (FieldFact, FieldTypeFact)):
        return None
    if not _CARD_KEY_RE.match(fact.key):
        return None
    value = fact.value if isinstance(fact, FieldFact) else fact.kind
    return DerivedFact(card_key=fact.key, field=fact.name, value=value)


def parse_lines(text: str) -> list[DerivedFact]:
    results: list[DerivedFact] = []
    for line in text.split("\n"):
        if not line.strip():
            continue
        derived = parse_derived(line)
        if derived is not None:
            results.append(derived)
    return results


def parse_solver_output(output: str) -> list[DerivedFact]:
    block = derived_block(output)
    if not block:
        return []
    return parse_lines(block)
