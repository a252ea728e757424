"""
solver/updater.py — pełne generowanie i przyrostowe aktualizacje plików obliczeń.

Operacje:
  generate(scope)      pełny korpus albo poddrzewo jednej karty
  card_changed(card)   przepisuje jednostki poddrzewa karty
  delete_card(card)    usuwa jednostki poddrzewa i ich wiersze z cardtree.lp
  new_cards(cards)     dopisuje jednostki i wiersze nowych kart

Generowanie z zakresem nie dotyka base.lp, modules.lp ani main.lp
(są wspólne dla całego projektu).
"""

from __future__ import annotations

import logging
import pathlib
from collections.abc import Iterable

from data_model import Card, subtree

from .assembler import base_unit, cardtree_row, cardtree_unit, main_unit, modules_unit
from .context import CalculationContext
from .encoder import encode_card
from .types import LogicUnit, UnitKind
from .units import delete_unit, read_rows, write_unit, write_units

log = logging.getLogger(__name__)


class IncrementalUpdater:
    """
    Utrzymuje pliki folderu obliczeń zgodne z drzewem kart.

    Użycie::

        updater = IncrementalUpdater(CalculationContext(project))
        updater.generate()                 # cały projekt
        updater.generate(card)             # poddrzewo karty
        updater.delete_card(card)
    """

    def __init__(self, context: CalculationContext) -> None:
        self._ctx = context

    @property
    def context(self) -> CalculationContext:
        return self._ctx

    # ------------------------------------------------------------------

    def generate(self, scope: Card | None = None) -> list[pathlib.Path]:
        """
        Generuje jednostki dla projektu albo poddrzewa karty scope.

        Wszystkie pliki są zapisywane równolegle; patrz units.write_units.
        """
        ctx   = self._ctx
        cards = self._cards_in_scope(scope)
        ctx.cards_folder.mkdir(parents=True, exist_ok=True)

        units: list[LogicUnit] = [self._card_unit(card) for card in cards]
        if scope is None:
            units.append(cardtree_unit(ctx.folder, (cardtree_row(c.key) for c in cards)))
            units.append(base_unit(ctx.folder))
            units.append(modules_unit(ctx.folder, ctx.project.calculations()))
            units.append(main_unit(ctx.folder))
        else:
            units.append(self._merged_cardtree(cards))

        log.info(
            "Generowanie %s: %d kart",
            f"poddrzewa '{scope.key}'" if scope else "projektu",
            len(cards),
        )
        return write_units(units, ctx.settings.workers)

    def card_changed(self, card: Card) -> list[pathlib.Path]:
        return self.generate(card)

    def delete_card(self, card: Card) -> list[str]:
        """
        Usuwa jednostki karty i jej poddrzewa oraz ich wiersze z cardtree.lp.

        Gdy nie ma jeszcze folderu obliczeń ani cardtree.lp, nic nie robi.

        Returns:
            Klucze kart, których wiersze usunięto z cardtree.lp.
        """
        ctx = self._ctx
        if not ctx.corpus_exists():
            log.debug("Brak korpusu obliczeń, pomijam usuwanie '%s'", card.key)
            return []

        affected = self._subtree(card)
        removed_rows: dict[str, str] = {cardtree_row(c.key): c.key for c in affected}
        for c in affected:
            if not delete_unit(ctx.card_unit_path(c.key)):
                log.debug("Brak pliku jednostki karty '%s'", c.key)

        rows = read_rows(ctx.cardtree_path)
        kept = [row for row in rows if row not in removed_rows]
        write_unit(cardtree_unit(ctx.folder, kept))

        removed = [removed_rows[row] for row in rows if row in removed_rows]
        log.info("Usunięto obliczenia %d kart (karta '%s')", len(affected), card.key)
        return removed

    def new_cards(self, cards: Iterable[Card]) -> list[pathlib.Path]:
        """
        Dopisuje jednostki nowych kart (wraz z poddrzewami) i ich wiersze.

        Gdy korpus jeszcze nie istnieje, nic nie robi: nie ma czego rozszerzać.
        """
        if not self._ctx.corpus_exists():
            log.debug("Brak korpusu obliczeń, pomijam nowe karty")
            return []

        cards = list(cards)
        found = self._ctx.project.find_cards(c.key for c in cards)
        scoped: dict[str, Card] = {}
        for card in cards:
            for c in subtree(found.get(card.key, card)):
                scoped.setdefault(c.key, c)

        units = [self._card_unit(c) for c in scoped.values()]
        units.append(self._merged_cardtree(scoped.values()))
        return write_units(units, self._ctx.settings.workers)

    # ------------------------------------------------------------------

    def _card_unit(self, card: Card) -> LogicUnit:
        return LogicUnit(UnitKind.CARD, self._ctx.card_unit_path(card.key), encode_card(card))

    def _merged_cardtree(self, cards: Iterable[Card]) -> LogicUnit:
        """Istniejące wiersze cardtree.lp plus brakujące wiersze podanych kart."""
        rows = read_rows(self._ctx.cardtree_path)
        present = set(rows)
        for card in cards:
            row = cardtree_row(card.key)
            if row not in present:
                rows.append(row)
                present.add(row)
        return cardtree_unit(self._ctx.folder, rows)

    def _cards_in_scope(self, scope: Card | None) -> list[Card]:
        if scope is None:
            return self._ctx.project.cards()
        return self._subtree(scope)

    def _subtree(self, card: Card) -> list[Card]:
        """
        Karta z poddrzewem według magazynu; gdy magazyn jej już nie zna
        (np. usunięto ją z dysku), używa dzieci przekazanego obiektu.
        """
        found = self._ctx.project.find_card(card.key)
        return subtree(found if found is not None else card)
