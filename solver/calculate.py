"""
solver/calculate.py — publiczne operacje obliczeń kart.

  generate(project_path, card_key=None)  → RequestStatus
  run(project_path, card_key)            → RequestStatus (payload: list[DerivedFact])
  handle_card_changed(card)              → RequestStatus
  handle_delete_card(card)               → None
  handle_new_cards(cards)                → None

Błędy walidacji (nieznana karta, pusty klucz) są zwracane jako status 400.
Handlery zdarzeń kart rzucają ProjectNotFoundError, gdy karta nie leży
w strukturze żadnego projektu.
"""

from __future__ import annotations

import logging
import pathlib
from collections.abc import Callable, Sequence
from http import HTTPStatus

from card_store import CardRepository, FolderProject, find_project_root
from data_model import Card

from .config import SolverSettings
from .context import CalculationContext
from .invoker import SolverInvoker
from .types import ProjectNotFoundError, RequestStatus
from .updater import IncrementalUpdater

log = logging.getLogger(__name__)

ProjectFactory = Callable[[pathlib.Path], CardRepository]


class Calculate:
    """
    Fasada obliczeń. Konteksty projektów są trzymane per korzeń projektu,
    więc handlery zdarzeń nie muszą za każdym razem szukać projektu.

    Użycie::

        calc   = Calculate()
        calc.generate("/repo/my-project")
        status = calc.run("/repo/my-project", "decision_12")
        for fact in status.payload:
            print(fact.field, fact.value)
    """

    def __init__(
        self,
        settings:        SolverSettings | None = None,
        project_factory: ProjectFactory = FolderProject,
    ) -> None:
        self._settings = settings or SolverSettings.from_env()
        self._factory  = project_factory
        self._contexts: dict[pathlib.Path, CalculationContext] = {}

    # ------------------------------------------------------------------
    # Konteksty projektów
    # ------------------------------------------------------------------

    def open_project(self, project_path: pathlib.Path | str) -> CalculationContext:
        """Tworzy świeży kontekst projektu (i zastępuje nim zapamiętany)."""
        root    = pathlib.Path(project_path).absolute()
        context = CalculationContext(self._factory(root), self._settings)
        self._contexts[root] = context
        return context

    def context_for(self, card: Card) -> CalculationContext:
        """
        Kontekst projektu, do którego należy karta; tworzony przy pierwszym użyciu.

        Raises:
            ProjectNotFoundError gdy karta nie leży w strukturze projektu.
        """
        root = find_project_root(card.path)
        if root is None:
            raise ProjectNotFoundError(card.key, pathlib.Path(card.path))
        context = self._contexts.get(root)
        if context is None:
            context = self.open_project(root)
        return context

    # ------------------------------------------------------------------
    # Operacje
    # ------------------------------------------------------------------

    def generate(
        self,
        project_path: pathlib.Path | str,
        card_key:     str | None = None,
    ) -> RequestStatus:
        """
        Generuje program logiczny projektu albo poddrzewa karty card_key.

        Returns:
            200 (payload: zapisane ścieżki) lub 400 gdy karta nie istnieje.

        Raises:
            ExceptionGroup gdy część plików nie została zapisana.
        """
        context = self.open_project(project_path)
        return self._generate(context, card_key)

    def run(self, project_path: pathlib.Path | str, card_key: str) -> RequestStatus:
        """
        Uruchamia zapytanie dla karty na wygenerowanym wcześniej programie.

        Returns:
            200 z payload list[DerivedFact], 400 (walidacja lub błąd clingo),
            500 (brak clingo) albo 504 (przekroczony limit czasu).
        """
        if not card_key:
            return RequestStatus(HTTPStatus.BAD_REQUEST, "Klucz karty jest wymagany")
        context = self.open_project(project_path)
        card = context.project.find_card(card_key)
        if card is None:
            log.warning("Zapytanie o nieznaną kartę '%s'", card_key)
            return RequestStatus(HTTPStatus.BAD_REQUEST, f"Nie znaleziono karty '{card_key}'")
        return SolverInvoker(self._settings).run(context.main_path, card.key)

    def handle_card_changed(self, changed: Card) -> RequestStatus:
        context = self.context_for(changed)
        return self._generate(context, changed.key)

    def handle_delete_card(self, deleted: Card | None) -> None:
        if deleted is None:
            return
        context = self.context_for(deleted)
        IncrementalUpdater(context).delete_card(deleted)

    def handle_new_cards(self, cards: Sequence[Card] | None) -> None:
        if not cards:
            return
        context = self.context_for(cards[0])
        IncrementalUpdater(context).new_cards(cards)

    # ------------------------------------------------------------------

    def _generate(self, context: CalculationContext, card_key: str | None) -> RequestStatus:
        scope: Card | None = None
        if card_key:
            scope = context.project.find_card(card_key)
            if scope is None:
                log.warning("Generowanie dla nieznanej karty '%s'", card_key)
                return RequestStatus(HTTPStatus.BAD_REQUEST, f"Nie znaleziono karty '{card_key}'")
        written = IncrementalUpdater(context).generate(scope)
        return RequestStatus(HTTPStatus.OK, payload=written)
