"""
solver — generowanie programów logicznych kart i uruchamianie clingo.

Publiczne API:
  Calculate(settings)                   fasada: generate, run, handle_*
  IncrementalUpdater(context)           pełne i przyrostowe generowanie plików .lp
  CalculationContext(project, settings) jawny kontekst jednego projektu
  SolverInvoker(settings)               wywołanie clingo
  SolverSettings.from_env()             ustawienia ze środowiska / .env
  encode_card(card)                     → tekst jednostki karty
  parse_solver_output(text)             → list[DerivedFact]
  SolverExit, is_success(code)          kody wyjścia clingo
  DerivedFact, LogicUnit, RequestStatus typy danych
"""

from .calculate import Calculate
from .config    import SolverSettings
from .context   import CalculationContext
from .encoder   import encode_card, card_facts, parent_key
from .exit_codes import SolverExit, is_success, failing_conditions
from .invoker   import SolverInvoker, classify, query_program
from .results   import parse_solver_output
from .types     import DerivedFact, LogicUnit, ProjectNotFoundError, RequestStatus, UnitKind
from .updater   import IncrementalUpdater

__all__ = [
    "Calculate",
    "SolverSettings",
    "CalculationContext",
    "encode_card",
    "card_facts",
    "parent_key",
    "SolverExit",
    "is_success",
    "failing_conditions",
    "SolverInvoker",
    "classify",
    "query_program",
    "parse_solver_output",
    "DerivedFact",
    "LogicUnit",
    "ProjectNotFoundError",
    "RequestStatus",
    "UnitKind",
    "IncrementalUpdater",
]
