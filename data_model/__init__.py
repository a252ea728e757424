"""
data_model — struktury danych silnika obliczeń kart.

Użycie:
  from data_model import Card, ModuleRef, FieldFact, parse_fact, ...

Moduły:
  cards — Card, ModuleRef, flatten_cards, subtree
  facts — CardFact, FieldFact, LabelFact, ParentFact, UserFieldFact,
          FieldTypeFact, parse_fact, quote, unquote
"""

from .cards import (
    FieldValue,
    Card,
    ModuleRef,
    flatten_cards,
    subtree,
)
from .facts import (
    Fact,
    CardFact,
    FieldFact,
    LabelFact,
    ParentFact,
    UserFieldFact,
    FieldTypeFact,
    parse_fact,
    quote,
    unquote,
)

__all__ = [
    # cards
    "FieldValue",
    "Card",
    "ModuleRef",
    "flatten_cards",
    "subtree",
    # facts
    "Fact",
    "CardFact",
    "FieldFact",
    "LabelFact",
    "ParentFact",
    "UserFieldFact",
    "FieldTypeFact",
    "parse_fact",
    "quote",
    "unquote",
]
