"""Komenda: cardcalc run — uruchamia clingo i listuje wyliczone pola karty."""

from __future__ import annotations

import argparse
import pathlib
from http import HTTPStatus

from rich.console import Console
from rich.table import Table
from rich import box

from solver import Calculate

console = Console(width=200)


def run(args: argparse.Namespace) -> None:
    status = Calculate().run(pathlib.Path(args.project), args.card)

    if status.status_code == HTTPStatus.INTERNAL_SERVER_ERROR:
        console.print(f"[yellow]{status.message}[/yellow]")
        raise SystemExit(1)
    if not status.ok:
        console.print(f"[red]{status.message}[/red]")
        raise SystemExit(1)

    facts = status.payload or []
    if not facts:
        console.print(f"[yellow]Brak wyliczonych pól dla karty {args.card}.[/yellow]")
        return

    table = Table(box=box.SIMPLE_HEAD, header_style="bold white", show_header=True)
    table.add_column("KARTA", style="cyan", no_wrap=True)
    table.add_column("POLE", style="bold", no_wrap=True)
    table.add_column("WARTOŚĆ", no_wrap=False)
    for fact in facts:
        table.add_row(fact.card_key, fact.field, fact.value)
    console.print(table)
    console.print(f"  [dim]{len(facts)} wyliczonych wartości[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "run",
        help="Uruchamia clingo i pokazuje wyliczone pola karty.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wymaga wcześniejszego 'cardcalc generate'. Pokazuje pola karty wyliczone
przez reguły (bez pól użytkownika: cardtype, summary, workflowState).

Zmienne środowiskowe:
  CARDCALC_CLINGO           plik wykonywalny clingo (domyślnie: clingo)
  CARDCALC_SOLVER_TIMEOUT   limit czasu w sekundach (domyślnie: 60)

Przykłady:
  cardcalc run ./moj-projekt --card decision_12
        """,
    )
    p.add_argument(
        "project",
        metavar="PROJEKT",
        help="Folder projektu kart.",
    )
    p.add_argument(
        "--card", "-c",
        metavar="KLUCZ",
        required=True,
        help="Klucz karty, dla której liczone są pola.",
    )
    p.set_defaults(func=run)
