"""Komenda: cardcalc generate — generuje pliki .lp folderu obliczeń projektu."""

from __future__ import annotations

import argparse
import pathlib

from rich.console import Console

from card_store import CALCULATION_FOLDER
from solver import Calculate

console = Console()


def run(args: argparse.Namespace) -> None:
    project = pathlib.Path(args.project)
    if not project.is_dir():
        console.print(f"[red]Brak folderu projektu:[/red] {project}")
        raise SystemExit(1)

    try:
        status = Calculate().generate(project, args.card)
    except ExceptionGroup as eg:
        console.print(f"[red]{eg.message}[/red]")
        for exc in eg.exceptions:
            console.print(f"  [red]•[/red] {exc}")
        raise SystemExit(1)

    if not status.ok:
        console.print(f"[red]{status.message}[/red]")
        raise SystemExit(1)

    scope = f"poddrzewo [cyan]{args.card}[/cyan]" if args.card else "cały projekt"
    console.print(
        f"Wygenerowano obliczenia ({scope}): "
        f"[green]{len(status.payload)}[/green] plików w [bold]{project / CALCULATION_FOLDER}[/bold]"
    )


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "generate",
        help="Generuje program logiczny projektu (lub poddrzewa karty).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Zapisuje w <projekt>/.calc pliki base.lp, cardtree.lp, modules.lp, main.lp
oraz cards/<klucz>.lp dla każdej karty.

Z opcją --card generowane jest tylko poddrzewo karty (base.lp, modules.lp
i main.lp pozostają bez zmian).

Przykłady:
  cardcalc generate ./moj-projekt
  cardcalc generate ./moj-projekt --card decision_12
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
        help="Ogranicz generowanie do poddrzewa tej karty.",
    )
    p.set_defaults(func=run)
