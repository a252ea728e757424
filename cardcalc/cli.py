"""
cardcalc — narzędzie CLI obliczeń kart.

Użycie:
  cardcalc [-v] <komenda> [opcje]

Komendy:
  generate   Generuje program logiczny projektu (lub poddrzewa karty).
  run        Uruchamia clingo i pokazuje wyliczone pola karty.
"""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from cardcalc.commands import generate as cmd_generate
from cardcalc.commands import run as cmd_run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cardcalc",
        description="cardcalc — obliczenia pól kart (clingo).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version="cardcalc 0.1.0"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Wypisuj komunikaty diagnostyczne (poziom DEBUG).",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_generate.add_parser(subparsers)
    cmd_run.add_parser(subparsers)

    return parser


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def main(argv: list[str] | None = None) -> None:
    # Windows: terminal może używać cp1252, więc wymuszamy UTF-8 dla polskich
    # znaków w tekstach pomocy argparse.
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8", errors="replace")

    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
