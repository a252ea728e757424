"""Shared fixtures: a small on-disk card project."""
from __future__ import annotations

import pathlib

import pytest

from card_store import FolderProject, write_card
from solver import Calculate, CalculationContext, SolverSettings

RULES = 'field(X, "derived", "yes") :- card(X).\n'


@pytest.fixture
def settings() -> SolverSettings:
    return SolverSettings(clingo_binary="clingo", timeout=5.0, workers=4)


@pytest.fixture
def project(tmp_path: pathlib.Path) -> pathlib.Path:
    """Project with cards root, childA (label urgent) and childB."""
    base = tmp_path / "proj"
    calculations = base / ".cards" / "local" / "calculations"
    calculations.mkdir(parents=True)
    (calculations / "rules.lp").write_text(RULES, encoding="utf-8")

    root = write_card(
        base / "cardroot",
        "root",
        {"cardtype": "page", "summary": "Root", "workflowState": "Draft"},
    )
    write_card(root, "childA", {"cardtype": "page", "summary": "A", "labels": ["urgent"]})
    write_card(root, "childB", {"cardtype": "page", "summary": "B"})
    return base


@pytest.fixture
def calc(settings: SolverSettings) -> Calculate:
    return Calculate(settings)


@pytest.fixture
def context(project: pathlib.Path, settings: SolverSettings) -> CalculationContext:
    return CalculationContext(FolderProject(project), settings)


def card_folder(project: pathlib.Path, *keys: str) -> pathlib.Path:
    """Folder of a card given its key path from the root, e.g. ("root", "childA")."""
    folder = project / "cardroot" / keys[0]
    for key in keys[1:]:
        folder = folder / "c" / key
    return folder


def snapshot(folder: pathlib.Path) -> dict[str, bytes]:
    return {
        str(p.relative_to(folder)): p.read_bytes()
        for p in sorted(folder.rglob("*"))
        if p.is_file()
    }
