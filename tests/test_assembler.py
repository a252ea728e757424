"""Tests for solver.assembler (fixed programs and include aggregators)."""
from __future__ import annotations

import pathlib

from data_model import ModuleRef
from solver.assembler import (
    BASE_PROGRAM,
    MAIN_PROGRAM,
    base_unit,
    cardtree_row,
    cardtree_unit,
    main_unit,
    module_row,
    modules_unit,
)
from solver.types import UnitKind


def test_base_program_contains_builtin_rules() -> None:
    for field in ("cardtype", "summary", "workflowState"):
        assert f'userfield(Cardkey, "{field}")' in BASE_PROGRAM
    assert 'card(C) :- field(C, "cardtype", _).' in BASE_PROGRAM
    assert 'fieldtype(X, Field, "cardkeys")' in BASE_PROGRAM
    assert "ancestor(A, C) :- parent(A, C)" in BASE_PROGRAM


def test_main_program_includes_in_order() -> None:
    rows = [r for r in MAIN_PROGRAM.splitlines() if r]
    assert rows == [
        '#include "base.lp".',
        '#include "cardtree.lp".',
        '#include "modules.lp".',
    ]


def test_cardtree_row() -> None:
    assert cardtree_row("childA") == '#include "cards/childA.lp".'


def test_module_row_strips_module_prefix() -> None:
    ref = ModuleRef("mymod/rules.lp", pathlib.Path("/p/.cards/modules/mymod/calculations"))
    assert module_row(ref) == '#include "/p/.cards/modules/mymod/calculations/rules.lp".'


def test_modules_unit_skips_refs_without_path(tmp_path: pathlib.Path) -> None:
    refs = [
        ModuleRef("a/one.lp", pathlib.Path("/x/a")),
        ModuleRef("b/virtual.lp", None),
        ModuleRef("c/two.lp", pathlib.Path("/x/c")),
    ]
    unit = modules_unit(tmp_path, refs)
    assert unit.kind == UnitKind.MODULES
    assert unit.path == tmp_path / "modules.lp"
    assert unit.text == '#include "/x/a/one.lp".\n#include "/x/c/two.lp".\n'


def test_units_target_calculation_folder(tmp_path: pathlib.Path) -> None:
    assert base_unit(tmp_path).path == tmp_path / "base.lp"
    assert main_unit(tmp_path).text == MAIN_PROGRAM
    tree = cardtree_unit(tmp_path, [cardtree_row("a"), cardtree_row("b")])
    assert tree.text == '#include "cards/a.lp".\n#include "cards/b.lp".\n'


def test_empty_cardtree(tmp_path: pathlib.Path) -> None:
    assert cardtree_unit(tmp_path, []).text == ""
