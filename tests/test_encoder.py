"""Tests for solver.encoder (card metadata → facts)."""
from __future__ import annotations

import pathlib

import pytest

from data_model import Card, FieldFact, LabelFact, ParentFact, parse_fact
from solver.encoder import card_facts, encode_card, parent_key, render_value

ROOT = pathlib.PurePosixPath("/repo/proj/cardroot")


class TestParentKey:
    def test_root_card_has_no_parent(self) -> None:
        assert parent_key(ROOT / "root") is None

    def test_child_parent_is_two_levels_up(self) -> None:
        assert parent_key(ROOT / "root" / "c" / "childA") == "root"

    def test_grandchild(self) -> None:
        assert parent_key(ROOT / "root" / "c" / "childA" / "c" / "leaf") == "childA"

    def test_short_path(self) -> None:
        assert parent_key("leaf") is None
        assert parent_key("a/leaf") is None

    def test_accepts_strings(self) -> None:
        assert parent_key("/p/cardroot/top/c/x") == "top"


class TestRenderValue:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("high", "high"),
            (3, "3"),
            (2.5, "2.5"),
            (True, "true"),
            (False, "false"),
            (None, ""),
            (["a", "b"], "a,b"),
        ],
    )
    def test_render(self, value, expected: str) -> None:
        assert render_value(value) == expected


class TestEncodeCard:
    def _card(self, key: str, path: pathlib.PurePath, **metadata) -> Card:
        return Card(key=key, path=pathlib.Path(path), metadata=metadata)

    def test_root_card_emits_no_parent(self) -> None:
        card = self._card("root", ROOT / "root", cardtype="page")
        assert not any(isinstance(f, ParentFact) for f in card_facts(card))
        assert "parent(" not in encode_card(card)

    def test_child_card_emits_parent(self) -> None:
        card = self._card("childA", ROOT / "root" / "c" / "childA", cardtype="page")
        assert ParentFact("childA", "root") in card_facts(card)
        assert "parent(childA, root).\n" in encode_card(card)

    def test_labels_become_label_facts(self) -> None:
        card = self._card("childA", ROOT / "root", labels=["urgent", "ux"])
        facts = card_facts(card)
        assert LabelFact("childA", "urgent") in facts
        assert LabelFact("childA", "ux") in facts
        assert not any(isinstance(f, FieldFact) and f.name == "labels" for f in facts)

    def test_fields_in_metadata_order(self) -> None:
        card = self._card("c1", ROOT / "c1", cardtype="page", priority="high", points=3)
        text = encode_card(card)
        assert text == (
            "\n% c1\n"
            'field(c1, "cardtype", "page").\n'
            'field(c1, "priority", "high").\n'
            'field(c1, "points", "3").\n'
        )

    def test_value_round_trips_through_parser(self) -> None:
        card = self._card("c1", ROOT / "c1", title='A "quoted", tricky\nvalue')
        line = encode_card(card).splitlines()[2]
        assert parse_fact(line) == FieldFact("c1", "title", 'A "quoted", tricky\nvalue')

    def test_deterministic(self) -> None:
        card = self._card("c1", ROOT / "p" / "c" / "c1", b="2", a="1", labels=["x"])
        assert encode_card(card) == encode_card(card)

    def test_empty_metadata(self) -> None:
        card = Card(key="c1", path=pathlib.Path(ROOT / "c1"))
        assert encode_card(card) == "\n% c1\n"
