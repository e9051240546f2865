"""Tests for deck2html.editor — document-level slide operations."""

from __future__ import annotations

import pytest

from deck2html.editor import (
    NEW_SLIDE_TEMPLATE,
    delete_slide,
    duplicate_slide,
    insert_slide,
    line_of_slide,
    move_slide,
    slide_index_at_line,
    source_line_to_editor_line,
)
from deck2html.parser import parse_presentation

DECK = "# A\n\ntext\n---\n# B\n---\n# C"


class TestLineMapping:
    def test_slide_index_at_line(self):
        assert [slide_index_at_line(DECK, n) for n in range(1, 8)] == [0, 0, 0, 0, 1, 1, 2]

    def test_line_past_end(self):
        assert slide_index_at_line(DECK, 100) == 2

    def test_line_of_slide(self):
        assert [line_of_slide(DECK, i) for i in range(3)] == [1, 5, 7]

    def test_line_of_missing_slide(self):
        assert line_of_slide(DECK, 9) == 1

    def test_source_line_to_editor_line(self):
        slide = parse_presentation("# A\n---\n# B\n\nBody")[1]
        assert source_line_to_editor_line(slide, 2) == 5


class TestReorder:
    def test_move_forward(self):
        assert move_slide(DECK, 0, 2) == "# B\n---\n# C\n---\n# A\n\ntext"

    def test_move_back(self):
        assert move_slide(DECK, 2, 0) == "# C\n---\n# A\n\ntext\n---\n# B"

    def test_move_out_of_range(self):
        assert move_slide(DECK, 0, 5) == DECK


class TestDeleteDuplicate:
    def test_delete(self):
        assert delete_slide(DECK, 1) == "# A\n\ntext\n---\n# C"

    def test_last_slide_kept(self):
        assert delete_slide("# Only", 0) == "# Only"

    def test_duplicate(self):
        assert duplicate_slide(DECK, 1) == "# A\n\ntext\n---\n# B\n---\n# B\n---\n# C"

    def test_duplicate_out_of_range(self):
        assert duplicate_slide(DECK, 3) == DECK


class TestInsert:
    def test_insert_below(self):
        result = insert_slide(DECK, 0)
        assert len(parse_presentation(result)) == 4
        assert result.split("\n---\n")[1] == NEW_SLIDE_TEMPLATE

    def test_insert_above(self):
        result = insert_slide(DECK, 0, "above", template="# First")
        assert result.startswith("# First\n---\n# A")

    def test_insert_after_last(self):
        assert insert_slide(DECK, 2, template="# D").endswith("# C\n---\n# D")

    def test_bad_position(self):
        with pytest.raises(ValueError, match="position"):
            insert_slide(DECK, 0, "left")
