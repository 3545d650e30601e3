"""Tests for row/cell parsing and separator markers."""

from __future__ import annotations

import pytest

from valign.buffer import StringBuffer
from valign.dialects import MARKDOWN, ORG, infer_dialect
from valign.errors import BadCell
from valign.parser import alignment_from_separator, parse_row, parse_table


def _spans(text: str, rules=MARKDOWN) -> list[tuple[str, str, bool]]:
    """Parse *text* at offset 0 and return (cell, content, empty) per cell."""
    row = parse_row(text, 0, rules)
    return [
        (text[c.start : c.end], text[c.content_start : c.content_end], c.is_empty)
        for c in row.cells
    ]


# ---------------------------------------------------------------------------
# Row kinds
# ---------------------------------------------------------------------------


class TestRowKind:
    """Separator rows are recognised by the character after the first bar."""

    def test_data_row(self) -> None:
        assert parse_row("|a|b|", 0, MARKDOWN).kind == "data"

    def test_dash_separator(self) -> None:
        assert parse_row("|---|---|", 0, MARKDOWN).kind == "separator"

    def test_colon_separator_in_markdown(self) -> None:
        assert parse_row("|:--|--:|", 0, MARKDOWN).kind == "separator"

    def test_colon_is_data_in_org(self) -> None:
        assert parse_row("|:a|b|", 0, ORG).kind == "data"

    def test_plus_line_is_separator(self) -> None:
        row = parse_row("+---+---+", 0, MARKDOWN)
        assert row.kind == "separator"
        assert len(row.cells) == 2

    def test_space_before_dash_is_data(self) -> None:
        assert parse_row("| --- |", 0, MARKDOWN).kind == "data"

    def test_org_separator_splits_on_plus(self) -> None:
        row = parse_row("|---+----|", 0, ORG)
        assert row.kind == "separator"
        assert [(c.start, c.end) for c in row.cells] == [(1, 4), (5, 9)]

    def test_markdown_separator_does_not_split_on_plus(self) -> None:
        row = parse_row("|---+----|", 0, MARKDOWN)
        assert len(row.cells) == 1


# ---------------------------------------------------------------------------
# Cell boundaries
# ---------------------------------------------------------------------------


class TestCellBoundaries:
    """Content spans keep at most one boundary space per side."""

    def test_no_padding(self) -> None:
        assert _spans("|ab|") == [("ab", "ab", False)]

    def test_single_space_each_side_is_kept(self) -> None:
        assert _spans("| ab |") == [(" ab ", " ab ", False)]

    def test_extra_padding_is_trimmed_to_one_space(self) -> None:
        assert _spans("|   ab    |") == [("   ab    ", " ab ", False)]

    def test_mixed_padding(self) -> None:
        assert _spans("|ab   |") == [("ab   ", "ab ", False)]

    def test_inner_spaces_are_content(self) -> None:
        assert _spans("|  a b  |") == [("  a b  ", " a b ", False)]

    def test_empty_cell_keeps_one_space(self) -> None:
        row = parse_row("|    |", 10, MARKDOWN)
        cell = row.cells[0]
        assert cell.is_empty
        assert (cell.start, cell.content_start, cell.content_end, cell.end) == (11, 12, 15, 15)

    def test_delimiter_touching_empty_cell(self) -> None:
        row = parse_row("|a||", 0, MARKDOWN)
        cell = row.cells[1]
        assert cell.is_empty
        assert (cell.start, cell.content_start, cell.end) == (3, 3, 3)

    def test_offsets_are_absolute(self) -> None:
        row = parse_row("  |a|", 100, MARKDOWN)
        assert row.delimiters == (102, 104)
        assert (row.cells[0].start, row.cells[0].end) == (103, 104)

    def test_column_indices(self) -> None:
        row = parse_row("|a|b|c|", 0, MARKDOWN)
        assert [c.column for c in row.cells] == [0, 1, 2]

    def test_escaped_bar_does_not_split(self) -> None:
        assert _spans(r"|a\|b|c|") == [(r"a\|b", r"a\|b", False), ("c", "c", False)]

    def test_trailing_whitespace_after_last_bar_ignored(self) -> None:
        assert len(parse_row("|a|b|   ", 0, MARKDOWN).cells) == 2

    def test_lone_bar_has_no_cells(self) -> None:
        assert parse_row("|", 0, MARKDOWN).cells == ()


class TestBadCell:
    """An unterminated cell is an error."""

    def test_missing_closing_bar(self) -> None:
        with pytest.raises(BadCell) as exc_info:
            parse_row("|a|b", 0, MARKDOWN, lineno=4)
        assert exc_info.value.pos == 3
        assert exc_info.value.lineno == 4

    def test_escaped_final_bar(self) -> None:
        with pytest.raises(BadCell):
            parse_row(r"|a\|", 0, MARKDOWN)


# ---------------------------------------------------------------------------
# Separator markers
# ---------------------------------------------------------------------------


class TestAlignmentFromSeparator:
    """Colons in a markdown separator row."""

    def _alignments(self, text: str, rules=MARKDOWN) -> list[str]:
        row = parse_row(text, 0, rules)
        return [alignment_from_separator(row, cell, rules) for cell in row.cells]

    def test_left_and_right(self) -> None:
        assert self._alignments("|:--|--:|") == ["left", "right"]

    def test_plain_dashes_are_left(self) -> None:
        assert self._alignments("|---|") == ["left"]

    def test_center_collapses_to_left(self) -> None:
        assert self._alignments("|:-:|") == ["left"]

    def test_trailing_space_before_bar(self) -> None:
        assert self._alignments("|--: |") == ["right"]

    def test_org_has_no_markers(self) -> None:
        assert self._alignments("|--:|", ORG) == ["left"]


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------


class TestParseTable:
    """Whole-table parsing and dialect inference."""

    def test_rows_and_columns(self) -> None:
        buf = StringBuffer("|a|b|\n|-|-|\n|c|d|e|")
        table = parse_table(buf, 0, len(buf), "markdown")
        assert [row.kind for row in table.rows] == ["data", "separator", "data"]
        assert table.n_columns == 3
        assert [row.lineno for row in table.rows] == [1, 2, 3]

    def test_column_count_includes_separator_rows(self) -> None:
        buf = StringBuffer("|a|\n|-|-|-|")
        assert parse_table(buf, 0, len(buf), "markdown").n_columns == 3

    def test_auto_detects_org(self) -> None:
        buf = StringBuffer("| a | b |\n|---+---|")
        assert parse_table(buf, 0, len(buf)).dialect == "org"

    def test_auto_defaults_to_markdown(self) -> None:
        buf = StringBuffer("| a | b |\n|:--|---|")
        assert parse_table(buf, 0, len(buf)).dialect == "markdown"

    def test_bad_cell_reports_line(self) -> None:
        buf = StringBuffer("|a|b|\n|c|d")
        with pytest.raises(BadCell) as exc_info:
            parse_table(buf, 0, len(buf), "markdown")
        assert exc_info.value.lineno == 2


class TestInferDialect:
    def test_plus_line(self) -> None:
        assert infer_dialect(["+--+", "|a|"]) == "org"

    def test_plus_inside_separator(self) -> None:
        assert infer_dialect(["|a|b|", "|--+--|"]) == "org"

    def test_plain_table(self) -> None:
        assert infer_dialect(["|a|b|", "|--|--|"]) == "markdown"
