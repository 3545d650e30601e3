"""Tests for column alignment resolution."""

from __future__ import annotations

import pytest

from valign.alignment import cell_alignment, resolve_alignments
from valign.buffer import StringBuffer
from valign.dialects import ORG
from valign.errors import BadCell
from valign.parser import Cell, Row, parse_row, parse_table


def _resolve(text: str, dialect: str) -> list[str]:
    buf = StringBuffer(text)
    return resolve_alignments(parse_table(buf, 0, len(buf), dialect))


def _one(text: str) -> str:
    row = parse_row(text, 0, ORG)
    return cell_alignment(row, row.cells[0])


# ---------------------------------------------------------------------------
# Marker strategy
# ---------------------------------------------------------------------------


class TestMarkerAlignment:
    """Markdown reads colons from separator rows."""

    def test_left_and_right_markers(self) -> None:
        assert _resolve("| x | yy |\n|:--|--:|\n| long | z |", "markdown") == ["left", "right"]

    def test_no_separator_row_is_left(self) -> None:
        assert _resolve("|a|b|\n|c|d|", "markdown") == ["left", "left"]

    def test_later_separator_row_wins(self) -> None:
        assert _resolve("|a|\n|--:|\n|b|\n|:--|", "markdown") == ["left"]

    def test_column_missing_from_separator_is_left(self) -> None:
        assert _resolve("|a|b|\n|--:|", "markdown") == ["right", "left"]

    def test_padding_is_ignored(self) -> None:
        assert _resolve("|  a |\n|---|", "markdown") == ["left"]


# ---------------------------------------------------------------------------
# Inference strategy
# ---------------------------------------------------------------------------


class TestCellAlignment:
    """Per-cell guess from padding."""

    def test_one_leading_space_is_left(self) -> None:
        assert _one("| x |") == "left"

    def test_leading_space_without_trailing(self) -> None:
        assert _one("| x|") == "left"

    def test_one_trailing_space_is_right(self) -> None:
        assert _one("|  x |") == "right"

    def test_content_then_space_is_right(self) -> None:
        assert _one("|x |") == "right"

    def test_no_padding_is_left(self) -> None:
        assert _one("|x|") == "left"

    def test_empty_cell_is_left(self) -> None:
        assert _one("|   |") == "left"

    def test_unterminated_cell_raises(self) -> None:
        row = Row("data", 0, "|  x", (0,), (Cell(0, 1, 4, 2, 4, False),))
        with pytest.raises(BadCell):
            cell_alignment(row, row.cells[0])


class TestInferredAlignment:
    """Org columns vote across data rows."""

    def test_majority_left(self) -> None:
        assert _resolve("| x |\n| y |\n|  z |", "org") == ["left"]

    def test_majority_right(self) -> None:
        assert _resolve("|  1 |\n| 22 |\n|  3 |", "org") == ["right"]

    def test_tie_goes_right(self) -> None:
        assert _resolve("| x |\n|  z |", "org") == ["right"]

    def test_separator_rows_do_not_vote(self) -> None:
        assert _resolve("| x |\n|---|\n| y |", "org") == ["left"]

    def test_column_without_votes_is_left(self) -> None:
        assert _resolve("| x |\n|---+---|", "org") == ["left", "left"]

    def test_empty_cells_vote_left(self) -> None:
        assert _resolve("|   |\n|   |\n|  z |", "org") == ["left"]
