"""Column alignment resolution.

Two strategies, picked by the table's dialect:

* marker -- read the separator row's colons.
* inference -- vote across data rows using how each cell is padded. The
  heuristic only tells single-sided from double-sided padding; it cannot
  see center alignment and can misread short content. It is kept as is.
"""

from __future__ import annotations

from typing import Callable

from valign.dialects import AlignmentSource
from valign.errors import BadCell
from valign.parser import Alignment, Cell, Row, Table, alignment_from_separator


def _marker_alignments(table: Table) -> list[Alignment]:
    alignments: list[Alignment] = ["left"] * table.n_columns
    for row in table.separator_rows:
        for cell in row.cells:
            alignments[cell.column] = alignment_from_separator(row, cell, table.rules)
    return alignments


def cell_alignment(row: Row, cell: Cell) -> Alignment:
    """Guess how one data cell is aligned from its padding.

    Left when the cell opens with exactly one space followed by a non-space
    (the closing bar counts). Otherwise right when the cell closes with a
    non-space, one space, then the bar. Otherwise left.
    """
    if row.char_at(cell.start) == " " and row.char_at(cell.start + 1) not in (" ", ""):
        return "left"
    if row.char_at(cell.end) != "|":
        raise BadCell(cell.end, row.lineno)
    if row.char_at(cell.end - 2) not in (" ", "") and row.char_at(cell.end - 1) == " ":
        return "right"
    return "left"


def _inferred_alignments(table: Table) -> list[Alignment]:
    votes: list[list[Alignment]] = [[] for _ in range(table.n_columns)]
    for row in table.data_rows:
        for cell in row.cells:
            votes[cell.column].append(cell_alignment(row, cell))

    alignments: list[Alignment] = []
    for column_votes in votes:
        if not column_votes:
            alignments.append("left")
            continue
        lefts = column_votes.count("left")
        # Strict majority for left; a tie goes right.
        alignments.append("left" if lefts > len(column_votes) / 2 else "right")
    return alignments


_STRATEGIES: dict[AlignmentSource, Callable[[Table], list[Alignment]]] = {
    "marker": _marker_alignments,
    "inference": _inferred_alignments,
}


def resolve_alignments(table: Table) -> list[Alignment]:
    """Return the alignment of every column of *table*."""
    return _STRATEGIES[table.rules.alignment](table)
