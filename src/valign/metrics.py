"""Column width aggregation (layout pass 1)."""

from __future__ import annotations

from valign.oracle import WidthOracle
from valign.parser import Cell, Table

# Padding added to every column, in space widths (one per side).
PADDING_SPACES = 2


def padding_width(table: Table, oracle: WidthOracle) -> int:
    """The fixed per-column padding, in device units."""
    return PADDING_SPACES * oracle.glyph_width(" ", table.start)


def cell_width(cell: Cell, oracle: WidthOracle) -> int:
    """Measured width of a cell's content span; empty cells measure 0.

    Whitespace is never measured: a proportional font can render a run of
    spaces wider than the content it pads, which would inflate the column.
    """
    if cell.is_empty:
        return 0
    return oracle.measure(cell.content_start, cell.content_end)


def column_widths(table: Table, oracle: WidthOracle) -> list[int]:
    """Return the target width of every column of *table*.

    Each column is as wide as its widest data cell plus the padding
    constant. Separator rows are not measured but still count towards the
    number of columns, so a column that only exists in a separator row gets
    exactly the padding.
    """
    widest: dict[int, int] = {}
    for row in table.data_rows:
        for cell in row.cells:
            width = cell_width(cell, oracle)
            # ">=" so a column of zero-width cells still records a value.
            if cell.column not in widest or width >= widest[cell.column]:
                widest[cell.column] = width

    padding = padding_width(table, oracle)
    return [widest.get(col, 0) + padding for col in range(table.n_columns)]
