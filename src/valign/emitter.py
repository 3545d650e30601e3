"""Layout emission (layout pass 2).

Walks the parsed table and produces the directives that make every column
render at its target width. All x positions are measured from the start of
the line, in the Width Oracle's device units.

Per row a running cursor marks where the current cell begins on screen: it
starts right after the opening bar and advances by the column width plus
one bar per cell.
"""

from __future__ import annotations

from valign.directives import AlignTo, Directive, Substitute
from valign.oracle import WidthOracle
from valign.parser import Alignment, Cell, Row, Table
from valign.settings import SeparatorStyle

# Glyphs painted over bars when fancy bars are on.
FANCY_BARS = {"|": "│", "+": "┼"}


def _row_origin(row: Row, oracle: WidthOracle) -> tuple[int, int]:
    """Return ``(cursor, bar_width)`` for the start of *row*.

    Every row advances by the width of ``|`` so separator rows drawn with
    ``+`` line up with the data rows.
    """
    first = row.delimiters[0]
    indent = oracle.measure(row.line_start, first)
    bar_width = oracle.glyph_width("|", first)
    return indent + bar_width, bar_width


def _fancy(row: Row, positions: tuple[int, ...] | list[int]) -> list[Directive]:
    out: list[Directive] = []
    for pos in positions:
        glyph = FANCY_BARS.get(row.char_at(pos))
        if glyph is not None:
            out.append(Substitute(pos, pos + 1, glyph))
    return out


# ---------------------------------------------------------------------------
# Separator rows
# ---------------------------------------------------------------------------


def _single_bar(row: Row, widths: list[int], oracle: WidthOracle) -> list[Directive]:
    cursor, bar_width = _row_origin(row, oracle)
    x = cursor + sum(widths) + bar_width * (len(widths) - 1)
    return [AlignTo(row.delimiters[0] + 1, row.delimiters[-1], x, rule=True)]


def _segmented(
    row: Row,
    widths: list[int],
    oracle: WidthOracle,
    marker: str | None,
) -> list[Directive]:
    cursor, bar_width = _row_origin(row, oracle)
    out: list[Directive] = []
    for cell in row.cells:
        start, end = cell.start, cell.end
        x = cursor + widths[cell.column]
        if marker is not None and end > start:
            # Markers stay visible at the edges of their segment.
            if row.char_at(start) == marker:
                start += 1
            if end > start and row.char_at(end - 1) == marker:
                end -= 1
                x -= oracle.glyph_width(marker, end)
        out.append(AlignTo(start, end, x, rule=True))
        cursor += widths[cell.column] + bar_width
    return out


def emit_separator_row(
    row: Row,
    widths: list[int],
    oracle: WidthOracle,
    *,
    style: SeparatorStyle = "segmented",
    marker: str | None = None,
    fancy_bar: bool = False,
) -> list[Directive]:
    if not row.cells:
        return []
    if style == "single":
        out = _single_bar(row, widths, oracle)
        if fancy_bar:
            out.extend(_fancy(row, [row.delimiters[0], row.delimiters[-1]]))
        return out

    out = _segmented(row, widths, oracle, marker)
    if fancy_bar:
        out.extend(_fancy(row, row.delimiters))
    return out


# ---------------------------------------------------------------------------
# Data rows
# ---------------------------------------------------------------------------


def _emit_cell(
    cell: Cell,
    cursor: int,
    width: int,
    alignment: Alignment,
    oracle: WidthOracle,
) -> list[Directive]:
    target = cursor + width
    if cell.is_empty:
        return [AlignTo(cell.content_start, cell.end, target)]

    out: list[Directive] = []
    if alignment == "left":
        if cell.content_start > cell.start:
            out.append(AlignTo(cell.start, cell.content_start, cursor))
        out.append(AlignTo(cell.content_end, cell.end, target))
        return out

    content = oracle.measure(cell.content_start, cell.content_end)
    out.append(AlignTo(cell.start, cell.content_start, target - content))
    if cell.content_end < cell.end:
        out.append(AlignTo(cell.content_end, cell.end, target))
    return out


def emit_data_row(
    row: Row,
    widths: list[int],
    alignments: list[Alignment],
    oracle: WidthOracle,
    *,
    fancy_bar: bool = False,
) -> list[Directive]:
    if not row.cells:
        return []
    cursor, bar_width = _row_origin(row, oracle)
    out: list[Directive] = []
    for cell in row.cells:
        width = widths[cell.column]
        out.extend(_emit_cell(cell, cursor, width, alignments[cell.column], oracle))
        cursor += width + bar_width
    if fancy_bar:
        out.extend(_fancy(row, row.delimiters))
    return out


# ---------------------------------------------------------------------------
# Whole table
# ---------------------------------------------------------------------------


def emit(
    table: Table,
    widths: list[int],
    alignments: list[Alignment],
    oracle: WidthOracle,
    *,
    separator_style: SeparatorStyle = "segmented",
    fancy_bar: bool = False,
) -> list[Directive]:
    """Return every directive needed to lay out *table*."""
    marker = table.rules.marker
    out: list[Directive] = []
    for row in table.rows:
        if row.is_separator:
            out.extend(
                emit_separator_row(
                    row, widths, oracle, style=separator_style, marker=marker, fancy_bar=fancy_bar
                )
            )
        else:
            out.extend(emit_data_row(row, widths, alignments, oracle, fancy_bar=fancy_bar))
    return out
