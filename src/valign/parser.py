"""Row and cell parsing.

Parsing is pure: it turns the lines of a table into immutable ``Table``,
``Row`` and ``Cell`` values. All offsets stored in them are absolute buffer
positions, so later passes can hand them straight to the Width Oracle and
the emitter.

Cell boundaries::

    |  foo   |
     ^^        cell.start .. content_start: padding that may be overlaid
       ^^^^^   content span, keeps at most one space on each side
            ^^ content_end .. cell.end: padding that may be overlaid
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from valign.buffer import TextBuffer, iter_lines
from valign.dialects import Dialect, DialectRules, DialectSetting, infer_dialect, rules_for
from valign.errors import BadCell

RowKind = Literal["data", "separator"]
Alignment = Literal["left", "right"]

_ESCAPE = "\\"
_BLANK = " \t"


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Cell:
    """One delimiter-to-delimiter span of a row.

    For an empty cell the content span is the part that may be overlaid:
    everything after the first space (``[start + 1, end)``), or nothing if
    the cell has no characters at all.
    """

    column: int
    start: int
    end: int
    content_start: int
    content_end: int
    is_empty: bool


@dataclass(frozen=True)
class Row:
    kind: RowKind
    line_start: int
    text: str
    delimiters: tuple[int, ...]
    cells: tuple[Cell, ...]
    lineno: int | None = None

    @property
    def is_separator(self) -> bool:
        return self.kind == "separator"

    def char_at(self, pos: int) -> str:
        """Return the character at absolute *pos*, or ``""`` off the line."""
        idx = pos - self.line_start
        if 0 <= idx < len(self.text):
            return self.text[idx]
        return ""


@dataclass(frozen=True)
class Table:
    start: int
    end: int
    dialect: Dialect
    rows: tuple[Row, ...]

    @property
    def rules(self) -> DialectRules:
        return rules_for(self.dialect)

    @property
    def n_columns(self) -> int:
        """One more than the highest column index of any row."""
        return max((len(row.cells) for row in self.rows), default=0)

    @property
    def data_rows(self) -> list[Row]:
        return [row for row in self.rows if row.kind == "data"]

    @property
    def separator_rows(self) -> list[Row]:
        return [row for row in self.rows if row.kind == "separator"]


# ---------------------------------------------------------------------------
# Row parsing
# ---------------------------------------------------------------------------


def _find_delimiter(text: str, pos: int, delimiters: str) -> int:
    """Index of the next unescaped delimiter at or after *pos*, or -1."""
    i = pos
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == _ESCAPE:
            i += 2
            continue
        if ch in delimiters:
            return i
        i += 1
    return -1


def _classify(text: str, rules: DialectRules) -> tuple[RowKind, str, int]:
    """Return ``(kind, delimiters, first_delimiter_index)`` for a line."""
    first = len(text) - len(text.lstrip(_BLANK))
    head = text[first : first + 1]
    if head == "+":
        return "separator", "|+", first
    if head == "|" and first + 1 < len(text) and text[first + 1] in rules.separator_markers:
        return "separator", rules.separator_delimiters, first
    return "data", "|", first


def _make_cell(text: str, line_start: int, column: int, cb: int, ce: int) -> Cell:
    inner = text[cb:ce]
    if not inner.strip(_BLANK):
        cs = min(cb + 1, ce)
        return Cell(column, line_start + cb, line_start + ce, line_start + cs, line_start + ce, True)

    sb = cb + len(inner) - len(inner.lstrip(" "))
    se = ce - (len(inner) - len(inner.rstrip(" ")))
    cs = cb if sb - cb <= 1 else sb - 1
    c_e = ce if ce - se <= 1 else se + 1
    return Cell(column, line_start + cb, line_start + ce, line_start + cs, line_start + c_e, False)


def parse_row(
    text: str,
    line_start: int,
    rules: DialectRules,
    lineno: int | None = None,
) -> Row:
    """Parse one table line into a ``Row``.

    Anything before the first delimiter is indentation. After each
    delimiter the row either ends (only whitespace remains) or a cell runs
    to the next delimiter. A cell with no closing delimiter raises
    ``BadCell``.
    """
    kind, delimiters, first = _classify(text, rules)
    if first >= len(text) or text[first] not in delimiters:
        return Row(kind, line_start, text, (), (), lineno)

    delims = [line_start + first]
    cells: list[Cell] = []
    pos = first
    while text[pos + 1 :].strip():
        close = _find_delimiter(text, pos + 1, delimiters)
        if close == -1:
            raise BadCell(line_start + pos + 1, lineno)
        cells.append(_make_cell(text, line_start, len(cells), pos + 1, close))
        delims.append(line_start + close)
        pos = close

    return Row(kind, line_start, text, tuple(delims), tuple(cells), lineno)


def parse_table(
    buffer: TextBuffer,
    start: int,
    end: int,
    dialect: DialectSetting = "auto",
) -> Table:
    """Parse every line of ``[start, end]`` into a ``Table``."""
    lines: list[tuple[int, str]] = [
        (ls, buffer.substring(ls, le)) for ls, le in iter_lines(buffer, start, end)
    ]
    resolved: Dialect = infer_dialect([text for _, text in lines]) if dialect == "auto" else dialect
    rules = rules_for(resolved)
    rows = tuple(
        parse_row(text, ls, rules, buffer.line_number(ls)) for ls, text in lines
    )
    return Table(start, end, resolved, rows)


# ---------------------------------------------------------------------------
# Separator markers
# ---------------------------------------------------------------------------


def alignment_from_separator(row: Row, cell: Cell, rules: DialectRules) -> Alignment:
    """Read the alignment marker of one separator cell.

    ``:--`` is left, ``--:`` is right, and ``:-:`` (center) counts as left,
    as does a plain ``---``.
    """
    marker = rules.marker
    if marker is None:
        return "left"
    if row.char_at(cell.start) == marker:
        return "left"
    body = row.text[cell.start - row.line_start : cell.end - row.line_start]
    tail = body.lstrip("-").rstrip(" ")
    return "right" if tail.endswith(marker) else "left"
