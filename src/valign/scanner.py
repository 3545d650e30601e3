"""Locate the textual extent of a table.

A table is a maximal run of contiguous table lines. A table line starts,
after optional indentation, with a cell bar ``|`` or a cross ``+``.
"""

from __future__ import annotations

import re
from typing import Callable, Iterator

from valign.buffer import TextBuffer, iter_lines
from valign.errors import NotOnTable

LinePredicate = Callable[[str], bool]

_TABLE_LINE_RE = re.compile(r"^[ \t]*[|+]")


def is_table_line(line: str) -> bool:
    return _TABLE_LINE_RE.match(line) is not None


def _line(buffer: TextBuffer, pos: int) -> str:
    return buffer.substring(buffer.line_start(pos), buffer.line_end(pos))


def locate(
    buffer: TextBuffer,
    pos: int,
    is_table_line: LinePredicate = is_table_line,
) -> tuple[int, int]:
    """Return ``(start, end)`` of the table containing *pos*.

    ``start`` is the beginning of the first table line and ``end`` the end
    of the last one (before its newline). Raises ``NotOnTable`` if the line
    at *pos* is not a table line.
    """
    start = buffer.line_start(pos)
    end = buffer.line_end(pos)
    if not is_table_line(buffer.substring(start, end)):
        raise NotOnTable(pos)

    while start > 0 and is_table_line(_line(buffer, start - 1)):
        start = buffer.line_start(start - 1)

    limit = len(buffer)
    while end < limit and is_table_line(_line(buffer, end + 1)):
        end = buffer.line_end(end + 1)

    return start, end


def iter_table_bounds(
    buffer: TextBuffer,
    start: int,
    end: int,
    is_table_line: LinePredicate = is_table_line,
) -> Iterator[tuple[int, int]]:
    """Yield the bounds of every table with a line inside ``[start, end]``.

    Each table is reported once, even if it extends past the region.
    """
    covered_until = -1
    for line_start, line_end in iter_lines(buffer, start, end):
        if line_start <= covered_until:
            continue
        if not is_table_line(buffer.substring(line_start, line_end)):
            continue
        bounds = locate(buffer, line_start, is_table_line)
        covered_until = bounds[1]
        yield bounds
