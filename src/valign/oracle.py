"""Width Oracle: rendered widths of buffer ranges.

The engine never looks at fonts itself. It asks a ``WidthOracle`` how wide a
range of one line renders, in device units, and lays the table out from
those answers. Two implementations are provided:

* ``CellWidthOracle`` -- a monospace grid, each terminal cell ``cell_width``
  units wide, wide glyphs taking two cells.
* ``MetricsWidthOracle`` -- a per-glyph advance table, for proportional
  fonts where spaces, letters and CJK glyphs all differ.

Both measure from the start of the line so tab stops come out right, and
both raise ``SurfaceUnavailable`` when marked unavailable.
"""

from __future__ import annotations

from typing import Mapping, Protocol

import grapheme

from valign.buffer import TextBuffer
from valign.errors import SurfaceUnavailable
from valign.widths import DEFAULT_TAB_WIDTH, advance, cluster_width

# ---------------------------------------------------------------------------
# WidthOracle protocol
# ---------------------------------------------------------------------------


class WidthOracle(Protocol):
    """Interface over the rendering surface."""

    @property
    def available(self) -> bool: ...

    def measure(self, start: int, end: int) -> int:
        """Rendered width of ``[start, end)``, which lies on one line."""
        ...

    def glyph_width(self, char: str, pos: int) -> int:
        """Rendered width of *char* if painted at *pos*."""
        ...


# ---------------------------------------------------------------------------
# CellWidthOracle
# ---------------------------------------------------------------------------


class CellWidthOracle:
    """Measure in terminal cells scaled by ``cell_width`` device units."""

    def __init__(
        self,
        buffer: TextBuffer,
        *,
        cell_width: int = 1,
        tab_width: int = DEFAULT_TAB_WIDTH,
        available: bool = True,
    ) -> None:
        self._buffer = buffer
        self._cell_width = cell_width
        self._tab_width = tab_width
        self._available = available

    @property
    def available(self) -> bool:
        return self._available

    def detach(self) -> None:
        """Mark the surface as gone; later measurements raise."""
        self._available = False

    def _column_at(self, pos: int) -> int:
        line_start = self._buffer.line_start(pos)
        return advance(self._buffer.substring(line_start, pos), 0, self._tab_width)

    def measure(self, start: int, end: int) -> int:
        if not self._available:
            raise SurfaceUnavailable()
        if end <= start:
            return 0
        col = self._column_at(start)
        end_col = advance(self._buffer.substring(start, end), col, self._tab_width)
        return (end_col - col) * self._cell_width

    def glyph_width(self, char: str, pos: int) -> int:
        if not self._available:
            raise SurfaceUnavailable()
        if char == "\t":
            col = self._column_at(pos)
            return (self._tab_width - col % self._tab_width) * self._cell_width
        return cluster_width(char) * self._cell_width


# ---------------------------------------------------------------------------
# MetricsWidthOracle
# ---------------------------------------------------------------------------


class MetricsWidthOracle:
    """Measure with a glyph advance table, as a proportional font would.

    ``advances`` maps single characters to widths. Anything missing from the
    table gets ``default_advance``, or ``wide_advance`` when it occupies two
    terminal cells. Tabs are rendered as ``tab_advance`` units.
    """

    def __init__(
        self,
        buffer: TextBuffer,
        advances: Mapping[str, int],
        *,
        default_advance: int = 10,
        wide_advance: int | None = None,
        tab_advance: int | None = None,
        available: bool = True,
    ) -> None:
        self._buffer = buffer
        self._advances = dict(advances)
        self._default = default_advance
        self._wide = wide_advance if wide_advance is not None else 2 * default_advance
        self._tab = tab_advance if tab_advance is not None else 4 * self._glyph(" ")
        self._available = available

    @property
    def available(self) -> bool:
        return self._available

    def detach(self) -> None:
        self._available = False

    def _glyph(self, cluster: str) -> int:
        known = self._advances.get(cluster)
        if known is not None:
            return known
        cells = cluster_width(cluster)
        if cells == 0:
            return 0
        return self._wide if cells > 1 else self._default

    def measure(self, start: int, end: int) -> int:
        if not self._available:
            raise SurfaceUnavailable()
        total = 0
        for g in grapheme.graphemes(self._buffer.substring(start, end)):
            total += self._tab if g == "\t" else self._glyph(g)
        return total

    def glyph_width(self, char: str, pos: int) -> int:
        if not self._available:
            raise SurfaceUnavailable()
        if char == "\t":
            return self._tab
        return self._glyph(char)
