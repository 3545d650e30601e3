"""Read-only text buffer port.

The engine only needs character access and line arithmetic. ``TextBuffer``
describes that surface; ``StringBuffer`` is an immutable snapshot of a
string that hosts and tests can hand to the engine.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import Iterator, Protocol


# ---------------------------------------------------------------------------
# TextBuffer protocol
# ---------------------------------------------------------------------------


class TextBuffer(Protocol):
    """Interface for read-only buffer access."""

    def __len__(self) -> int: ...

    def substring(self, start: int, end: int) -> str: ...

    def line_start(self, pos: int) -> int: ...

    def line_end(self, pos: int) -> int: ...

    def line_number(self, pos: int) -> int: ...


# ---------------------------------------------------------------------------
# StringBuffer
# ---------------------------------------------------------------------------


class StringBuffer:
    """Immutable buffer over a Python string.

    Positions are character offsets. A line ends at its newline character
    (exclusive); the final line ends at ``len(text)``.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        starts = [0]
        idx = text.find("\n")
        while idx != -1:
            starts.append(idx + 1)
            idx = text.find("\n", idx + 1)
        self._line_starts = starts

    @property
    def text(self) -> str:
        return self._text

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def __len__(self) -> int:
        return len(self._text)

    def substring(self, start: int, end: int) -> str:
        return self._text[start:end]

    def char_after(self, pos: int) -> str | None:
        """Return the character at *pos*, or ``None`` past the end."""
        if 0 <= pos < len(self._text):
            return self._text[pos]
        return None

    def line_number(self, pos: int) -> int:
        """Return the 1-based line number containing *pos*."""
        pos = min(max(pos, 0), len(self._text))
        return bisect_right(self._line_starts, pos)

    def line_start(self, pos: int) -> int:
        return self._line_starts[self.line_number(pos) - 1]

    def line_end(self, pos: int) -> int:
        lineno = self.line_number(pos)
        if lineno < len(self._line_starts):
            return self._line_starts[lineno] - 1
        return len(self._text)

    def line_text(self, pos: int) -> str:
        """Return the text of the line containing *pos* (no newline)."""
        return self._text[self.line_start(pos) : self.line_end(pos)]


def iter_lines(buffer: TextBuffer, start: int, end: int) -> Iterator[tuple[int, int]]:
    """Yield line bounds over ``[start, end]`` using only the protocol methods."""
    pos = buffer.line_start(start)
    limit = len(buffer)
    while True:
        le = buffer.line_end(pos)
        yield pos, le
        if le >= end or le >= limit:
            return
        pos = le + 1
