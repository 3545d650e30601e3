"""Exception classes for valign.

``BadCell`` and ``SurfaceUnavailable`` are recoverable: the engine cleans up
the affected table and moves on. ``NotOnTable`` signals a caller bug.
"""

from __future__ import annotations


class ValignError(Exception):
    """Base exception for all valign errors."""


class BadCell(ValignError):
    """A cell's closing delimiter is missing on its line.

    Raised by the parser and the alignment resolver for malformed,
    unterminated rows.
    """

    def __init__(self, pos: int, lineno: int | None = None) -> None:
        self.pos = pos
        self.lineno = lineno
        location = f"line {lineno}, " if lineno is not None else ""
        super().__init__(f"{location}offset {pos}: cell is not terminated")


class NotOnTable(ValignError):
    """The position handed to the scanner is not on a table line."""

    def __init__(self, pos: int) -> None:
        self.pos = pos
        super().__init__(f"offset {pos} is not on a table line")


class SurfaceUnavailable(ValignError):
    """No live rendering surface to measure against."""

    def __init__(self, message: str = "no rendering surface available") -> None:
        super().__init__(message)
