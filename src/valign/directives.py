"""Layout directives and the store that holds them.

A directive changes how a range of the buffer is painted, never what it
contains. ``AlignTo`` turns a range into a blank (or ruled) stretch that
ends at a fixed visual position; ``Substitute`` paints one character with a
different glyph. The ``DirectiveStore`` port accepts directives and removes
them by range.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Protocol, Union

# ---------------------------------------------------------------------------
# Directives
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AlignTo:
    """Paint ``[start, end)`` as a stretch whose right edge lands on ``x``.

    ``x`` is measured from the start of the line. An empty range inserts the
    stretch before ``start``. When ``rule`` is set the stretch is drawn as a
    horizontal rule instead of blank space.
    """

    start: int
    end: int
    x: int
    rule: bool = False


@dataclass(frozen=True)
class Substitute:
    """Paint the character at ``start`` with ``glyph``."""

    start: int
    end: int
    glyph: str


Directive = Union[AlignTo, Substitute]


def directive_sort_key(directive: Directive) -> tuple[int, int, int]:
    """Order directives by position; substitutions after stretches at a tie."""
    return (directive.start, directive.end, 1 if isinstance(directive, Substitute) else 0)


# ---------------------------------------------------------------------------
# DirectiveStore protocol
# ---------------------------------------------------------------------------


class DirectiveStore(Protocol):
    """Interface for the host's overlay layer."""

    def apply(self, directive: Directive) -> None: ...

    def clear(self, start: int, end: int) -> None:
        """Remove every directive touching ``[start, end]``; idempotent."""
        ...


# ---------------------------------------------------------------------------
# OverlayStore
# ---------------------------------------------------------------------------


def _touches(directive: Directive, start: int, end: int) -> bool:
    if directive.start == directive.end:
        return start <= directive.start <= end
    return directive.start <= end and directive.end > start


class OverlayStore:
    """In-memory ``DirectiveStore``.

    Directives are kept in application order. ``clear`` drops any directive
    overlapping the range, including ones that stick out of it.
    """

    def __init__(self) -> None:
        self._directives: list[Directive] = []

    def apply(self, directive: Directive) -> None:
        if directive.end < directive.start:
            raise ValueError(f"directive range is reversed: {directive!r}")
        self._directives.append(directive)

    def clear(self, start: int, end: int) -> None:
        self._directives = [d for d in self._directives if not _touches(d, start, end)]

    def clear_all(self) -> None:
        self._directives.clear()

    def directives_in(self, start: int, end: int) -> list[Directive]:
        """Return the directives touching ``[start, end]``, sorted by position."""
        found = [d for d in self._directives if _touches(d, start, end)]
        return sorted(found, key=directive_sort_key)

    def snapshot(self) -> list[Directive]:
        """Return every directive, sorted by position."""
        return sorted(self._directives, key=directive_sort_key)

    def __iter__(self) -> Iterator[Directive]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._directives)
