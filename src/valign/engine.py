"""The table layout engine.

``layout`` is the pure core: given a table's bounds it parses, measures and
returns directives without touching any store. The ``align_*`` functions
wire it to a ``DirectiveStore``: clear the table's span, lay it out, apply
the result. A malformed table is cleaned up and skipped so it never blocks
the rest of the document.
"""

from __future__ import annotations

import logging

from valign.alignment import resolve_alignments
from valign.buffer import StringBuffer, TextBuffer
from valign.directives import Directive, DirectiveStore
from valign.emitter import emit
from valign.errors import BadCell, SurfaceUnavailable
from valign.markup import iter_tables
from valign.metrics import column_widths
from valign.oracle import CellWidthOracle, WidthOracle
from valign.parser import parse_table
from valign.scanner import LinePredicate, is_table_line, iter_table_bounds, locate
from valign.settings import Settings

logger = logging.getLogger(__name__)


def layout(
    buffer: TextBuffer,
    start: int,
    end: int,
    oracle: WidthOracle,
    settings: Settings | None = None,
) -> list[Directive]:
    """Return the directives that align the table spanning ``[start, end]``.

    Any directives from an earlier pass must already be cleared, since the
    oracle measures what is currently rendered. Raises ``BadCell`` for a
    malformed table and ``SurfaceUnavailable`` if measuring fails.
    """
    settings = settings or Settings()
    table = parse_table(buffer, start, end, settings.dialect)
    widths = column_widths(table, oracle)
    alignments = resolve_alignments(table)
    return emit(
        table,
        widths,
        alignments,
        oracle,
        separator_style=settings.separator_style,
        fancy_bar=settings.fancy_bar,
    )


def _align_bounds(
    buffer: TextBuffer,
    start: int,
    end: int,
    oracle: WidthOracle,
    store: DirectiveStore,
    settings: Settings,
) -> bool:
    if end - start > settings.max_table_size:
        logger.debug("Skipping table at %d: %d characters exceeds limit", start, end - start)
        store.clear(start, end)
        return False

    store.clear(start, end)
    try:
        for directive in layout(buffer, start, end, oracle, settings):
            store.apply(directive)
    except BadCell as e:
        store.clear(start, end)
        logger.debug("Not aligning malformed table at %d: %s", start, e)
        if settings.signal_parse_error:
            raise
        return False
    except SurfaceUnavailable:
        store.clear(start, end)
        logger.debug("Rendering surface went away while aligning table at %d", start)
        return False
    except Exception:
        store.clear(start, end)
        logger.exception("Failed to align table at %d", start)
        raise
    return True


def align_table(
    buffer: TextBuffer,
    pos: int,
    oracle: WidthOracle,
    store: DirectiveStore,
    settings: Settings | None = None,
    *,
    is_table_line: LinePredicate = is_table_line,
) -> bool:
    """Align the table at *pos*. Returns ``True`` if directives were applied.

    Raises ``NotOnTable`` if *pos* is not on a table line; nothing is
    touched in that case, nor when the rendering surface is unavailable.
    """
    settings = settings or Settings()
    start, end = locate(buffer, pos, is_table_line)
    if not oracle.available:
        logger.debug("No rendering surface; deferring table at %d", start)
        return False
    return _align_bounds(buffer, start, end, oracle, store, settings)


def align_region(
    buffer: TextBuffer,
    start: int,
    end: int,
    oracle: WidthOracle,
    store: DirectiveStore,
    settings: Settings | None = None,
    *,
    is_table_line: LinePredicate = is_table_line,
) -> int:
    """Align every table with a line in ``[start, end]``.

    Returns the number of tables aligned.
    """
    settings = settings or Settings()
    if not oracle.available:
        logger.debug("No rendering surface; deferring region %d-%d", start, end)
        return 0
    aligned = 0
    for table_start, table_end in iter_table_bounds(buffer, start, end, is_table_line):
        if _align_bounds(buffer, table_start, table_end, oracle, store, settings):
            aligned += 1
    return aligned


def align_document(
    text: str,
    store: DirectiveStore,
    settings: Settings | None = None,
    *,
    oracle: WidthOracle | None = None,
) -> int:
    """Align every table of a whole document, skipping code blocks.

    Measures in terminal cells unless an *oracle* over the same text is
    given. Returns the number of tables aligned.
    """
    settings = settings or Settings()
    buffer = StringBuffer(text)
    oracle = oracle or CellWidthOracle(buffer)
    if not oracle.available:
        logger.debug("No rendering surface; deferring document")
        return 0
    aligned = 0
    for start, end in iter_tables(buffer, settings.dialect):
        if _align_bounds(buffer, start, end, oracle, store, settings):
            aligned += 1
    return aligned


def unalign_region(store: DirectiveStore, start: int, end: int) -> None:
    """Remove every layout directive in ``[start, end]``."""
    store.clear(start, end)
