"""Glyph width measurement in terminal cells.

Widths are computed per grapheme cluster: wide and fullwidth characters
(CJK, most emoji) take two cells, combining marks and format characters
take none. Tabs advance to the next tab stop, so measuring needs the
column the text starts at.
"""

from __future__ import annotations

import unicodedata

import grapheme
import wcwidth as _wcwidth

DEFAULT_TAB_WIDTH = 8

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _remember(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


def clear_width_cache() -> None:
    _width_cache.clear()


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def _is_emoji_cluster(cluster: str) -> bool:
    for ch in cluster:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):  # VS16, ZWJ
            return True
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return True
    first = ord(cluster[0])
    return first >= 0x1F000 or 0x2600 <= first <= 0x27BF


def cluster_width(cluster: str) -> int:
    """Return the number of terminal cells one grapheme cluster occupies."""
    if not cluster:
        return 0

    if len(cluster) == 1:
        cp = ord(cluster)
        if cp < 0x20 or 0x7F <= cp <= 0x9F:
            return 0
        return max(_wcwidth.wcwidth(cluster), 0)

    if _is_emoji_cluster(cluster):
        return 2

    category = unicodedata.category(cluster[0])
    if category.startswith("M") or category == "Cf":
        return 0
    return max(_wcwidth.wcwidth(cluster[0]), 0)


# ---------------------------------------------------------------------------
# Text width
# ---------------------------------------------------------------------------


def text_width(text: str) -> int:
    """Return the cell width of *text*, which must not contain tabs."""
    if not text:
        return 0

    if text.isascii() and text.isprintable():
        return len(text)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached

    total = sum(cluster_width(g) for g in grapheme.graphemes(text))
    return _remember(text, total)


def advance(text: str, column: int = 0, tab_width: int = DEFAULT_TAB_WIDTH) -> int:
    """Return the column reached after painting *text* starting at *column*."""
    if "\t" not in text:
        return column + text_width(text)

    for piece_index, piece in enumerate(text.split("\t")):
        if piece_index:
            column += tab_width - column % tab_width
        column += text_width(piece)
    return column
