"""Markup conventions for what counts as a table.

The line grammar alone would treat a ``|`` at the start of a line inside a
code block as a table. These helpers find the lines that belong to code
(markdown fenced/indented code and raw HTML blocks via ``markdown-it-py``,
org ``#+begin_...`` blocks) so whole-document alignment can skip them.
A ``+ item`` line is a list bullet, not the start of a table row.
"""

from __future__ import annotations

import re
from typing import Iterator

from markdown_it import MarkdownIt

from valign.buffer import StringBuffer
from valign.dialects import DialectSetting
from valign.scanner import is_table_line, iter_table_bounds

# Block tokens whose lines are never tables.
_CODE_TOKENS = frozenset({"fence", "code_block", "html_block"})

_md_parser = MarkdownIt("commonmark")

_ORG_BLOCK_BEGIN_RE = re.compile(r"^[ \t]*#\+begin_(\w+)", re.IGNORECASE)
_ORG_BLOCK_END_FMT = r"^[ \t]*#\+end_{}\b"

# "+ item" is a list item in both markdown and org, never a table row.
_LIST_ITEM_RE = re.compile(r"^[ \t]*\+(?:[ \t]|$)")


def markup_table_line(line: str) -> bool:
    """Table-line grammar that leaves '+' bullet list items out."""
    return is_table_line(line) and _LIST_ITEM_RE.match(line) is None


def markdown_code_lines(text: str) -> set[int]:
    """Return the 1-based numbers of lines inside markdown code blocks."""
    lines: set[int] = set()
    for tok in _md_parser.parse(text):
        if tok.type in _CODE_TOKENS and tok.map:
            begin, end = tok.map
            lines.update(range(begin + 1, end + 1))
    return lines


def org_block_lines(text: str) -> set[int]:
    """Return the 1-based numbers of lines inside org ``#+begin_`` blocks.

    An unterminated block is not a block; org treats the begin line as
    plain text.
    """
    lines: set[int] = set()
    all_lines = text.split("\n")
    i = 0
    while i < len(all_lines):
        m = _ORG_BLOCK_BEGIN_RE.match(all_lines[i])
        if m is None:
            i += 1
            continue
        end_re = re.compile(_ORG_BLOCK_END_FMT.format(re.escape(m.group(1))), re.IGNORECASE)
        for j in range(i + 1, len(all_lines)):
            if end_re.match(all_lines[j]):
                lines.update(range(i + 1, j + 2))
                i = j
                break
        i += 1
    return lines


def code_lines(text: str, dialect: DialectSetting) -> set[int]:
    if dialect == "markdown":
        return markdown_code_lines(text)
    if dialect == "org":
        return org_block_lines(text)
    return markdown_code_lines(text) | org_block_lines(text)


def iter_tables(buffer: StringBuffer, dialect: DialectSetting = "auto") -> Iterator[tuple[int, int]]:
    """Yield the bounds of every table in *buffer* that is not inside code."""
    excluded = code_lines(buffer.text, dialect)
    for start, end in iter_table_bounds(buffer, 0, len(buffer), markup_table_line):
        if buffer.line_number(start) in excluded:
            continue
        yield start, end
