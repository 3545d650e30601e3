"""Table dialects.

valign understands two pipe-table grammars. They share the row/cell layout
and differ in how column alignment is expressed:

* ``markdown`` -- alignment is written as colons in the separator row
  (``|:--|--:|``).
* ``org`` -- there are no markers; alignment is inferred from how the cells
  are padded, and ``+`` joins the segments of a separator row
  (``|---+---|``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Dialect = Literal["markdown", "org"]
DialectSetting = Literal["markdown", "org", "auto"]
AlignmentSource = Literal["marker", "inference"]

DIALECTS: tuple[Dialect, ...] = ("markdown", "org")


@dataclass(frozen=True)
class DialectRules:
    """Grammar details the parser, resolver and emitter consult."""

    name: Dialect
    alignment: AlignmentSource
    # Characters that, right after a row's first bar, mark a separator row.
    separator_markers: str
    # Characters that split cells inside a separator row.
    separator_delimiters: str
    # Colon-style alignment marker, if the dialect has one.
    marker: str | None = None


MARKDOWN = DialectRules(
    name="markdown",
    alignment="marker",
    separator_markers="-:",
    separator_delimiters="|",
    marker=":",
)

ORG = DialectRules(
    name="org",
    alignment="inference",
    separator_markers="-",
    separator_delimiters="|+",
)

_RULES: dict[Dialect, DialectRules] = {"markdown": MARKDOWN, "org": ORG}


def rules_for(dialect: Dialect) -> DialectRules:
    return _RULES[dialect]


def infer_dialect(lines: list[str]) -> Dialect:
    """Guess the dialect of a table from its lines.

    A table is ``org`` when one of its separator rows uses ``+`` as a bar
    (``|---+---|`` or ``+---+``); everything else is ``markdown``.
    """
    for line in lines:
        stripped = line.lstrip(" \t")
        if stripped.startswith("+"):
            return "org"
        if stripped.startswith("|-") and "+" in stripped.rstrip().rstrip("|"):
            return "org"
    return "markdown"
