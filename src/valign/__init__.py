"""valign: visual alignment of pipe tables without editing the text."""

# Alignment resolution
from valign.alignment import cell_alignment, resolve_alignments

# Buffer access
from valign.buffer import StringBuffer, TextBuffer

# Dialects
from valign.dialects import MARKDOWN, ORG, Dialect, DialectRules, DialectSetting, infer_dialect

# Directives and the directive store
from valign.directives import AlignTo, Directive, DirectiveStore, OverlayStore, Substitute

# Layout emission
from valign.emitter import emit

# Engine entry points
from valign.engine import align_document, align_region, align_table, layout, unalign_region

# Errors
from valign.errors import BadCell, NotOnTable, SurfaceUnavailable, ValignError

# Column metrics
from valign.metrics import column_widths

# Width measurement
from valign.oracle import CellWidthOracle, MetricsWidthOracle, WidthOracle

# Parsing
from valign.parser import Alignment, Cell, Row, Table, alignment_from_separator, parse_row, parse_table

# Invocation policy
from valign.policy import InvocationPolicy, Trigger

# Table location
from valign.markup import markup_table_line
from valign.scanner import is_table_line, locate

# Settings
from valign.settings import SeparatorStyle, Settings, SettingsManager

__all__ = [
    # Alignment resolution
    "cell_alignment",
    "resolve_alignments",
    # Buffer access
    "StringBuffer",
    "TextBuffer",
    # Dialects
    "MARKDOWN",
    "ORG",
    "Dialect",
    "DialectRules",
    "DialectSetting",
    "infer_dialect",
    # Directives
    "AlignTo",
    "Directive",
    "DirectiveStore",
    "OverlayStore",
    "Substitute",
    # Layout emission
    "emit",
    # Engine
    "align_document",
    "align_region",
    "align_table",
    "layout",
    "unalign_region",
    # Errors
    "BadCell",
    "NotOnTable",
    "SurfaceUnavailable",
    "ValignError",
    # Column metrics
    "column_widths",
    # Width measurement
    "CellWidthOracle",
    "MetricsWidthOracle",
    "WidthOracle",
    # Parsing
    "Alignment",
    "Cell",
    "Row",
    "Table",
    "alignment_from_separator",
    "parse_row",
    "parse_table",
    # Invocation policy
    "InvocationPolicy",
    "Trigger",
    # Table location
    "is_table_line",
    "locate",
    "markup_table_line",
    # Settings
    "SeparatorStyle",
    "Settings",
    "SettingsManager",
]
