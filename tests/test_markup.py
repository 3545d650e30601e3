"""Tests for code-block detection and whole-document table discovery."""

from __future__ import annotations

from valign.buffer import StringBuffer
from valign.markup import (
    code_lines,
    iter_tables,
    markdown_code_lines,
    markup_table_line,
    org_block_lines,
)


class TestMarkdownCodeLines:
    def test_fenced_block(self) -> None:
        text = "intro\n\n```\n|a|\n```\n"
        assert {3, 4, 5} <= markdown_code_lines(text)
        assert 1 not in markdown_code_lines(text)

    def test_indented_block(self) -> None:
        assert 3 in markdown_code_lines("intro\n\n    |a|b|\n")

    def test_plain_table_is_not_code(self) -> None:
        assert markdown_code_lines("|a|b|\n|-|-|\n") == set()


class TestOrgBlockLines:
    def test_src_block(self) -> None:
        text = "#+BEGIN_SRC python\n|a|\n#+END_SRC\n|b|"
        assert org_block_lines(text) == {1, 2, 3}

    def test_mismatched_end_does_not_close(self) -> None:
        text = "#+begin_example\n|a|\n#+end_src\n"
        assert org_block_lines(text) == set()

    def test_unterminated_block(self) -> None:
        assert org_block_lines("#+begin_src\n|a|\n") == set()


class TestIterTables:
    """Tables inside code are skipped."""

    def test_dialect_selects_convention(self) -> None:
        text = "```\n|a|\n```\n"
        assert 2 in code_lines(text, "markdown")
        assert code_lines(text, "org") == set()
        assert 2 in code_lines(text, "auto")

    def test_skips_code(self) -> None:
        text = "```\n|a|\n```\n\n|b|\n"
        buf = StringBuffer(text)
        assert list(iter_tables(buf)) == [(text.index("|b|"), text.index("|b|") + 3)]

    def test_no_code(self) -> None:
        buf = StringBuffer("|a|\n\n|b|")
        assert list(iter_tables(buf)) == [(0, 3), (5, 8)]

    def test_list_bullet_ends_table(self) -> None:
        text = "|a|\n+ item\n|b|"
        buf = StringBuffer(text)
        assert list(iter_tables(buf)) == [(0, 3), (text.index("|b|"), len(text))]


class TestMarkupTableLine:
    """'+' starts a table row only as a separator cross."""

    def test_bar_row(self) -> None:
        assert markup_table_line("  | a |")

    def test_cross_separator(self) -> None:
        assert markup_table_line("+---+---+")
        assert markup_table_line("++")

    def test_bullet_item(self) -> None:
        assert not markup_table_line("+ list item")
        assert not markup_table_line("  +\tnested item")

    def test_empty_bullet(self) -> None:
        assert not markup_table_line("+")

    def test_plain_text(self) -> None:
        assert not markup_table_line("text | more")
