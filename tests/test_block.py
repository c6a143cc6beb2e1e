"""Tests for the block math rule.

Covers single-line and multi-line blocks, indentation inside containers,
implicit closing of unterminated blocks, and the probe contract used by
paragraph/list/blockquote termination.
"""

import logging

import pytest
from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock

from texspan.block import math_block


def _math_blocks(md: MarkdownIt, source: str) -> list:
    return [t for t in md.parse(source) if t.type == "math_block"]


# =========================================================================
# Closed blocks
# =========================================================================


class TestClosedBlocks:
    """Blocks with an explicit closing marker."""

    def test_multiline_block(self, md: MarkdownIt) -> None:
        (token,) = _math_blocks(md, "$$\nE=mc^2\n$$\n")
        assert token.content == "E=mc^2\n"
        assert token.map == [0, 3]
        assert token.markup == "$$"
        assert token.block is True

    def test_multiline_block_without_trailing_newline(self, md: MarkdownIt) -> None:
        (token,) = _math_blocks(md, "$$\nE=mc^2\n$$")
        assert token.content == "E=mc^2\n"

    def test_single_line_block(self, md: MarkdownIt) -> None:
        (token,) = _math_blocks(md, "$$E=mc^2$$\n")
        assert token.content == "E=mc^2\n"
        assert token.map == [0, 1]

    def test_single_line_block_strips_whitespace(self, md: MarkdownIt) -> None:
        (token,) = _math_blocks(md, "$$  a + b  $$  \n")
        assert token.content == "a + b\n"

    def test_empty_single_line_block(self, md: MarkdownIt) -> None:
        (token,) = _math_blocks(md, "$$ $$\n")
        assert token.content == ""

    def test_content_on_opening_and_closing_lines(self, md: MarkdownIt) -> None:
        (token,) = _math_blocks(md, "$$ a\nb\nc $$\n")
        assert token.content == " a\nb\nc "
        assert token.map == [0, 3]

    def test_blank_lines_are_kept(self, md: MarkdownIt) -> None:
        (token,) = _math_blocks(md, "$$\na\n\nb\n$$\n")
        assert token.content == "a\n\nb\n"

    def test_last_marker_on_closing_line_is_used(self, md: MarkdownIt) -> None:
        (token,) = _math_blocks(md, "$$\nx $$ y $$\n")
        assert token.content == "x $$ y "

    def test_following_content_is_parsed(self, md: MarkdownIt) -> None:
        tokens = md.parse("$$\nx\n$$\nafter\n")
        assert [t.type for t in tokens] == [
            "math_block",
            "paragraph_open",
            "inline",
            "paragraph_close",
        ]

    def test_indented_opening_dedents_content(self, md: MarkdownIt) -> None:
        (token,) = _math_blocks(md, "  $$\n  x\n    y\n  $$\n")
        assert token.content == "x\n  y\n"


# =========================================================================
# Unterminated blocks
# =========================================================================


class TestUnterminatedBlocks:
    """Blocks without a closing marker are closed where their container ends."""

    def test_closed_at_end_of_document(self, md: MarkdownIt) -> None:
        (token,) = _math_blocks(md, "$$\nfoo")
        assert token.content == "foo\n"
        assert token.map == [0, 2]

    def test_closed_at_end_with_trailing_newline(self, md: MarkdownIt) -> None:
        (token,) = _math_blocks(md, "$$\nfoo\nbar\n")
        assert token.content == "foo\nbar\n"
        assert token.map == [0, 3]

    def test_lone_opener(self, md: MarkdownIt) -> None:
        (token,) = _math_blocks(md, "$$\n")
        assert token.content == ""
        assert token.map == [0, 1]

    def test_less_indented_line_is_not_consumed(self, md: MarkdownIt) -> None:
        tokens = md.parse("- $$\n  x\ny\n")
        (token,) = [t for t in tokens if t.type == "math_block"]
        assert token.content == "x\n"
        assert token.map == [0, 2]
        paragraphs = [t for t in tokens if t.type == "inline"]
        assert [t.content for t in paragraphs] == ["y"]

    def test_unterminated_block_is_logged(
        self, md: MarkdownIt, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="texspan"):
            md.parse("$$\nfoo\n")
        assert any("Unterminated math block" in r.getMessage() for r in caplog.records)


# =========================================================================
# Containers and interruption
# =========================================================================


class TestContainers:
    """Block math inside lists and blockquotes."""

    def test_inside_list_item(self, md: MarkdownIt) -> None:
        (token,) = _math_blocks(md, "- $$\n  x\n  $$\n")
        assert token.content == "x\n"

    def test_inside_blockquote(self, md: MarkdownIt) -> None:
        (token,) = _math_blocks(md, "> $$\n> x\n> $$\n")
        assert token.content == "x\n"

    def test_interrupts_paragraph(self, md: MarkdownIt) -> None:
        tokens = md.parse("text\n$$\nx\n$$\n")
        assert [t.type for t in tokens] == [
            "paragraph_open",
            "inline",
            "paragraph_close",
            "math_block",
        ]

    def test_indented_code_wins(self, md: MarkdownIt) -> None:
        tokens = md.parse("    $$\n    x\n    $$\n")
        assert [t.type for t in tokens] == ["code_block"]

    def test_fenced_code_is_literal(self, md: MarkdownIt) -> None:
        tokens = md.parse("```\n$$\nx\n$$\n```\n")
        assert [t.type for t in tokens] == ["fence"]

    def test_dollar_inside_paragraph_is_not_block(self, md: MarkdownIt) -> None:
        assert _math_blocks(md, "a $$ b\n") == []


# =========================================================================
# Probe vs commit
# =========================================================================


class TestProbeMode:
    """Probe mode only checks for the opening marker."""

    def _state(self, md: MarkdownIt, source: str) -> StateBlock:
        return StateBlock(source, md, {}, [])

    def test_probe_reports_opener_without_tokens(self, md: MarkdownIt) -> None:
        state = self._state(md, "$$\nx\n$$\n")
        assert math_block(state, 0, state.lineMax, True) is True
        assert state.tokens == []
        assert state.line == 0

    def test_probe_is_repeatable(self, md: MarkdownIt) -> None:
        state = self._state(md, "$$\nx\n")
        results = [math_block(state, 0, state.lineMax, True) for _ in range(3)]
        assert results == [True, True, True]
        assert state.tokens == []

    @pytest.mark.parametrize("source", ["$x$\n", "$\n", "text\n", "\n"])
    def test_rejects_without_marker(self, md: MarkdownIt, source: str) -> None:
        state = self._state(md, source)
        assert math_block(state, 0, state.lineMax, True) is False
        assert math_block(state, 0, state.lineMax, False) is False
        assert state.tokens == []
        assert state.line == 0

    def test_commit_advances_line(self, md: MarkdownIt) -> None:
        state = self._state(md, "$$\nx\n$$\nafter\n")
        assert math_block(state, 0, state.lineMax, False) is True
        assert state.line == 3
        (token,) = state.tokens
        assert token.type == "math_block"
        assert token.content == "x\n"
