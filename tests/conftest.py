"""Shared fixtures: stub engines and parser factories."""

from collections.abc import Mapping
from typing import Any

import pytest
from markdown_it import MarkdownIt

from texspan import EngineError, MathConfig, texspan_plugin


class EchoEngine:
    """Returns the expression unchanged and records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def render_to_string(self, expression: str, options: Mapping[str, Any]) -> str:
        self.calls.append((expression, dict(options)))
        return expression


class FailingEngine:
    """Always rejects the expression with a fixed description."""

    def __init__(self, description: str = "bad") -> None:
        self.description = description

    def render_to_string(self, expression: str, options: Mapping[str, Any]) -> str:
        raise EngineError(self.description)


@pytest.fixture
def echo_engine() -> EchoEngine:
    return EchoEngine()


@pytest.fixture
def failing_engine() -> FailingEngine:
    return FailingEngine()


@pytest.fixture
def md(echo_engine: EchoEngine) -> MarkdownIt:
    """CommonMark parser with math and the echo engine installed."""
    return MarkdownIt("commonmark").use(texspan_plugin, MathConfig(), engine=echo_engine)


def inline_children(md: MarkdownIt, source: str) -> list:
    """Child tokens of the single inline token produced by parseInline."""
    tokens = md.parseInline(source)
    assert len(tokens) == 1
    return tokens[0].children or []


def math_contents(md: MarkdownIt, source: str) -> list[str]:
    """Contents of all math_inline tokens found in ``source``."""
    return [t.content for t in inline_children(md, source) if t.type == "math_inline"]


def literal_text(md: MarkdownIt, source: str) -> str:
    """Concatenated text of all non-math inline tokens."""
    return "".join(t.content for t in inline_children(md, source) if t.type != "math_inline")
