"""
texspan: Dollar math for markdown-it-py

Recognizes ``$inline$`` and ``$$block$$`` LaTeX in Markdown and renders it
through a pluggable typesetting engine (MathML via latex2mathml by default).

Quick Start:
    >>> from texspan import render
    >>> html = render("Pythagoras: $a^2 + b^2 = c^2$")

    >>> # Or install into your own parser
    >>> from markdown_it import MarkdownIt
    >>> from texspan import texspan_plugin
    >>> md = MarkdownIt("commonmark").use(texspan_plugin, throw_on_error=True)

Custom Engines:
    >>> def my_engine(tex, options):
    ...     return f"<code>{tex}</code>"
    >>> html = render("$x$", engine=my_engine)

Installation:
    pip install texspan
"""

from collections.abc import Callable, Mapping
from typing import Any

from markdown_it import MarkdownIt
from markdown_it.token import Token

from texspan.block import math_block
from texspan.config import (
    MathConfig,
    get_math_config,
    math_config_context,
    reset_math_config,
    set_math_config,
)
from texspan.delimiters import DelimiterResult, classify_delimiter
from texspan.engine import FunctionEngine, Latex2MathMLEngine, expand_macros
from texspan.errors import (
    ConfigError,
    EngineError,
    MathRenderError,
    PluginError,
    TexspanError,
)
from texspan.inline import find_closing_delimiter, math_inline
from texspan.plugin import MathPlugin, texspan_plugin
from texspan.protocols import MathEngine
from texspan.render import render_math
from texspan.tokens import MathTokenType
from texspan.utils.text import escape_html

__version__ = "0.1.0"

EngineLike = MathEngine | Callable[[str, Mapping[str, Any]], str]


def create_markdown(
    config: MathConfig | Mapping[str, Any] | None = None,
    *,
    preset: str = "commonmark",
    engine: EngineLike | None = None,
    **options: Any,
) -> MarkdownIt:
    """Create a MarkdownIt parser with math installed.

    Args:
        config: MathConfig, options mapping, or None for the context default
        preset: markdown-it preset name ("commonmark", "default", "zero", ...)
        engine: Typesetting engine or callable
        **options: Option overrides passed to texspan_plugin

    Returns:
        Configured MarkdownIt instance (reusable across documents)

    """
    return MarkdownIt(preset).use(texspan_plugin, config, engine=engine, **options)


def parse(
    source: str,
    config: MathConfig | Mapping[str, Any] | None = None,
    *,
    engine: EngineLike | None = None,
    env: dict[str, Any] | None = None,
    **options: Any,
) -> list[Token]:
    """Tokenize Markdown with math support.

    Returns:
        markdown-it token stream; math appears as ``math_inline`` children of
        inline tokens and as top-level ``math_block`` tokens

    """
    md = create_markdown(config, engine=engine, **options)
    return md.parse(source, env)


def render(
    source: str,
    config: MathConfig | Mapping[str, Any] | None = None,
    *,
    engine: EngineLike | None = None,
    env: dict[str, Any] | None = None,
    **options: Any,
) -> str:
    """Render Markdown with math to HTML.

    Raises:
        MathRenderError: An expression failed and throw_on_error resolved True

    """
    md = create_markdown(config, engine=engine, **options)
    return md.render(source, env)


__all__ = [
    # High-level API
    "create_markdown",
    "parse",
    "render",
    "texspan_plugin",
    "MathPlugin",
    # Configuration
    "MathConfig",
    "get_math_config",
    "set_math_config",
    "reset_math_config",
    "math_config_context",
    # Scanning
    "DelimiterResult",
    "classify_delimiter",
    "find_closing_delimiter",
    "math_inline",
    "math_block",
    "MathTokenType",
    # Rendering
    "render_math",
    "escape_html",
    "MathEngine",
    "Latex2MathMLEngine",
    "FunctionEngine",
    "expand_macros",
    # Errors
    "TexspanError",
    "ConfigError",
    "EngineError",
    "MathRenderError",
    "PluginError",
]
