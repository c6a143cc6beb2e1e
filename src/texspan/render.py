"""Render adapter: extracted math text to markup.

render_math() hands the raw expression to the engine and applies the
containment policy when the engine fails:

- escalate (throw_on_error resolves True): raise MathRenderError carrying
  the source text, chained from the engine's exception
- contain (default): return fallback markup with the escaped description in
  a title attribute and the escaped source as the body

All engine failures are treated alike; there is no per-category handling.

Thread Safety:
No module state. MathConfig and engines are immutable/stateless.

"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from texspan.engine import describe_error
from texspan.errors import MathRenderError
from texspan.utils.logger import get_logger
from texspan.utils.text import escape_html

if TYPE_CHECKING:
    from texspan.config import MathConfig
    from texspan.protocols import HostToken, MathEngine

logger = get_logger(__name__)


def render_math(
    content: str,
    *,
    display_mode: bool,
    config: MathConfig,
    engine: MathEngine,
    env: Any = None,
) -> str:
    """Render one expression to markup.

    Args:
        content: Raw expression text (no delimiters)
        display_mode: True for block math, False for inline math
        config: Render configuration
        engine: Typesetting engine
        env: Host environment; passed to a predicate throw_on_error

    Returns:
        Rendered markup, or fallback markup when the engine fails and
        errors are contained

    Raises:
        MathRenderError: The engine failed and throw_on_error resolved True

    """
    throw_on_error = config.resolve_throw_on_error(env)
    options = config.engine_settings(display_mode, throw_on_error)

    try:
        rendered = engine.render_to_string(content, options)
    except Exception as e:
        description = describe_error(e)
        if throw_on_error:
            raise MathRenderError(content, description, display_mode=display_mode) from e
        logger.debug("Math engine failed on %r: %s", content, description, exc_info=True)
        if display_mode:
            return render_block_error(content, description, config)
        return render_inline_error(content, description, config)

    if display_mode:
        tag = config.block_wrapper_tag
        return f'<{tag} class="math-block">\n{rendered}\n</{tag}>\n'
    return f"{rendered}\n"


def render_inline_error(content: str, description: str, config: MathConfig) -> str:
    """Fallback markup for an inline expression the engine rejected."""
    return (
        f'<span class="katex-error" style="color:{escape_html(config.error_color)}"'
        f' title="{escape_html(description)}">{escape_html(content)}</span>'
    )


def render_block_error(content: str, description: str, config: MathConfig) -> str:
    """Fallback markup for a block expression the engine rejected."""
    tag = config.block_wrapper_tag
    return (
        f'<{tag} class="katex-block katex-error"'
        f' title="{escape_html(description)}">{escape_html(content)}</{tag}>\n'
    )


RenderRule = Callable[[Any, Sequence["HostToken"], int, Any, Any], str]


def make_render_rules(config: MathConfig, engine: MathEngine) -> tuple[RenderRule, RenderRule]:
    """Build the host render rules for inline and block math tokens.

    The returned functions follow markdown-it-py's render rule signature
    ``(renderer, tokens, idx, options, env)``.

    Args:
        config: Render configuration shared by both rules
        engine: Typesetting engine shared by both rules

    Returns:
        (inline_rule, block_rule)

    """

    def render_math_inline(
        self: Any, tokens: Sequence[HostToken], idx: int, options: Any, env: Any
    ) -> str:
        return render_math(
            tokens[idx].content, display_mode=False, config=config, engine=engine, env=env
        )

    def render_math_block(
        self: Any, tokens: Sequence[HostToken], idx: int, options: Any, env: Any
    ) -> str:
        return render_math(
            tokens[idx].content, display_mode=True, config=config, engine=engine, env=env
        )

    return render_math_inline, render_math_block


__all__ = [
    "RenderRule",
    "make_render_rules",
    "render_block_error",
    "render_inline_error",
    "render_math",
]
