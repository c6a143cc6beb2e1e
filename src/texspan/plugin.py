"""markdown-it-py integration for texspan.

Adds ``$inline$`` and ``$$block$$`` math to a MarkdownIt instance.

Usage:
    >>> from markdown_it import MarkdownIt
    >>> from texspan import texspan_plugin
    >>> md = MarkdownIt().use(texspan_plugin, throw_on_error=False)
    >>> html = md.render("Euler: $e^{i\\pi} + 1 = 0$")

Rule placement:
- Inline rule ``math_inline`` runs after ``escape``, so ``\\$`` outside math
  stays a literal dollar.
- Block rule ``math_block`` runs after ``blockquote`` and may interrupt
  paragraphs, references, blockquotes and lists.

Thread Safety:
MathPlugin is immutable after construction. The installed rules close over
the plugin's config and engine only; all scan state lives on the host's
per-document state objects.

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from texspan.block import math_block
from texspan.config import MathConfig, get_math_config
from texspan.engine import resolve_engine
from texspan.errors import PluginError
from texspan.inline import math_inline
from texspan.render import make_render_rules
from texspan.tokens import MathTokenType
from texspan.utils.logger import get_logger

if TYPE_CHECKING:
    from markdown_it import MarkdownIt

    from texspan.protocols import MathEngine

logger = get_logger(__name__)

# Block rules the math block may terminate
BLOCK_ALT_CHAINS: tuple[str, ...] = ("paragraph", "reference", "blockquote", "list")

INLINE_ANCHOR = "escape"
BLOCK_ANCHOR = "blockquote"


class MathPlugin:
    """Dollar math for markdown-it-py.

    One scan operation per syntax kind (inline, block) and one render
    operation per emitted token kind.

    Usage:
        >>> plugin = MathPlugin(MathConfig(block_wrapper_tag="section"))
        >>> md = MarkdownIt()
        >>> plugin.install(md)

    """

    __slots__ = ("_config", "_engine")

    def __init__(
        self,
        config: MathConfig | None = None,
        engine: MathEngine | Callable[[str, Mapping[str, Any]], str] | None = None,
    ) -> None:
        self._config = config if config is not None else get_math_config()
        self._engine = resolve_engine(engine)

    @property
    def name(self) -> str:
        return "math"

    @property
    def config(self) -> MathConfig:
        return self._config

    @property
    def engine(self) -> MathEngine:
        return self._engine

    def extend_inline(self, md: MarkdownIt) -> None:
        """Register the inline rule after ``escape``."""
        try:
            md.inline.ruler.after(INLINE_ANCHOR, MathTokenType.MATH_INLINE.value, math_inline)
        except KeyError as e:
            raise PluginError(self.name, f"inline rule {INLINE_ANCHOR!r} not found") from e

    def extend_block(self, md: MarkdownIt) -> None:
        """Register the block rule after ``blockquote``."""
        try:
            md.block.ruler.after(
                BLOCK_ANCHOR,
                MathTokenType.MATH_BLOCK.value,
                math_block,
                {"alt": list(BLOCK_ALT_CHAINS)},
            )
        except KeyError as e:
            raise PluginError(self.name, f"block rule {BLOCK_ANCHOR!r} not found") from e

    def extend_renderer(self, md: MarkdownIt) -> None:
        """Register render rules for both math token types."""
        inline_rule, block_rule = make_render_rules(self._config, self._engine)
        md.add_render_rule(MathTokenType.MATH_INLINE.value, inline_rule)
        md.add_render_rule(MathTokenType.MATH_BLOCK.value, block_rule)

    def install(self, md: MarkdownIt) -> None:
        """Apply all extension points to ``md``."""
        self.extend_inline(md)
        self.extend_block(md)
        self.extend_renderer(md)
        logger.debug(
            "Installed math rules (engine=%s, wrapper=%s)",
            type(self._engine).__name__,
            self._config.block_wrapper_tag,
        )


def texspan_plugin(
    md: MarkdownIt,
    config: MathConfig | Mapping[str, Any] | None = None,
    *,
    engine: MathEngine | Callable[[str, Mapping[str, Any]], str] | None = None,
    **options: Any,
) -> None:
    """Plug dollar math into a MarkdownIt instance.

    Args:
        md: Host parser
        config: MathConfig, an options mapping, or None for the context default
        engine: Typesetting engine or callable; defaults to latex2mathml
        **options: Option overrides (snake_case or camelCase); unrecognized
            keys are passed through to the engine

    Raises:
        ConfigError: Invalid options
        PluginError: The host lacks the rules math is anchored to

    """
    if isinstance(config, Mapping):
        config = MathConfig.from_dict({**config, **options})
    elif options:
        base = config if config is not None else get_math_config()
        config = base.merge(options)

    MathPlugin(config, engine).install(md)


__all__ = ["BLOCK_ALT_CHAINS", "MathPlugin", "texspan_plugin"]
