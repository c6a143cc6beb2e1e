"""Protocols for texspan.

Defines the contracts between the math rules and their collaborators:
the host tokenizer's inline and block state, the tokens it creates, and
the typesetting engine. markdown-it-py's StateInline, StateBlock and Token
satisfy these structurally.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


class HostToken(Protocol):
    """Token created by the host's push primitive."""

    type: str
    markup: str
    content: str
    map: list[int] | None
    block: bool


class InlineState(Protocol):
    """Host state seen by the inline rule.

    ``src`` is immutable for the duration of the pass; ``pos`` is the scan
    cursor and ``pending`` the literal-text accumulator. The rule only ever
    appends to ``pending``.

    """

    src: str
    pos: int
    posMax: int
    pending: str

    def push(self, ttype: str, tag: str, nesting: int) -> HostToken:
        """Flush pending text and append a new token."""
        ...


class BlockState(Protocol):
    """Host state seen by the block rule.

    Line tables hold, per line, the begin offset (``bMarks``), end offset
    (``eMarks``), the offset of the first non-space character relative to
    ``bMarks`` (``tShift``) and its column with tabs expanded (``sCount``).

    """

    src: str
    bMarks: list[int]
    eMarks: list[int]
    tShift: list[int]
    sCount: list[int]
    blkIndent: int
    line: int

    def getLines(self, begin: int, end: int, indent: int, keepLastLF: bool) -> str:
        """Cut a range of lines, removing up to ``indent`` columns from each."""
        ...

    def push(self, ttype: str, tag: str, nesting: int) -> HostToken:
        """Append a new token."""
        ...


@runtime_checkable
class MathEngine(Protocol):
    """Protocol for typesetting engines.

    Implementations convert LaTeX source into markup and raise on input they
    cannot typeset. Any exception counts as a failure; ``EngineError`` lets an
    engine supply a clean description.

    Thread Safety:
        Implementations must be stateless or use only local variables.

    """

    def render_to_string(self, expression: str, options: Mapping[str, Any]) -> str:
        """Render one expression.

        Args:
            expression: Raw LaTeX text (delimiters already removed)
            options: Engine options; always carries ``display_mode`` (bool),
                ``macros``, ``error_color`` and ``throw_on_error`` next to the
                configured pass-through keys

        Returns:
            Rendered markup
        """
        ...
