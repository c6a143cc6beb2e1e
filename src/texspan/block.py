"""Block math rule: ``$$ ... $$``.

A block opens on a line whose indentation-stripped content starts with
``$$``. It closes on the same line when the rest of that line ends with
``$$``, otherwise on the first later line whose stripped text ends with
``$$``. Lines in between are taken verbatim, dedented by the opening line's
indentation.

Unterminated blocks are accepted: the block is implicitly closed where the
container ends (end of document, or a less-indented line that leaves the
enclosing list/blockquote). A debug record is logged in that case.

Probe mode only checks for the opening marker; the host uses it to decide
whether this rule may interrupt a paragraph, reference, blockquote or list.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from texspan.tokens import BLOCK_MARKER, MATH_TAG, MathTokenType
from texspan.utils.logger import get_logger

if TYPE_CHECKING:
    from texspan.protocols import BlockState

logger = get_logger(__name__)


def _line_text(state: BlockState, line: int) -> tuple[int, int]:
    """Return (content start, line end) offsets for a line."""
    return state.bMarks[line] + state.tShift[line], state.eMarks[line]


def math_block(state: BlockState, start_line: int, end_line: int, silent: bool) -> bool:
    """Scan block math starting at ``start_line``.

    Args:
        state: Host block state
        start_line: Line holding the candidate opening marker
        end_line: First line past the enclosing container
        silent: Probe mode; report the opener without scanning further

    Returns:
        True when the line opens a math block

    """
    src = state.src
    pos, max_pos = _line_text(state, start_line)

    if pos + 2 > max_pos or src[pos : pos + 2] != BLOCK_MARKER:
        return False

    if silent:
        return True

    first_line = src[pos + 2 : max_pos]
    last_line = ""
    found = False

    stripped = first_line.strip()
    if stripped.endswith(BLOCK_MARKER):
        first_line = stripped[: -len(BLOCK_MARKER)].strip()
        found = True

    next_line = start_line
    while not found:
        next_line += 1
        if next_line >= end_line:
            break

        pos, max_pos = _line_text(state, next_line)

        # Non-empty line with negative indent leaves the container
        if pos < max_pos and state.sCount[next_line] < state.blkIndent:
            break

        if src[pos:max_pos].strip().endswith(BLOCK_MARKER):
            last_line = src[pos : src.rfind(BLOCK_MARKER, pos, max_pos)]
            found = True

    if found:
        state.line = next_line + 1
    else:
        state.line = min(next_line, end_line)
        logger.debug(
            "Unterminated math block at line %d, closed at line %d",
            start_line + 1,
            state.line,
        )

    middle = state.getLines(start_line + 1, next_line, state.sCount[start_line], True)
    if middle and not found and not middle.endswith("\n"):
        middle += "\n"

    content = (
        (first_line + "\n" if first_line.strip() else "")
        + middle
        + (last_line if last_line.strip() else "")
    )

    token = state.push(MathTokenType.MATH_BLOCK.value, MATH_TAG, 0)
    token.block = True
    token.content = content
    token.map = [start_line, state.line]
    token.markup = BLOCK_MARKER
    return True


__all__ = ["math_block"]
