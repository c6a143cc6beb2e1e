"""Inline math rule: ``$expression$``.

The rule runs with the host cursor on a ``$``. It always consumes at least
that character; when no valid span starts here, the delimiter goes to the
pending buffer as literal text and scanning resumes right after it, so the
skipped content is re-scanned as ordinary text (and possibly a later span).

Probe mode (``silent=True``) makes exactly the same cursor decisions but
never touches the pending buffer or pushes tokens, so the host can probe a
position any number of times while backtracking.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from texspan.delimiters import classify_delimiter
from texspan.tokens import DOLLAR, MATH_TAG, MathTokenType

if TYPE_CHECKING:
    from texspan.protocols import InlineState


def find_closing_delimiter(src: str, start: int, end: int | None = None) -> int:
    """Find the first unescaped ``$`` at or after ``start``.

    A candidate preceded by an odd number of consecutive backslashes is
    escaped and skipped; an even count (including zero) accepts it.

    Args:
        src: Scan buffer
        start: First position to search (one past the opener)
        end: End of the searchable region (defaults to ``len(src)``)

    Returns:
        Position of the accepted candidate, or -1 if none

    Example:
        >>> find_closing_delimiter("$a\\\\$b$", 1)
        5

    """
    if end is None:
        end = len(src)

    match = start
    while (match := src.find(DOLLAR, match, end)) != -1:
        # Walk back over the backslash run; stops at the opener at the latest
        pos = match - 1
        while pos >= 0 and src[pos] == "\\":
            pos -= 1

        if (match - pos) % 2 == 1:
            return match
        match += 1

    return -1


def math_inline(state: InlineState, silent: bool) -> bool:
    """Scan inline math at ``state.pos``.

    Args:
        state: Host inline state
        silent: Probe mode; no pending-text appends, no tokens

    Returns:
        False only when the cursor is not on a ``$``; True otherwise

    """
    src = state.src
    opener = state.pos
    if src[opener] != DOLLAR:
        return False

    if not classify_delimiter(src, opener, state.posMax).can_open:
        if not silent:
            state.pending += DOLLAR
        state.pos = opener + 1
        return True

    start = opener + 1
    match = find_closing_delimiter(src, start, state.posMax)

    # No closing delimiter: the opener is literal, rescan what follows
    if match == -1:
        if not silent:
            state.pending += DOLLAR
        state.pos = start
        return True

    # Empty content ($$) is never math
    if match == start:
        if not silent:
            state.pending += DOLLAR * 2
        state.pos = match + 1
        return True

    # Rejected closer stays unconsumed; it may open a later span
    if not classify_delimiter(src, match, state.posMax).can_close:
        if not silent:
            state.pending += DOLLAR
        state.pos = start
        return True

    if not silent:
        token = state.push(MathTokenType.MATH_INLINE.value, MATH_TAG, 0)
        token.markup = DOLLAR
        token.content = src[start:match]

    state.pos = match + 1
    return True


__all__ = ["find_closing_delimiter", "math_inline"]
