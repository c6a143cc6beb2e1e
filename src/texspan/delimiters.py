"""Delimiter validity checks for inline math.

A ``$`` is shared with ordinary prose (prices, shell variables), so whether
an occurrence may open or close a span depends on its neighbours:

- an opener cannot be followed by a space or tab
- a closer cannot be preceded by a space or tab, nor followed by a digit

Classification uses plain code-point comparisons so the scanning hot path
allocates nothing beyond the result.

Thread Safety:
All functions are pure. DelimiterResult is immutable.

"""

from __future__ import annotations

from typing import NamedTuple


class DelimiterResult(NamedTuple):
    """Whether a delimiter position may open and/or close a span."""

    can_open: bool
    can_close: bool


def _is_space_or_tab(char: str) -> bool:
    return char == " " or char == "\t"


def _is_ascii_digit(char: str) -> bool:
    return "0" <= char <= "9"


def classify_delimiter(src: str, pos: int, pos_max: int | None = None) -> DelimiterResult:
    """Classify the ``$`` at ``src[pos]``.

    Args:
        src: Scan buffer
        pos: Position of the delimiter character
        pos_max: End of the scannable region (defaults to ``len(src)``)

    Returns:
        DelimiterResult for this position; both flags default to True

    Example:
        >>> classify_delimiter("$ x$", 0)
        DelimiterResult(can_open=False, can_close=True)
        >>> classify_delimiter("$5", 0)
        DelimiterResult(can_open=True, can_close=False)

    """
    if pos_max is None:
        pos_max = len(src)

    prev_char = src[pos - 1] if pos > 0 else ""
    next_char = src[pos + 1] if pos + 1 < pos_max else ""

    can_open = True
    can_close = True

    if _is_space_or_tab(prev_char) or _is_ascii_digit(next_char):
        can_close = False
    if _is_space_or_tab(next_char):
        can_open = False

    return DelimiterResult(can_open, can_close)


__all__ = ["DelimiterResult", "classify_delimiter"]
