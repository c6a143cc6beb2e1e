"""Token kinds emitted by the math rules.

The host tokenizer owns the Token objects; texspan only decides their type,
markup and content. Token types are plain strings on the host side, so the
enum subclasses str and compares equal to them.

Thread Safety:
MathTokenType is an enum (inherently immutable).

"""

from enum import Enum


class MathTokenType(str, Enum):
    """Token types produced by the math rules."""

    MATH_INLINE = "math_inline"  # $...$
    MATH_BLOCK = "math_block"  # $$...$$

    def __str__(self) -> str:
        return self.value


# Delimiter character and block marker
DOLLAR = "$"
BLOCK_MARKER = "$$"

# Tag recorded on emitted tokens
MATH_TAG = "math"

__all__ = [
    "BLOCK_MARKER",
    "DOLLAR",
    "MATH_TAG",
    "MathTokenType",
]
