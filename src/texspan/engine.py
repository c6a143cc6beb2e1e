"""Typesetting engines for texspan.

The render adapter talks to engines through the MathEngine protocol
(``render_to_string(expression, options) -> str``). Two implementations
ship here:

- Latex2MathMLEngine: the default, converting LaTeX to MathML with
  latex2mathml. Configured macros are expanded before conversion.
- FunctionEngine: adapts a plain callable with the same signature, e.g. a
  binding to an external KaTeX process or a test stub.

Thread Safety:
Engines hold no per-call state. A Latex2MathMLEngine may be shared across
threads; latex2mathml creates a fresh converter per call.

"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

from latex2mathml.converter import convert as latex2mathml_convert

from texspan.errors import EngineError
from texspan.protocols import MathEngine
from texspan.utils.logger import get_logger

logger = get_logger(__name__)

# Upper bound on macro expansion passes (guards self-referencing macros)
MAX_MACRO_EXPANSIONS = 32

MATHML_NAMESPACE = "http://www.w3.org/1998/Math/MathML"


def describe_error(error: BaseException) -> str:
    """Human-readable description of an engine failure.

    Prefers an explicit ``description`` attribute, then ``"Name: message"``,
    then the bare exception class name for message-less errors.
    """
    description = getattr(error, "description", None)
    if isinstance(description, str) and description:
        return description
    message = str(error)
    name = type(error).__name__
    return f"{name}: {message}" if message else name


def _macro_pattern(macros: Mapping[str, str]) -> re.Pattern[str]:
    """Compile one alternation matching every macro name.

    Control words (``\\RR``) must not be followed by another letter, so
    ``\\R`` does not match inside ``\\RR``. Longer names are tried first.
    """
    alternatives = []
    for name in sorted(macros, key=len, reverse=True):
        escaped = re.escape(name)
        if name[-1].isalpha():
            escaped += r"(?![a-zA-Z])"
        alternatives.append(escaped)
    return re.compile("|".join(alternatives))


def expand_macros(expression: str, macros: Mapping[str, str]) -> str:
    """Expand macro definitions textually until a fixed point.

    Args:
        expression: LaTeX source
        macros: Mapping of macro name (with backslash) to replacement

    Returns:
        Expanded source

    Raises:
        EngineError: Expansion does not settle within MAX_MACRO_EXPANSIONS passes

    Example:
        >>> expand_macros(r"x \\in \\RR", {r"\\RR": r"\\mathbb{R}"})
        'x \\\\in \\\\mathbb{R}'

    """
    if not macros:
        return expression

    pattern = _macro_pattern(macros)
    for _ in range(MAX_MACRO_EXPANSIONS):
        expanded = pattern.sub(lambda m: macros[m.group(0)], expression)
        if expanded == expression:
            return expanded
        expression = expanded

    raise EngineError(
        f"Too many macro expansions (limit {MAX_MACRO_EXPANSIONS}); "
        "is a macro defined in terms of itself?"
    )


class Latex2MathMLEngine:
    """Default engine: LaTeX to MathML via latex2mathml.

    Recognized options (everything else is ignored):
        display_mode: Block (True) or inline (False) display
        macros: Macro definitions expanded before conversion
        xmlns: MathML namespace written on the ``<math>`` element

    Usage:
        >>> engine = Latex2MathMLEngine()
        >>> engine.render_to_string("x^2", {"display_mode": False})  # doctest: +ELLIPSIS
        '<math xmlns="http://www.w3.org/1998/Math/MathML" display="inline">...'

    """

    __slots__ = ()

    def render_to_string(self, expression: str, options: Mapping[str, Any]) -> str:
        display = "block" if options.get("display_mode") else "inline"
        xmlns = options.get("xmlns", MATHML_NAMESPACE)
        source = expand_macros(expression, options.get("macros") or {})

        try:
            return latex2mathml_convert(source, xmlns=xmlns, display=display)
        except Exception as e:
            # latex2mathml raises bare, message-less exception classes
            raise EngineError(describe_error(e)) from e


class FunctionEngine:
    """Adapt a callable ``(expression, options) -> str`` to MathEngine.

    Usage:
        >>> engine = FunctionEngine(lambda tex, opts: f"<code>{tex}</code>")
        >>> engine.render_to_string("x", {"display_mode": False})
        '<code>x</code>'

    """

    __slots__ = ("_func",)

    def __init__(self, func: Callable[[str, Mapping[str, Any]], str]) -> None:
        self._func = func

    def render_to_string(self, expression: str, options: Mapping[str, Any]) -> str:
        return self._func(expression, options)

    def __repr__(self) -> str:
        return f"FunctionEngine({self._func!r})"


def resolve_engine(
    engine: MathEngine | Callable[[str, Mapping[str, Any]], str] | None,
) -> MathEngine:
    """Normalize an engine argument.

    Args:
        engine: MathEngine instance, plain callable, or None for the default

    Returns:
        A MathEngine

    Raises:
        TypeError: ``engine`` is neither an engine nor callable

    """
    if engine is None:
        return Latex2MathMLEngine()
    if isinstance(engine, MathEngine):
        return engine
    if callable(engine):
        logger.debug("Wrapping callable %r as a math engine", engine)
        return FunctionEngine(engine)
    raise TypeError(f"Expected a MathEngine or callable, got {type(engine).__name__}")


__all__ = [
    "FunctionEngine",
    "Latex2MathMLEngine",
    "MATHML_NAMESPACE",
    "MAX_MACRO_EXPANSIONS",
    "describe_error",
    "expand_macros",
    "resolve_engine",
]
