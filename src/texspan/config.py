"""Render configuration for texspan.

MathConfig is a closed record of the options the render adapter understands,
plus one pass-through mapping for engine-specific keys. It is validated once
at construction and never mutated afterwards.

A ContextVar holds the default configuration used when the plugin is
installed without an explicit config, so applications can scope a default
per thread or per task.

Thread Safety:
    MathConfig is frozen. ContextVars are thread-local by design.

Usage:
    from texspan.config import MathConfig

    config = MathConfig(block_wrapper_tag="section", throw_on_error=True)

    # From an options dictionary (camelCase names are accepted too)
    config = MathConfig.from_dict({"throwOnError": True, "trust": True})
    config.engine_options  # {'trust': True}

    # Scoped default
    with math_config_context(MathConfig(error_color="#f00")):
        md = create_markdown()

"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any

from texspan.errors import ConfigError
from texspan.utils.logger import get_logger

logger = get_logger(__name__)

# Tag name pattern: ASCII letter followed by letters, digits, or hyphens
_TAG_NAME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9-]*$")

# Option names accepted by from_dict in addition to the field names
_ALIASES: dict[str, str] = {
    "blockWrapper": "block_wrapper_tag",
    "block_wrapper": "block_wrapper_tag",
    "throwOnError": "throw_on_error",
    "errorColor": "error_color",
    "engineOptions": "engine_options",
}

# Set per render call by the adapter; never taken from user options
_RESERVED_ENGINE_KEYS = frozenset({"display_mode", "displayMode"})

ThrowOnError = bool | Callable[[Any], bool]


@dataclass(frozen=True, slots=True)
class MathConfig:
    """Immutable render configuration.

    Constructed once per plugin installation and reused read-only across
    all render calls.

    Attributes:
        block_wrapper_tag: Element wrapping rendered block math
        throw_on_error: Escalate engine failures instead of emitting fallback
            markup. A callable is evaluated once per render call with the
            host's env value.
        error_color: CSS color for inline fallback markup
        macros: Macro definitions passed to the engine (name includes the
            leading backslash)
        engine_options: Engine-specific keys passed through untouched

    """

    block_wrapper_tag: str = "div"
    throw_on_error: ThrowOnError = False
    error_color: str = "#cc0000"
    macros: Mapping[str, str] = field(default_factory=dict)
    engine_options: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.block_wrapper_tag, str) or not _TAG_NAME_RE.match(
            self.block_wrapper_tag
        ):
            raise ConfigError(
                "block_wrapper_tag",
                f"expected an HTML tag name, got {self.block_wrapper_tag!r}",
            )
        if not (isinstance(self.throw_on_error, bool) or callable(self.throw_on_error)):
            raise ConfigError(
                "throw_on_error",
                f"expected bool or callable, got {type(self.throw_on_error).__name__}",
            )
        if not isinstance(self.error_color, str) or not self.error_color:
            raise ConfigError("error_color", "expected a non-empty color string")

        macros = dict(self.macros or {})
        for name, expansion in macros.items():
            if not isinstance(name, str) or not name:
                raise ConfigError("macros", f"macro name must be a non-empty string: {name!r}")
            if not isinstance(expansion, str):
                raise ConfigError("macros", f"expansion of {name!r} must be a string")

        engine_options = dict(self.engine_options or {})
        reserved = _RESERVED_ENGINE_KEYS & engine_options.keys()
        if reserved:
            raise ConfigError(
                "engine_options",
                f"{', '.join(sorted(reserved))} is set per render call",
            )

        # Frozen: copies are installed through object.__setattr__
        object.__setattr__(self, "macros", MappingProxyType(macros))
        object.__setattr__(self, "engine_options", MappingProxyType(engine_options))

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> MathConfig:
        """Create MathConfig from an options dictionary.

        Field names and their camelCase spellings (``blockWrapper``,
        ``throwOnError``, ``errorColor``) are recognized. Every other key is
        passed through to the engine via ``engine_options``; ``displayMode``
        is dropped because the adapter sets it per call.

        Args:
            config_dict: Dictionary with option values.

        Returns:
            New MathConfig instance.

        Example:
            >>> config = MathConfig.from_dict({
            ...     "throwOnError": True,
            ...     "strict": "ignore",
            ... })
            >>> config.throw_on_error
            True
            >>> dict(config.engine_options)
            {'strict': 'ignore'}

        """
        fields, passthrough = _split_options(config_dict)
        return cls(**fields, engine_options=passthrough)

    def merge(self, config_dict: Mapping[str, Any]) -> MathConfig:
        """Return a copy overridden by an options dictionary.

        Keys are interpreted as in from_dict; pass-through keys are merged
        into the existing engine_options.
        """
        fields, passthrough = _split_options(config_dict)
        return replace(
            self,
            **fields,
            engine_options={**self.engine_options, **passthrough},
        )

    def with_options(self, **changes: Any) -> MathConfig:
        """Return a copy with the given fields replaced (re-validated)."""
        return replace(self, **changes)

    def resolve_throw_on_error(self, env: Any = None) -> bool:
        """Resolve throw_on_error for a single render call.

        Args:
            env: Host environment passed to a predicate throw_on_error

        Returns:
            True when engine failures must be escalated
        """
        if callable(self.throw_on_error):
            return bool(self.throw_on_error(env))
        return bool(self.throw_on_error)

    def engine_settings(self, display_mode: bool, throw_on_error: bool) -> dict[str, Any]:
        """Build the options mapping handed to the engine for one call."""
        settings = dict(self.engine_options)
        settings["macros"] = dict(self.macros)
        settings["error_color"] = self.error_color
        settings["throw_on_error"] = throw_on_error
        settings["display_mode"] = display_mode
        return settings


def _split_options(config_dict: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split an options dictionary into (field values, engine pass-through)."""
    valid_fields = set(MathConfig.__dataclass_fields__)
    fields: dict[str, Any] = {}
    passthrough: dict[str, Any] = {}

    for key, value in config_dict.items():
        name = _ALIASES.get(key, key)
        if name == "engine_options":
            passthrough.update(value or {})
        elif name in valid_fields:
            fields[name] = value
        elif key in _RESERVED_ENGINE_KEYS:
            logger.debug("Ignoring option %r; display mode is set per call", key)
        else:
            passthrough[key] = value

    return fields, passthrough


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: MathConfig = MathConfig()

_math_config: ContextVar[MathConfig] = ContextVar(
    "math_config",
    default=_DEFAULT_CONFIG,
)


def get_math_config() -> MathConfig:
    """Get the default math configuration for the current context."""
    return _math_config.get()


def set_math_config(config: MathConfig) -> None:
    """Set the default math configuration for the current context.

    Thread Safety:
        Only affects the current thread's context. Other threads are unaffected.

    """
    _math_config.set(config)


def reset_math_config() -> None:
    """Reset to the built-in default configuration."""
    _math_config.set(_DEFAULT_CONFIG)


@contextmanager
def math_config_context(config: MathConfig) -> Iterator[None]:
    """Context manager for a temporary default configuration.

    Example:
        >>> with math_config_context(MathConfig(throw_on_error=True)):
        ...     md = create_markdown()
        >>> # Previous default restored

    Thread Safety:
        Only affects the current thread's context. Properly restores previous
        config even if an exception is raised.

    """
    previous = _math_config.get()
    _math_config.set(config)
    try:
        yield
    finally:
        _math_config.set(previous)


__all__ = [
    "MathConfig",
    "ThrowOnError",
    "get_math_config",
    "set_math_config",
    "reset_math_config",
    "math_config_context",
]
