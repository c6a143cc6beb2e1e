"""Exception classes for texspan.

Scanning never raises: malformed delimiters degrade to literal text.
Every exception here belongs to configuration, host integration, or the
rendering phase.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType


class TexspanError(Exception):
    """Base exception for all texspan errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(TexspanError, ValueError):
    """Invalid math configuration.

    Raised once, when a MathConfig is constructed, never per render call.
    """

    def __init__(self, option: str, message: str) -> None:
        """Initialize configuration error.

        Args:
            option: Name of the offending option (e.g., "block_wrapper_tag")
            message: Description of the problem
        """
        self.option = option
        super().__init__(f"Invalid option {option!r}: {message}")


class EngineError(TexspanError):
    """Typesetting engine rejected an expression.

    Engines raise this (or any other exception) from render_to_string.
    The description is the human-readable text shown in fallback markup.
    """

    def __init__(self, description: str) -> None:
        self.description = description
        super().__init__(description)


class MathRenderError(TexspanError):
    """Escalated render failure.

    Raised by the render adapter when throw_on_error resolves to True.
    The engine's original exception is chained as ``__cause__``.
    """

    def __init__(
        self,
        source_text: str,
        description: str,
        display_mode: bool = False,
    ) -> None:
        """Initialize render error.

        Args:
            source_text: Raw expression text that failed to render
            description: Engine error description
            display_mode: True when the expression came from a math block
        """
        self.source_text = source_text
        self.description = description
        self.display_mode = display_mode

        kind = "block" if display_mode else "inline"
        super().__init__(f"Math render error ({kind}): {description}")

    @property
    def diagnostics(self) -> Mapping[str, str]:
        """Read-only diagnostic mapping carrying the failing source."""
        return MappingProxyType(
            {"source": self.source_text, "description": self.description}
        )


class PluginError(TexspanError):
    """Error installing the plugin into a host tokenizer.

    Raised when a rule the math rules are anchored to is missing.
    """

    def __init__(self, plugin_name: str, message: str) -> None:
        """Initialize plugin error.

        Args:
            plugin_name: Name of the failing plugin
            message: Description of the error
        """
        self.plugin_name = plugin_name
        super().__init__(f"Plugin '{plugin_name}': {message}")
