"""Minimal logging utilities for texspan.

Provides a simple get_logger function that wraps the standard library logging.
The library never installs handlers; applications configure output.

Example:
    >>> from texspan.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Installing math rules")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "texspan." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'texspan.mymodule'
    """
    if not (name == "texspan" or name.startswith("texspan.")):
        name = f"texspan.{name}"
    return logging.getLogger(name)
