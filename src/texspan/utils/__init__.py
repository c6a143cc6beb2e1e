"""Utility modules for texspan.

Provides:
- text: escape_html for embedding source text in markup
- logger: get_logger for logging
"""

from texspan.utils.logger import get_logger
from texspan.utils.text import escape_html

__all__ = [
    "escape_html",
    "get_logger",
]
