"""Text processing utilities for texspan.

Example:
    >>> from texspan.utils.text import escape_html
    >>> escape_html("a < b")
    'a &lt; b'
"""

from __future__ import annotations

import html as html_module


def escape_html(text: str) -> str:
    """Escape HTML special characters for safe use in attributes and bodies.

    Converts special characters to HTML entities:
    - & becomes &amp; (always first, so later entities are not re-escaped)
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;
    - ' becomes &#039;

    Args:
        text: Text to escape

    Returns:
        HTML-escaped text

    Examples:
        >>> escape_html("<b title='x'>&</b>")
        '&lt;b title=&#039;x&#039;&gt;&amp;&lt;/b&gt;'
    """
    if not text:
        return ""

    escaped = html_module.escape(text, quote=False)
    return escaped.replace('"', "&quot;").replace("'", "&#039;")
