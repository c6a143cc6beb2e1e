"""Add math to a MarkdownIt instance you already configure yourself."""

from markdown_it import MarkdownIt

from texspan import texspan_plugin

md = (
    MarkdownIt("commonmark")
    .enable("table")
    .use(texspan_plugin, {"blockWrapper": "figure", "macros": {"\\RR": "\\mathbb{R}"}})
)

source = """
| Set | Symbol |
|-----|--------|
| Reals | $\\RR$ |

$$
f \\colon \\RR \\to \\RR
$$
"""

print(md.render(source))
