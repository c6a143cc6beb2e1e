"""Render Markdown with dollar math in one call: MathML out of the box."""

from texspan import render

html = render("Pythagoras: $a^2 + b^2 = c^2$\n\n$$\n\\sum_{i=1}^{n} i = \\frac{n(n+1)}{2}\n$$\n")
print(html)
