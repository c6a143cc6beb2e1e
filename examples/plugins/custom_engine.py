"""Swap the typesetting engine and see how render errors are contained."""

from texspan import EngineError, MathRenderError, render


def code_engine(tex, options):
    if "\\undefined" in tex:
        raise EngineError("Undefined control sequence: \\undefined")
    tag = "pre" if options["display_mode"] else "code"
    return f"<{tag}>{tex}</{tag}>"


# Contained: the failing span becomes fallback markup
print(render("Fine $x$, broken $\\undefined$", engine=code_engine))

# Escalated: the first failure raises with the source attached
try:
    render("$\\undefined$", engine=code_engine, throw_on_error=True)
except MathRenderError as e:
    print("Escalated:", e, dict(e.diagnostics))
