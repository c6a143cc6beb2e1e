"""Tests for the high-level API (create_markdown, parse, render)."""

import pytest
from markdown_it import MarkdownIt

import texspan
from conftest import EchoEngine
from texspan import MathConfig, MathRenderError, create_markdown, parse, render


class TestCreateMarkdown:
    """create_markdown() returns a reusable parser."""

    def test_returns_markdown_it(self) -> None:
        md = create_markdown()
        assert isinstance(md, MarkdownIt)
        assert "math_inline" in md.inline.ruler.get_all_rules()
        assert "math_block" in md.block.ruler.get_all_rules()

    def test_preset(self) -> None:
        md = create_markdown(preset="default", engine=lambda tex, opts: tex)
        assert "<table>" in md.render("| a |\n|---|\n| $x$ |\n")

    def test_reusable(self, echo_engine: EchoEngine) -> None:
        md = create_markdown(engine=echo_engine)
        assert md.render("$a$") == "<p>a\n</p>\n"
        assert md.render("$b$") == "<p>b\n</p>\n"


class TestParse:
    """parse() exposes the token stream."""

    def test_inline_token(self) -> None:
        tokens = parse("Let $x$ be real.")
        children = tokens[1].children or []
        math = [t for t in children if t.type == "math_inline"]
        assert len(math) == 1
        assert math[0].content == "x"
        assert math[0].markup == "$"

    def test_block_token(self) -> None:
        (token,) = parse("$$\na + b\n$$\n")
        assert token.type == "math_block"
        assert token.content == "a + b\n"
        assert token.markup == "$$"
        assert token.map == [0, 3]
        assert token.block is True


class TestRender:
    """render() with the default engine."""

    def test_inline_mathml(self) -> None:
        html = render("Let $x$ be real.")
        assert html.startswith("<p>Let <math")
        assert 'display="inline"' in html
        assert html.endswith(" be real.</p>\n")

    def test_block_mathml(self) -> None:
        html = render("$$\nx\n$$\n")
        assert html.startswith('<div class="math-block">\n<math')
        assert 'display="block"' in html

    def test_options_as_keywords(self) -> None:
        html = render("$$x$$", block_wrapper_tag="section")
        assert html.startswith('<section class="math-block">')

    def test_config_object(self) -> None:
        with pytest.raises(MathRenderError):
            render("$x_1_2$", MathConfig(throw_on_error=True))

    def test_env_reaches_predicate(self) -> None:
        config = MathConfig(throw_on_error=lambda env: env.get("strict", False))
        assert "katex-error" in render("$x_1_2$", config)
        with pytest.raises(MathRenderError):
            render("$x_1_2$", config, env={"strict": True})

    def test_plain_markdown_untouched(self) -> None:
        assert render("# Title\n\nPrice: 5 dollars") == "<h1>Title</h1>\n<p>Price: 5 dollars</p>\n"


class TestPublicSurface:
    """Everything in __all__ is importable."""

    def test_all_names_exist(self) -> None:
        for name in texspan.__all__:
            assert hasattr(texspan, name), name

    def test_version(self) -> None:
        assert texspan.__version__ == "0.1.0"
