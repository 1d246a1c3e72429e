"""Tests for the HTML and ANSI renderers and the debug token dump."""

from __future__ import annotations

import io

from piolex.classifier import classify
from piolex.debug import dump_tokens
from piolex.render import render_ansi, render_html, stylesheet
from piolex.styles import DEFAULT_STYLES, Style
from piolex.tokens import TokenCategory


class TestRenderHtml:
    def test_fragment(self) -> None:
        html = render_html(classify("jmp loop"))
        assert html == '<pre class="pio"><span class="pio-instruction">jmp</span> loop</pre>'

    def test_escaping(self) -> None:
        html = render_html(classify("; a < b & c"))
        assert "; a &lt; b &amp; c" in html

    def test_non_ascii_entity(self) -> None:
        html = render_html(classify("; café"))
        assert "caf&#xE9;" in html

    def test_foreign_block_language(self) -> None:
        html = render_html(classify("% c-sdk {\nint x;\n%}\n"))
        assert '<span class="pio-foreign-block" data-language="c-sdk">int x;\n</span>' in html
        assert '<span class="pio-foreign-block-delimiter">% c-sdk {</span>' in html

    def test_text_round_trips(self) -> None:
        source = ".program p\nloop:\n  jmp x-- loop ; go\n"
        html = render_html(classify(source))
        assert html.count("<span") == html.count("</span>")

    def test_standalone_document(self) -> None:
        html = render_html(classify("nop"), standalone=True, title="blink.pio")
        assert html.startswith("<!DOCTYPE html>\n")
        assert "<title>blink.pio</title>" in html
        assert ".pio-instruction { color: #0000ff; font-weight: bold }" in html

    def test_stylesheet_skips_unstyled(self) -> None:
        css = stylesheet()
        assert ".pio-plain" not in css
        assert ".pio-comment" in css

    def test_custom_styles(self) -> None:
        styles = dict(DEFAULT_STYLES)
        styles[TokenCategory.LABEL] = Style("#123456")
        css = stylesheet(styles)
        assert ".pio-label { color: #123456 }" in css


class TestRenderAnsi:
    def test_styled_token(self) -> None:
        out = render_ansi(classify("nop"))
        assert out == "\x1b[1;38;2;0;0;255mnop\x1b[0m"

    def test_plain_text_untouched(self) -> None:
        assert render_ansi(classify("hello")) == "hello"

    def test_multiline_token_reset_per_line(self) -> None:
        out = render_ansi(classify("/* a\nb */"))
        lines = out.split("\n")
        assert len(lines) == 2
        assert all(line.endswith("\x1b[0m") for line in lines)

    def test_unstyled_override(self) -> None:
        styles = dict(DEFAULT_STYLES)
        styles[TokenCategory.INSTRUCTION] = Style()
        assert render_ansi(classify("nop"), styles) == "nop"


class TestDumpTokens:
    def test_positions_and_categories(self) -> None:
        buf = io.StringIO()
        dump_tokens(classify("loop:\n  jmp loop\n"), file=buf)
        assert buf.getvalue().splitlines() == [
            "1:1-1:5 LABEL 'loop'",
            "2:3-2:6 INSTRUCTION 'jmp'",
        ]

    def test_unterminated_block_reported(self) -> None:
        buf = io.StringIO()
        dump_tokens(classify("nop\n% c-sdk {\nint x;\n"), file=buf)
        assert buf.getvalue().splitlines()[-1] == "2:1 unterminated c-sdk block"
