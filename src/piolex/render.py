"""Renderers: turn a Classification into highlighted HTML or ANSI text."""

from __future__ import annotations

from collections.abc import Mapping

from piolex.classifier import Classification
from piolex.styles import DEFAULT_STYLES, PLAIN_STYLE, Style, css_class
from piolex.tokens import TokenCategory


def render_html(
    classification: Classification,
    styles: Mapping[TokenCategory, Style] = DEFAULT_STYLES,
    standalone: bool = False,
    title: str = "PIO source",
) -> str:
    """Render tokens as a ``<pre>`` block of class-tagged spans.

    With *standalone*, wrap the block in a complete HTML document whose
    stylesheet is generated from *styles*.
    """
    foreign_languages = {
        region.body.start: region.language for region in classification.foreign_blocks
    }

    parts: list[str] = ['<pre class="pio">']
    for tok in classification.with_plain():
        text = _escape_html(tok.text)
        if tok.category is TokenCategory.PLAIN:
            parts.append(text)
        elif tok.category is TokenCategory.FOREIGN_BLOCK:
            lang = foreign_languages.get(tok.span.start, "")
            parts.append(
                f'<span class="{css_class(tok.category)}" '
                f'data-language="{_escape_attr(lang)}">{text}</span>'
            )
        else:
            parts.append(f'<span class="{css_class(tok.category)}">{text}</span>')
    parts.append("</pre>")
    block = "".join(parts)

    if not standalone:
        return block

    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{_escape_html(title)}</title>\n"
        "<style>\n"
        f"{stylesheet(styles)}"
        "</style>\n"
        "</head>\n"
        "<body>\n"
        f"{block}\n"
        "</body>\n"
        "</html>\n"
    )


def stylesheet(styles: Mapping[TokenCategory, Style] = DEFAULT_STYLES) -> str:
    """Return CSS rules for every styled category."""
    lines: list[str] = []
    for category in TokenCategory:
        decls = styles.get(category, PLAIN_STYLE).css()
        if decls:
            lines.append(f".{css_class(category)} {{ {decls} }}\n")
    return "".join(lines)


def render_ansi(
    classification: Classification,
    styles: Mapping[TokenCategory, Style] = DEFAULT_STYLES,
) -> str:
    """Render tokens with ANSI SGR escapes for a terminal."""
    parts: list[str] = []
    for tok in classification.with_plain():
        params = styles.get(tok.category, PLAIN_STYLE).ansi()
        if not params:
            parts.append(tok.text)
            continue
        # Reset at each line break so pagers don't carry color across lines
        lines = tok.text.split("\n")
        parts.append("\n".join(f"\x1b[{params}m{line}\x1b[0m" if line else "" for line in lines))
    return "".join(parts)


# ---------------------------------------------------------------------------
# HTML escaping
# ---------------------------------------------------------------------------


def _escape_html(text: str) -> str:
    """Escape text for HTML body content. Also encodes non-ASCII as entities."""
    result: list[str] = []
    for ch in text:
        if ch == "&":
            result.append("&amp;")
        elif ch == "<":
            result.append("&lt;")
        elif ch == ">":
            result.append("&gt;")
        elif ord(ch) > 0x7F:
            result.append(f"&#x{ord(ch):X};")
        else:
            result.append(ch)
    return "".join(result)


def _escape_attr(text: str) -> str:
    """Escape text for HTML attribute values."""
    return _escape_html(text).replace('"', "&quot;")
