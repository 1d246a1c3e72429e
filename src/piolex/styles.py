"""Display styles for token categories and user overrides."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from piolex.errors import ConfigError
from piolex.tokens import TokenCategory

_COLOR_RE = re.compile(r"#[0-9a-fA-F]{6}")


@dataclass(frozen=True, slots=True)
class Style:
    """Foreground color plus weight/slant. ``color`` is ``#rrggbb`` or None."""

    color: str | None = None
    bold: bool = False
    italic: bool = False

    def css(self) -> str:
        """Return CSS declarations for this style (empty for an unstyled category)."""
        decls: list[str] = []
        if self.color:
            decls.append(f"color: {self.color}")
        if self.bold:
            decls.append("font-weight: bold")
        if self.italic:
            decls.append("font-style: italic")
        return "; ".join(decls)

    def ansi(self) -> str:
        """Return the SGR parameter string (24-bit color), empty when unstyled."""
        params: list[str] = []
        if self.bold:
            params.append("1")
        if self.italic:
            params.append("3")
        if self.color:
            r, g, b = (int(self.color[i : i + 2], 16) for i in (1, 3, 5))
            params.append(f"38;2;{r};{g};{b}")
        return ";".join(params)


PLAIN_STYLE = Style()

DEFAULT_STYLES: dict[TokenCategory, Style] = {
    TokenCategory.DIRECTIVE: Style("#af00db", bold=True),
    TokenCategory.LABEL: Style("#795e26", bold=True),
    TokenCategory.INSTRUCTION: Style("#0000ff", bold=True),
    TokenCategory.JMP_CONDITION: Style("#a31515"),
    TokenCategory.REGISTER: Style("#001080"),
    TokenCategory.MODIFIER: Style("#267f99", italic=True),
    TokenCategory.MOV_OPERATOR: Style("#d16969", bold=True),
    TokenCategory.NUMERIC_LITERAL: Style("#098658"),
    TokenCategory.ARRAY_INDEX: Style("#0070c1"),
    TokenCategory.FOREIGN_BLOCK_DELIMITER: Style("#808080", bold=True),
    TokenCategory.FOREIGN_BLOCK: PLAIN_STYLE,
    TokenCategory.COMMENT: Style("#008000", italic=True),
    TokenCategory.PLAIN: PLAIN_STYLE,
}


def css_class(category: TokenCategory) -> str:
    """Stable CSS class name, e.g. ``pio-jmp-condition``."""
    return "pio-" + category.name.lower().replace("_", "-")


def category_from_name(name: str) -> TokenCategory:
    """Look up a category by config name (``jmp_condition`` or ``jmp-condition``)."""
    key = name.strip().upper().replace("-", "_")
    try:
        return TokenCategory[key]
    except KeyError:
        raise ConfigError(f"unknown token category '{name}'") from None


def parse_style(spec: str) -> Style:
    """Parse a style spec like ``"#ff0000 bold italic"``.

    Words may appear in any order; ``none`` clears the color.
    """
    color: str | None = None
    bold = False
    italic = False
    for word in spec.split():
        lowered = word.lower()
        if lowered == "bold":
            bold = True
        elif lowered == "italic":
            italic = True
        elif lowered == "none":
            color = None
        elif _COLOR_RE.fullmatch(word):
            color = lowered
        else:
            raise ConfigError(f"invalid style word '{word}' in '{spec}'")
    return Style(color, bold, italic)


def resolve_styles(
    overrides: Mapping[str, object] | None = None,
    path: Path | None = None,
) -> dict[TokenCategory, Style]:
    """Merge ``{category-name: spec}`` overrides over the default style table."""
    styles = dict(DEFAULT_STYLES)
    if not overrides:
        return styles
    for name, spec in overrides.items():
        if not isinstance(spec, str):
            raise ConfigError(f"style for '{name}' must be a string", path, f"styles.{name}")
        try:
            styles[category_from_name(name)] = parse_style(spec)
        except ConfigError as exc:
            raise ConfigError(exc.message, path, f"styles.{name}") from None
    return styles
