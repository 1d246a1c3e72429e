"""PIO keyword sets and the ordered classification rule table."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from piolex.tokens import TokenCategory

# Directive names, always written with a leading "." so they never collide
# with the instruction keywords of the same spelling (.set / set).
DIRECTIVES = frozenset(
    {
        "program",
        "define",
        "origin",
        "side_set",
        "wrap_target",
        "wrap",
        "word",
        "lang_opt",
        "pio_version",
        "clock_div",
        "fifo",
        "mov_status",
        "in",
        "out",
        "set",
    }
)

INSTRUCTIONS = frozenset({"jmp", "wait", "in", "out", "push", "pull", "mov", "irq", "set", "nop"})

# !x and !y are left out: they read as the ! operator followed by a register,
# which is also how they appear in mov sources.
JMP_CONDITIONS = frozenset({"x--", "y--", "x!=y", "!osre"})

REGISTERS = frozenset(
    {
        "pins",
        "pindirs",
        "pin",
        "gpio",
        "jmppin",
        "x",
        "y",
        "null",
        "isr",
        "osr",
        "status",
        "pc",
        "exec",
        "rxfifo",
        "txfifo",
    }
)

MODIFIERS = frozenset(
    {
        "block",
        "noblock",
        "iffull",
        "ifempty",
        "rel",
        "side",
        "opt",
        "public",
        "nowait",
        "clear",
        "prev",
        "next",
    }
)

KEYWORD_SETS: dict[TokenCategory, frozenset[str]] = {
    TokenCategory.INSTRUCTION: INSTRUCTIONS,
    TokenCategory.JMP_CONDITION: JMP_CONDITIONS,
    TokenCategory.REGISTER: REGISTERS,
    TokenCategory.MODIFIER: MODIFIERS,
}

# Foreign block delimiters: whole lines only.
FOREIGN_HEAD = re.compile(
    r"^[ \t]*(?P<marker>%[ \t]*(?P<language>[A-Za-z_][\w-]*)[ \t]*\{)[ \t]*\r?$",
    re.MULTILINE,
)
FOREIGN_TAIL = re.compile(r"^[ \t]*(?P<marker>%\})[ \t]*\r?$", re.MULTILINE)


@dataclass(frozen=True, slots=True)
class ClassificationRule:
    """A pattern whose matches (or one capture group of them) form tokens."""

    category: TokenCategory
    pattern: re.Pattern[str]
    group: int = 0


def keyword_pattern(words: Iterable[str]) -> re.Pattern[str]:
    """Compile a case-insensitive pattern matching any of *words* as a whole token.

    Words may contain non-word characters (``x!=y``, ``!osre``), so the edges
    are checked with lookarounds rather than ``\\b``.
    """
    # Longest first so "pindirs" wins over "pin" at the same offset
    alternatives = "|".join(re.escape(w) for w in sorted(words, key=lambda w: (-len(w), w)))
    return re.compile(rf"(?<![\w.])(?:{alternatives})(?!\w)", re.IGNORECASE)


def _directive_pattern(names: Iterable[str]) -> re.Pattern[str]:
    alternatives = "|".join(sorted(names, key=lambda w: (-len(w), w)))
    return re.compile(rf"^[ \t]*(\.(?:{alternatives}))\b", re.MULTILINE | re.IGNORECASE)


COMMENT_PATTERN = re.compile(r";[^\r\n]*|//[^\r\n]*|/\*(?s:.*?)(?:\*/|\Z)")
LABEL_PATTERN = re.compile(r"^[ \t]*(?:public[ \t]+)?([A-Za-z_]\w*):(?!:)", re.MULTILINE)
ARRAY_INDEX_PATTERN = re.compile(r"\[([^\]\r\n]+)\]")
MOV_OPERATOR_PATTERN = re.compile(r"::|[!~]")
NUMERIC_PATTERN = re.compile(r"\b(?:0[xX][0-9a-fA-F]+|0[bB][01]+|[0-9]+)\b")

# Priority order: an earlier rule's claim is never reconsidered by a later one.
# Foreign blocks are located before any of these run (see classifier).
DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(TokenCategory.COMMENT, COMMENT_PATTERN),
    ClassificationRule(TokenCategory.DIRECTIVE, _directive_pattern(DIRECTIVES), 1),
    ClassificationRule(TokenCategory.LABEL, LABEL_PATTERN, 1),
    ClassificationRule(TokenCategory.ARRAY_INDEX, ARRAY_INDEX_PATTERN, 1),
    ClassificationRule(TokenCategory.JMP_CONDITION, keyword_pattern(JMP_CONDITIONS)),
    ClassificationRule(TokenCategory.INSTRUCTION, keyword_pattern(INSTRUCTIONS)),
    ClassificationRule(TokenCategory.REGISTER, keyword_pattern(REGISTERS)),
    ClassificationRule(TokenCategory.MODIFIER, keyword_pattern(MODIFIERS)),
    ClassificationRule(TokenCategory.MOV_OPERATOR, MOV_OPERATOR_PATTERN),
    ClassificationRule(TokenCategory.NUMERIC_LITERAL, NUMERIC_PATTERN),
)
