"""Token categories, data structures, and offset helpers."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum, auto


class TokenCategory(Enum):
    # Statement-level
    DIRECTIVE = auto()  # .program, .wrap_target, ...
    LABEL = auto()  # identifier before a line-initial colon

    # Fixed keyword sets
    INSTRUCTION = auto()  # jmp, wait, mov, ...
    JMP_CONDITION = auto()  # x--, x!=y, !osre, ...
    REGISTER = auto()  # x, y, isr, rxfifo, ...
    MODIFIER = auto()  # side, block, iffull, ...

    # Operands
    MOV_OPERATOR = auto()  # :: ! ~
    NUMERIC_LITERAL = auto()  # 0x1f, 0b101, 42
    ARRAY_INDEX = auto()  # interior of [...]

    # Embedded foreign-language blocks
    FOREIGN_BLOCK_DELIMITER = auto()  # % c-sdk {  and  %}
    FOREIGN_BLOCK = auto()  # opaque body, delegated to another highlighter

    COMMENT = auto()  # ; ...  // ...  /* ... */
    PLAIN = auto()  # anything no rule claims


@dataclass(frozen=True, slots=True)
class Position:
    """Source position, 1-based line and column, 0-based character offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open character range ``[start, end)``."""

    start: int
    end: int

    def slice(self, source: str) -> str:
        return source[self.start : self.end]


@dataclass(frozen=True, slots=True)
class Token:
    """A classified span with the text it covers."""

    category: TokenCategory
    span: Span
    text: str


@dataclass(frozen=True, slots=True)
class ForeignBlockRegion:
    """An embedded block written in another language.

    ``head`` and ``tail`` cover the marker text of the delimiter lines and
    ``body`` everything between them. ``tail`` is None when the block runs to
    the end of input without a closing marker.
    """

    language: str
    head: Span
    body: Span
    tail: Span | None

    @property
    def terminated(self) -> bool:
        return self.tail is not None


class LineIndex:
    """Map character offsets in a source string to line/column positions."""

    def __init__(self, source: str) -> None:
        self._starts = [0]
        for i, ch in enumerate(source):
            if ch == "\n":
                self._starts.append(i + 1)

    def position(self, offset: int) -> Position:
        line_idx = bisect_right(self._starts, offset) - 1
        return Position(line_idx + 1, offset - self._starts[line_idx] + 1, offset)

