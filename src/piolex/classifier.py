"""PIO classifier: turns source text into ordered, classified spans."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from piolex.rules import DEFAULT_RULES, FOREIGN_HEAD, FOREIGN_TAIL, ClassificationRule
from piolex.tokens import ForeignBlockRegion, Span, Token, TokenCategory


@dataclass(frozen=True, slots=True)
class Classification:
    """The result of classifying one source snapshot.

    Tokens are ordered by start offset and never overlap. Text not covered by
    any token is implicitly PLAIN; ``with_plain()`` makes the gaps explicit.
    Iterating a Classification yields its tokens and may be repeated.
    """

    source: str
    tokens: tuple[Token, ...]
    foreign_blocks: tuple[ForeignBlockRegion, ...]

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def with_plain(self) -> Iterator[Token]:
        """Yield tokens with every uncovered gap filled by a PLAIN token."""
        pos = 0
        for tok in self.tokens:
            if tok.span.start > pos:
                yield _plain(self.source, pos, tok.span.start)
            yield tok
            pos = tok.span.end
        if pos < len(self.source):
            yield _plain(self.source, pos, len(self.source))

    def category_at(self, offset: int) -> TokenCategory:
        """Return the category covering *offset* (PLAIN for gaps)."""
        for tok in self.tokens:
            if tok.span.start > offset:
                break
            if offset < tok.span.end:
                return tok.category
        return TokenCategory.PLAIN

    def foreign_bodies(self) -> Iterator[tuple[str, Span, str]]:
        """Yield (language, span, text) for each foreign body, for delegation."""
        for region in self.foreign_blocks:
            yield region.language, region.body, region.body.slice(self.source)


def _plain(source: str, start: int, end: int) -> Token:
    return Token(TokenCategory.PLAIN, Span(start, end), source[start:end])


class Classifier:
    """Classify PIO source with an ordered rule table.

    Foreign blocks are located first and their bodies are never scanned by
    the rule table. The remaining text is scanned rule by rule; a match is
    kept only when none of its characters were claimed by an earlier match.
    """

    def __init__(self, rules: Sequence[ClassificationRule] = DEFAULT_RULES) -> None:
        self._rules = tuple(rules)

    def classify(self, source: str) -> Classification:
        """Classify the full source and return a Classification."""
        claimed = bytearray(len(source))
        tokens: list[Token] = []

        regions = find_foreign_blocks(source)
        segments: list[tuple[int, int]] = []
        pos = 0
        for region in regions:
            segments.append((pos, region.head.start))
            for category, span in (
                (TokenCategory.FOREIGN_BLOCK_DELIMITER, region.head),
                (TokenCategory.FOREIGN_BLOCK, region.body),
                (TokenCategory.FOREIGN_BLOCK_DELIMITER, region.tail),
            ):
                if span is not None:
                    self._claim(source, claimed, tokens, category, span)
            if region.tail is None:
                pos = len(source)
            else:
                pos = region.tail.end
        segments.append((pos, len(source)))

        for rule in self._rules:
            for seg_start, seg_end in segments:
                if seg_start >= seg_end:
                    continue
                for m in rule.pattern.finditer(source, seg_start, seg_end):
                    start, end = m.span(rule.group)
                    if start >= end:
                        continue
                    if 1 in claimed[start:end]:
                        continue
                    self._claim(source, claimed, tokens, rule.category, Span(start, end))

        tokens.sort(key=lambda t: t.span.start)
        return Classification(source, tuple(tokens), tuple(regions))

    @staticmethod
    def _claim(
        source: str,
        claimed: bytearray,
        tokens: list[Token],
        category: TokenCategory,
        span: Span,
    ) -> None:
        if span.start >= span.end:
            return
        claimed[span.start : span.end] = b"\x01" * (span.end - span.start)
        tokens.append(Token(category, span, span.slice(source)))


def find_foreign_blocks(source: str) -> list[ForeignBlockRegion]:
    """Locate embedded foreign-language blocks.

    A block opens with a line holding only ``% <language> {`` and closes with
    the next line holding only ``%}``. An unclosed block extends to the end
    of input.
    """
    regions: list[ForeignBlockRegion] = []
    pos = 0
    while pos < len(source):
        head = FOREIGN_HEAD.search(source, pos)
        if head is None:
            break
        # The head pattern ends at a line break or at end of input
        body_start = min(head.end() + 1, len(source))
        tail = FOREIGN_TAIL.search(source, body_start)
        head_span = Span(*head.span("marker"))
        if tail is None:
            regions.append(
                ForeignBlockRegion(
                    head.group("language"), head_span, Span(body_start, len(source)), None
                )
            )
            break
        regions.append(
            ForeignBlockRegion(
                head.group("language"),
                head_span,
                Span(body_start, tail.start()),
                Span(*tail.span("marker")),
            )
        )
        pos = tail.end()
    return regions


_default = Classifier()


def classify(source: str) -> Classification:
    """Convenience function: classify source with the default rule table."""
    return _default.classify(source)


def tokenize(source: str) -> list[Token]:
    """Convenience function: classify source and return the token list."""
    return list(_default.classify(source).tokens)
