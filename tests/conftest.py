"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from piolex.classifier import Classification, classify
from piolex.tokens import Token, TokenCategory


@pytest.fixture
def lex():
    """Return a helper that classifies source and returns its token list."""

    def _lex(source: str) -> list[Token]:
        return list(classify(source))

    return _lex


@pytest.fixture
def classified():
    """Return a helper that classifies source and returns the Classification."""

    def _classify(source: str) -> Classification:
        return classify(source)

    return _classify


def assert_categories(tokens: list[Token], expected: list[TokenCategory]) -> None:
    """Assert that the token categories match the expected list."""
    actual = [t.category for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_texts(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token texts match the expected list."""
    actual = [t.text for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def find_tokens(tokens: list[Token], category: TokenCategory) -> list[Token]:
    """Return all tokens of the given category."""
    return [t for t in tokens if t.category == category]


def token_for(tokens: list[Token], text: str, occurrence: int = 0) -> Token:
    """Return the *occurrence*-th token whose text is *text*."""
    matches = [t for t in tokens if t.text == text]
    assert len(matches) > occurrence, f"No token {text!r} (occurrence {occurrence}) in {tokens}"
    return matches[occurrence]
