"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from loxscan.errors import ErrorReporter
from loxscan.scanner import Scanner, tokenize
from loxscan.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes source and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


@pytest.fixture
def scan_with_errors():
    """Return a helper that scans source and returns (tokens, reporter)."""

    def _scan(source: str) -> tuple[list[Token], ErrorReporter]:
        reporter = ErrorReporter()
        tokens = Scanner(source, reporter).scan_tokens()
        return tokens, reporter

    return _scan


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_lexemes(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token lexemes match the expected list."""
    actual = [t.lexeme for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"
