"""Lexical analyzer for the Lox language."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from loxscan.tokens import Token

__version__ = "0.1.0"


def scan(source: str) -> tuple[list[Token], bool]:
    """Scan Lox source text, returning the tokens and whether any lexical error occurred."""
    from loxscan.scanner import scan as _scan

    return _scan(source)
