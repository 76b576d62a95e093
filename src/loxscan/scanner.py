"""Lox scanner: converts source text into a flat token list."""

from __future__ import annotations

import logging

from loxscan.errors import ErrorKind, ErrorReporter
from loxscan.tokens import KEYWORDS, Token, TokenType, is_alnum, is_alpha, is_digit

logger = logging.getLogger(__name__)

_SINGLE = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# char -> (kind when followed by "=", kind otherwise)
_WITH_EQUAL = {
    "!": (TokenType.BANG_EQUAL, TokenType.BANG),
    "=": (TokenType.EQUAL_EQUAL, TokenType.EQUAL),
    "<": (TokenType.LESS_EQUAL, TokenType.LESS),
    ">": (TokenType.GREATER_EQUAL, TokenType.GREATER),
}


class Scanner:
    """Scan Lox source text into Token objects, reporting errors to a sink."""

    def __init__(self, source: str, reporter: ErrorReporter | None = None) -> None:
        self._source = source
        self._reporter = reporter if reporter is not None else ErrorReporter()
        self._start = 0
        self._current = 0
        self._line = 1
        self._tokens: list[Token] = []
        self._done = False

    @property
    def reporter(self) -> ErrorReporter:
        return self._reporter

    def scan_tokens(self) -> list[Token]:
        """Scan the full source and return the token list, ending with EOF."""
        if self._done:
            return self._tokens

        while not self._at_end():
            self._start = self._current
            self._scan_token()

        self._tokens.append(Token(TokenType.EOF, "", None, self._line))
        self._done = True
        logger.debug(
            "scanned %d tokens, %d errors, %d lines",
            len(self._tokens),
            len(self._reporter),
            self._line,
        )
        return self._tokens

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _at_end(self) -> bool:
        return self._current >= len(self._source)

    def _advance(self) -> str:
        ch = self._source[self._current]
        self._current += 1
        return ch

    def _peek(self, offset: int = 0) -> str:
        idx = self._current + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _match(self, expected: str) -> bool:
        """Consume the next character only if it equals ``expected``."""
        if self._peek() != expected:
            return False
        self._current += 1
        return True

    def _add_token(self, tt: TokenType, literal: float | str | None = None) -> None:
        text = self._source[self._start : self._current]
        self._tokens.append(Token(tt, text, literal, self._line))

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _scan_token(self) -> None:
        ch = self._advance()

        if ch in _SINGLE:
            self._add_token(_SINGLE[ch])
            return

        if ch in _WITH_EQUAL:
            two, one = _WITH_EQUAL[ch]
            self._add_token(two if self._match("=") else one)
            return

        if ch == "/":
            if self._match("/"):
                self._skip_comment()
            else:
                self._add_token(TokenType.SLASH)
            return

        if ch in " \t\r":
            return

        if ch == "\n":
            self._line += 1
            return

        if ch == '"':
            self._string()
            return

        if is_digit(ch):
            self._number()
            return

        if is_alpha(ch):
            self._identifier()
            return

        self._reporter.report(
            self._line,
            f"Unexpected character: {ch}",
            ErrorKind.UNEXPECTED_CHARACTER,
            self._start,
        )

    # ------------------------------------------------------------------
    # Lexeme scanners
    # ------------------------------------------------------------------

    def _skip_comment(self) -> None:
        # Stop before the newline so the main loop counts it.
        while not self._at_end() and self._peek() != "\n":
            self._current += 1

    def _string(self) -> None:
        while not self._at_end():
            ch = self._advance()
            if ch == '"':
                literal = self._source[self._start + 1 : self._current - 1]
                self._add_token(TokenType.STRING, literal)
                return
            if ch == "\n":
                self._unterminated_string()
                self._line += 1
                return

        self._unterminated_string()

    def _unterminated_string(self) -> None:
        self._reporter.report(
            self._line,
            "Unterminated string",
            ErrorKind.UNTERMINATED_STRING,
            self._start,
        )

    def _number(self) -> None:
        while is_digit(self._peek()):
            self._current += 1

        if self._peek() == "." and is_digit(self._peek(1)):
            self._current += 1  # consume "."
            while is_digit(self._peek()):
                self._current += 1

        text = self._source[self._start : self._current]
        self._add_token(TokenType.NUMBER, float(text))

    def _identifier(self) -> None:
        while is_alnum(self._peek()):
            self._current += 1

        text = self._source[self._start : self._current]
        self._add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))


def scan(source: str) -> tuple[list[Token], bool]:
    """Scan source text and return ``(tokens, had_error)``."""
    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    return tokens, scanner.reporter.had_error


def tokenize(source: str) -> list[Token]:
    """Convenience function: scan source text and return the token list."""
    return Scanner(source).scan_tokens()
