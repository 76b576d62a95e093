"""Lexical error records and the error sink that collects them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class ErrorKind(Enum):
    UNEXPECTED_CHARACTER = auto()
    UNTERMINATED_STRING = auto()


@dataclass(frozen=True, slots=True)
class LexError:
    """One reported lexical error.

    ``offset`` is the 0-based source index of the offending character, or
    of the opening quote for an unterminated string. It is -1 when the
    reporter was given no position.
    """

    kind: ErrorKind
    message: str
    line: int
    offset: int = -1

    def __str__(self) -> str:
        return f"[line {self.line}] Error: {self.message}"


@dataclass(slots=True)
class ErrorReporter:
    """Error sink for a single scan.

    Reporting never raises; it records the error and flips ``had_error``,
    which stays set for the reporter's lifetime.
    """

    errors: list[LexError] = field(default_factory=list)

    def report(
        self,
        line: int,
        message: str,
        kind: ErrorKind = ErrorKind.UNEXPECTED_CHARACTER,
        offset: int = -1,
    ) -> LexError:
        error = LexError(kind, message, line, offset)
        self.errors.append(error)
        return error

    @property
    def had_error(self) -> bool:
        return bool(self.errors)

    def messages(self) -> list[str]:
        """Return the formatted diagnostic lines in report order."""
        return [str(e) for e in self.errors]

    def __len__(self) -> int:
        return len(self.errors)
