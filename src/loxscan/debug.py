"""--debug token table dump to stderr."""

from __future__ import annotations

import sys
from typing import TextIO

from loxscan.errors import LexError
from loxscan.tokens import Token


def dump_tokens(
    tokens: list[Token], errors: list[LexError] | None = None, *, file: TextIO = sys.stderr
) -> None:
    """Print a human-readable table of tokens, then any errors, to *file*."""
    width = max((len(t.type.name) for t in tokens), default=0)
    file.write(f"Tokens ({len(tokens)})\n")
    for tok in tokens:
        file.write(f"  {tok.line:>4}  {tok.type.name:<{width}}  {tok.lexeme!r}")
        if tok.literal is not None:
            file.write(f"  = {tok.literal!r}")
        file.write("\n")

    if errors:
        file.write(f"Errors ({len(errors)})\n")
        for err in errors:
            file.write(f"  {err.line:>4}  {err.kind.name}  offset={err.offset}  {err.message}\n")
