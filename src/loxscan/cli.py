"""Command-line interface for loxscan."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from loxscan.errors import ErrorReporter
from loxscan.tokens import Token, TokenType

logger = logging.getLogger(__name__)

# sysexits.h
EX_OK = 0
EX_DATAERR = 65

FORMATS = ("text", "json")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    command: str
    input_file: Path
    output_file: Path | None
    format: str
    eof: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="loxscan",
        description="Lox lexical analyzer",
    )
    sub = p.add_subparsers(dest="command", required=True, metavar="COMMAND")

    tok = sub.add_parser("tokenize", help="Scan a Lox file and print its tokens")
    tok.add_argument("input", help="Input .lox file")
    tok.add_argument("-o", "--output", help="Output file (default: stdout)")
    tok.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help="Token output format (default: text)",
    )
    tok.add_argument(
        "--no-eof",
        dest="eof",
        action="store_false",
        default=None,
        help="Omit the trailing EOF token from the output",
    )
    tok.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover loxscan.toml)",
    )
    tok.add_argument("--debug", action="store_true", help="Dump the token table to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "loxscan.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    cfg_output = config.get("output")
    if not isinstance(cfg_output, dict):
        cfg_output = {}

    fmt = "text"
    cfg_format = cfg_output.get("format")
    if cfg_format is not None:
        if cfg_format not in FORMATS:
            raise argparse.ArgumentTypeError(
                f"invalid output format in config (expected one of {', '.join(FORMATS)}): "
                f"{cfg_format}"
            )
        fmt = cfg_format
    if args.format is not None:
        fmt = args.format

    eof = True
    cfg_eof = cfg_output.get("eof")
    if isinstance(cfg_eof, bool):
        eof = cfg_eof
    if args.eof is not None:
        eof = args.eof

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        command=args.command,
        input_file=input_file,
        output_file=output_file,
        format=fmt,
        eof=eof,
        debug=args.debug,
    )


def format_tokens(tokens: list[Token], fmt: str = "text", eof: bool = True) -> str:
    """Render tokens one per line (text) or as a JSON array."""
    if not eof:
        tokens = [t for t in tokens if t.type != TokenType.EOF]

    if fmt == "json":
        records = [
            {"type": t.type.name, "lexeme": t.lexeme, "literal": t.literal, "line": t.line}
            for t in tokens
        ]
        return json.dumps(records, indent=2) + "\n"

    return "".join(f"{t}\n" for t in tokens)


def tokenize_file(options: CliOptions) -> tuple[str, ErrorReporter]:
    """Read and scan a Lox file, returning rendered output and the error sink."""
    from loxscan.debug import dump_tokens
    from loxscan.scanner import Scanner

    source = options.input_file.read_text(encoding="utf-8")
    reporter = ErrorReporter()
    tokens = Scanner(source, reporter).scan_tokens()

    if options.debug:
        dump_tokens(tokens, reporter.errors, file=sys.stderr)

    return format_tokens(tokens, options.format, options.eof), reporter


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2/65). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except tomllib.TOMLDecodeError as exc:
        print(f"error: invalid config file: {exc}", file=sys.stderr)
        return 2

    if options.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        output, reporter = tokenize_file(options)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"error: cannot read {options.input_file}: {exc}", file=sys.stderr)
        return 1

    for message in reporter.messages():
        print(message, file=sys.stderr)

    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    if reporter.had_error:
        logger.debug("%d lexical errors in %s", len(reporter), options.input_file)
        return EX_DATAERR
    return EX_OK
