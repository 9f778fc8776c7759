"""Command-line entry point: compile a source file to an executable."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from cobrac.codegen import DEFAULT_ASM_PATH, CodegenError, generate_code
from cobrac.lexer import LexerError, format_token, tokenize
from cobrac.parser import ParseError, parse


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cobrac", description="Compile a source file to an x86-64 executable."
    )
    parser.add_argument("source", help="the source file to compile")
    parser.add_argument(
        "-o",
        "--output",
        default=str(DEFAULT_ASM_PATH),
        help="where to write the generated assembly",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the compiler and return the process exit status."""
    args = _build_parser().parse_args(argv)
    try:
        text = Path(args.source).read_text()
    except OSError as exc:
        print(f"File not opened: {exc}", file=sys.stderr)
        return 1
    try:
        tokens = tokenize(text)
        for token in tokens:
            print(format_token(token), end="")
        generate_code(parse(tokens), args.output)
    except (LexerError, ParseError, CodegenError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())