"""Command line entry point.

Usage:
    sdl-eval scene.sdl
    sdl-eval scene.sdl --ast
    sdl-eval scene.sdl --tokens -v
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .evaluator import EvaluationError, Evaluator
from .lexer import Lexer
from .parser import ParseError, parse


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Evaluate a scene description file")
    parser.add_argument("file", type=Path, help="Scene description source")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--tokens", action="store_true", help="Print the token stream")
    mode.add_argument("--ast", action="store_true", help="Print the parsed file")
    parser.add_argument("--verbose", "-v", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        source = args.file.read_text()
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.tokens:
        for tok in Lexer(source):
            print(f"{tok.line}:{tok.col}\t{tok.kind.name}\t{tok.literal!r}")
        return 0

    try:
        if args.ast:
            print(parse(source, str(args.file)), end="")
            return 0
        values = Evaluator().evaluate_source(source, str(args.file))
    except (ParseError, EvaluationError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(values.to_python(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
