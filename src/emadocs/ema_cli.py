"""
EmadocsLang CLI Entrypoint.

Command-line front end for the `.ema` lexer and parser.

Features:
    - Read source from `.ema` files or inline strings.
    - Print the parsed AST (or the raw token list) as JSON.
    - Output to console or file.
    - Launch an interactive parse REPL.

Example usage:
    emadocs-parse src/index.ema
    emadocs-parse -s "component Button { prop label: string; }"
    emadocs-parse app.ema --tokens -o tokens.json
    emadocs-parse --repl --verbose

Functions:
    run_emadocs(source: str, is_string: bool = False, out: Optional[str] = None,
                tokens: bool = False, indent: int | None = 2) -> str:
        Runs the front end (lex -> parse -> JSON) and emits the result.

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or parse).
"""

import argparse
import json
import logging
import sys

from emadocs.ema_errors import EmaError
from emadocs.ema_lexer import Lexer
from emadocs.ema_parser import Parser

logger = logging.getLogger(__name__)


def run_emadocs(
    source: str,
    is_string: bool = False,
    out: str | None = None,
    tokens: bool = False,
    indent: int | None = 2,
) -> str:
    """
    Run the EmadocsLang front end and print or write the JSON result.

    Args:
        source (str): The `.ema` source code or a path to a `.ema` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        out (str | None): Optional path to write the JSON to. If None, prints to stdout.
        tokens (bool): If True, emit the token list instead of the AST.
        indent (int | None): JSON indentation; None gives compact output.

    Returns:
        str: The emitted JSON text.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.ema'.
        LexError, ParseError: If the source is malformed.
    """
    if not is_string and not source.endswith(".ema"):
        raise ValueError("Only .ema files are supported.")
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    if tokens:
        payload: object = [tok.to_dict() for tok in Lexer().tokenize(source)]
    else:
        payload = Parser().parse(source).to_dict()
    text = json.dumps(payload, indent=indent)

    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        logger.info("wrote %s", out)
    else:
        print(text)
    return text


def main() -> None:
    """
    Entry point for the `emadocs-parse` command.

    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise parses the given file/string and prints JSON.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `--tokens`: Emit the token list instead of the AST.
        - `-o`, `--out`: Write JSON output to a file.
        - `--indent`: JSON indentation (0 for compact output).
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Debug logging, and JSON output in the REPL.

    Lexer and parser errors are reported as `file:line:col: message` on stderr
    with exit status 1.
    """
    if len(sys.argv) == 1:
        from emadocs.ema_repl import start_repl

        start_repl()
        return

    parser = argparse.ArgumentParser(prog="emadocs-parse")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print tokens instead of the AST"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "--indent", type=int, default=2, help="JSON indentation (0 for compact)"
    )
    parser.add_argument(
        "--repl", action="store_true", help="Launch interactive REPL instead of parsing"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.repl or args.source is None:
        from emadocs.ema_repl import start_repl

        start_repl(verbose=args.verbose)
        return

    filename = "<string>" if args.string else args.source
    try:
        run_emadocs(
            source=args.source,
            is_string=args.string,
            out=args.out,
            tokens=args.tokens,
            indent=args.indent or None,
        )
    except EmaError as e:
        print(f"{filename}:{e.line}:{e.col}: {e.message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
