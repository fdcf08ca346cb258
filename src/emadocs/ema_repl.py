"""
Interactive REPL for exploring how EmadocsLang source parses.

Input lines are buffered until every `{` has a matching `}` and no template
literal or block comment is left open. The buffer is then parsed and each
top-level statement is printed (as a dataclass repr, or as JSON in verbose
mode).
"""

import io
import json
import traceback

from emadocs.ema_constants import TokenType
from emadocs.ema_errors import EmaError, LexError
from emadocs.ema_lexer import Lexer
from emadocs.ema_parser import Parser


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def needs_more_input(source: str) -> bool:
    """True while `source` has more `{` than `}` tokens, or stops inside a
    template literal or block comment."""
    try:
        tokens = Lexer().tokenize(source)
    except LexError as e:
        # anything else is left for the parser to report
        return e.incomplete
    depth = 0
    for tok in tokens:
        if tok.type == TokenType.LEFT_BRACE:
            depth += 1
        elif tok.type == TokenType.RIGHT_BRACE:
            depth -= 1
    return depth > 0


def start_repl(verbose: bool = False) -> None:
    """Run the read-parse-print loop until `exit`, `quit`, EOF or Ctrl-C."""
    print("Emadocs REPL. Type 'exit' or 'quit' to leave.")
    parser = Parser()
    buffer: list[str] = []

    while True:
        try:
            line = input("... " if buffer else "ema> ")
            if not buffer:
                if line.strip() in ("exit", "quit"):
                    print("Exiting Emadocs REPL.")
                    break
                if not line.strip():
                    continue

            buffer.append(line)
            source = "\n".join(buffer)
            if needs_more_input(source):
                continue
            buffer.clear()

            try:
                program = parser.parse(source)
            except EmaError as e:
                print(f"[error] >>> {e}")
                continue
            except RecursionError:
                print_traceback()
                continue

            for stmt in program.body:
                if verbose:
                    print(json.dumps(stmt.to_dict(), indent=2))
                else:
                    print(repr(stmt))

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Emadocs REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
