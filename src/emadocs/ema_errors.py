"""
Exceptions raised by the EmadocsLang front end.

Classes:
    EmaError: Base class for every lexer/parser failure.
    LexError: Raised by the lexer on an unrecognised character or a malformed literal.
    ParseError: Raised by the parser on the first violated expectation.

Both errors abort the whole file; no partial token list or AST is ever returned.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from emadocs.ema_lexer import Token


class EmaError(Exception):
    """Base class for EmadocsLang front-end errors.

    Attributes:
        message (str): Human-readable description of the failure.
        line (int): 1-based line of the failure, or 0 when unknown.
        col (int): 1-based column of the failure, or 0 when unknown.
    """

    def __init__(self, message: str, line: int = 0, col: int = 0):
        super().__init__(message)
        self.message = message
        self.line = line
        self.col = col


class LexError(EmaError):
    """Raised when the lexer cannot classify the input at some position.

    Attributes:
        char (str): The offending character.
        offset (int): 0-based character offset of the offending character.
        incomplete (bool): True when the input merely stopped inside a template
            literal or block comment, so more input could still complete it.

    Example:
        raise LexError("#", 12, line=2, col=5)
    """

    def __init__(
        self,
        char: str,
        offset: int,
        line: int = 0,
        col: int = 0,
        message: str | None = None,
        incomplete: bool = False,
    ):
        if message is None:
            message = f"Unexpected character {char!r} at position {offset}"
        super().__init__(message, line, col)
        self.char = char
        self.offset = offset
        self.incomplete = incomplete


class ParseError(EmaError):
    """Raised when the token at the cursor does not fit the grammar.

    ``str(error)`` is always the fixed expectation message; the offending token
    (when known) is kept on the instance so callers can report a position.

    Attributes:
        token (Token | None): The token the parser was looking at.
    """

    def __init__(self, message: str, token: Token | None = None):
        line = token.line if token is not None else 0
        col = token.col if token is not None else 0
        super().__init__(message, line, col)
        self.token = token


__all__ = ["EmaError", "LexError", "ParseError"]
