"""
Lexical analyzer for EmadocsLang (`.ema`) source files.

This module converts raw source text into a flat list of tokens:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: A single token with type, value, source text and source location.
    Lexer: Converts source text into a sequence of tokens ending in exactly one EOF.

Features:
    - Skips whitespace
    - Emits `//` and `/* */` comments as COMMENT tokens (the parser drops them)
    - Longest-match recognition of two-character operators (`==`, `=>`, `</`, `/>`, ...)
    - Recognizes:
        * Identifiers and the fixed keyword set
        * Numbers (a run of digits and dots; its leading `digits[.digits]` part
          becomes the float value, so `1.2.3` is 1.2)
        * Strings and template literals (escapes kept verbatim, no interpolation)
        * Operators and punctuation

Raises:
    LexError: On an unknown character or an unterminated string/comment.

Example:
    >>> [tok.type for tok in tokenize("page Home {}")]
    [<TokenType.PAGE: 'PAGE'>, <TokenType.IDENTIFIER: 'IDENTIFIER'>, ...]
"""

import logging
from typing import Any

from emadocs.ema_constants import (
    DOUBLE_CHAR_TOKENS,
    KEYWORDS,
    SINGLE_CHAR_TOKENS,
    TokenType,
)
from emadocs.ema_errors import LexError

logger = logging.getLogger(__name__)


class CharacterStream:
    """
    Cursor over a source string that keeps the current line and column.

    Attributes:
        source (str): The text being scanned.
        position (int): 0-based offset of the next unread character.
        line (int): Line of the next unread character, starting at 1.
        column (int): Column of the next unread character, starting at 1.
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Returns the next unread character and moves past it.

        Raises:
            IndexError: When the whole source has already been read.
        """
        if self.end_of_file():
            raise IndexError(f"no input left at offset {self.position}")
        char = self.source[self.position]
        self.position += 1
        if char == "\n":
            self.line, self.column = self.line + 1, 1
        else:
            self.column += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character `offset` places ahead, or "" when out of bounds."""
        index = self.position + offset
        return self.source[index] if 0 <= index < len(self.source) else ""

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """A single lexical token.

    Attributes:
        type (TokenType): The token kind.
        value (Any): float for NUMBER, interior text for STRING/TEMPLATE_LITERAL/COMMENT,
            source text for identifiers, keywords and operators, None for EOF.
        line (int): 1-based line where the token starts.
        col (int): 1-based column where the token starts.
        offset (int): 0-based character offset where the token starts.
        text (str | None): The exact source slice, delimiters included. Set by
            the lexer; None for hand-built tokens.
    """

    def __init__(
        self,
        type_: TokenType,
        value: Any,
        line: int = 0,
        col: int = 0,
        offset: int = 0,
        text: str | None = None,
    ):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col
        self.offset = offset
        self.text = text

    def _key(self) -> tuple[Any, ...]:
        return (self.type, self.value, self.line, self.col)

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def to_dict(self) -> dict[str, Any]:
        """Returns a JSON-friendly view of the token."""
        return {
            "type": str(self.type),
            "value": self.value,
            "line": self.line,
            "col": self.col,
        }


class Lexer:
    """Converts EmadocsLang source into tokens.

    A Lexer is reusable across files but not reentrant: `tokenize` replaces the
    working stream on every call.

    Attributes:
        stream (CharacterStream): The stream currently being scanned.
    """

    def __init__(self) -> None:
        self.stream = CharacterStream("")

    def tokenize(self, source: str) -> list[Token]:
        """Scans the whole source and returns its tokens, terminated by one EOF token.

        Raises:
            LexError: On the first character that cannot start a token.
        """
        self.stream = CharacterStream(source)
        tokens: list[Token] = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.type == TokenType.EOF:
                break
        logger.debug("tokenized %d characters into %d tokens", len(source), len(tokens))
        return tokens

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.peek().isspace():
            self.advance()

    def _error(
        self, char: str, message: str | None = None, incomplete: bool = False
    ) -> LexError:
        return LexError(
            char,
            self.stream.position,
            self.stream.line,
            self.stream.column,
            message=message,
            incomplete=incomplete,
        )

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Raises:
            LexError: If the next character cannot start any token.
        """
        self.skip_whitespace()
        line, col, offset = self.stream.line, self.stream.column, self.stream.position
        tok = self.read_token(line, col, offset)
        tok.text = self.stream.source[offset : self.stream.position]
        return tok

    def read_token(self, line: int, col: int, offset: int) -> Token:
        if self.stream.end_of_file():
            return Token(TokenType.EOF, None, line, col, offset)

        ch = self.peek()

        # 1. Comments
        if ch == "/" and self.peek(1) in ("/", "*"):
            return self.read_comment(line, col, offset)

        # 2. Strings and template literals
        if ch in ('"', "'", "`"):
            return self.read_quoted(line, col, offset)

        # 3. Numbers
        if ch.isdigit() and ch.isascii():
            return self.read_number(line, col, offset)

        # 4. Identifier or keyword
        if ch.isascii() and (ch.isalpha() or ch == "_"):
            ident = ""
            while not self.stream.end_of_file() and (
                self.peek().isascii() and (self.peek().isalnum() or self.peek() == "_")
            ):
                ident += self.advance()
            return Token(
                KEYWORDS.get(ident, TokenType.IDENTIFIER), ident, line, col, offset
            )

        # 5. Operators, two-character forms first
        pair = ch + self.peek(1)
        if pair in DOUBLE_CHAR_TOKENS:
            self.advance()
            self.advance()
            return Token(DOUBLE_CHAR_TOKENS[pair], pair, line, col, offset)
        if ch in SINGLE_CHAR_TOKENS:
            self.advance()
            return Token(SINGLE_CHAR_TOKENS[ch], ch, line, col, offset)

        raise self._error(ch)

    def read_comment(self, line: int, col: int, offset: int) -> Token:
        """Reads a `//` line comment or a `/* */` block comment (delimiters excluded)."""
        start = self._error("/", "Unterminated block comment", incomplete=True)
        self.advance()
        block = self.advance() == "*"
        text = ""
        while not self.stream.end_of_file():
            if not block and self.peek() == "\n":
                break
            if block and self.peek() == "*" and self.peek(1) == "/":
                self.advance()
                self.advance()
                return Token(TokenType.COMMENT, text, line, col, offset)
            text += self.advance()
        if block:
            raise start
        return Token(TokenType.COMMENT, text, line, col, offset)

    def read_quoted(self, line: int, col: int, offset: int) -> Token:
        """Reads a string or template literal; a backslash keeps the next character as-is."""
        quote = self.peek()
        template = quote == "`"
        kind = TokenType.TEMPLATE_LITERAL if template else TokenType.STRING
        label = "template literal" if template else "string"
        # template literals may span lines, so running out of input is recoverable
        start = self._error(quote, f"Unterminated {label}", incomplete=template)
        self.advance()
        text = ""
        while not self.stream.end_of_file() and self.peek() != quote:
            if self.peek() == "\\":
                self.advance()
                if not self.stream.end_of_file():
                    text += self.advance()
            else:
                text += self.advance()
        if self.stream.end_of_file():
            raise start
        self.advance()
        return Token(kind, text, line, col, offset)

    def read_number(self, line: int, col: int, offset: int) -> Token:
        """Reads a run of digits and dots; only its `digits[.digits]` head is the value."""
        run = ""
        while not self.stream.end_of_file() and (
            (self.peek().isdigit() and self.peek().isascii()) or self.peek() == "."
        ):
            run += self.advance()
        whole, dot, rest = run.partition(".")
        head = whole + dot + rest.partition(".")[0]
        return Token(TokenType.NUMBER, float(head), line, col, offset)


def tokenize(source: str) -> list[Token]:
    """Tokenizes `source` with a fresh Lexer."""
    return Lexer().tokenize(source)


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
