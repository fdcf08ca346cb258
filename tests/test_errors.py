import pytest

from emadocs.ema_constants import TokenType
from emadocs.ema_errors import EmaError, LexError, ParseError
from emadocs.ema_lexer import Token


def test_lex_error_default_message() -> None:
    err = LexError("$", 7, line=1, col=8)
    assert str(err) == "Unexpected character '$' at position 7"
    assert err.char == "$"
    assert err.offset == 7
    assert (err.line, err.col) == (1, 8)


def test_lex_error_custom_message() -> None:
    err = LexError('"', 0, message="Unterminated string at line 1, col 1")
    assert err.message == "Unterminated string at line 1, col 1"
    assert err.offset == 0


def test_parse_error_takes_position_from_token() -> None:
    tok = Token(TokenType.IDENTIFIER, "count", 4, 9)
    err = ParseError("Expected method declaration", tok)
    assert str(err) == "Expected method declaration"
    assert err.token is tok
    assert (err.line, err.col) == (4, 9)


def test_parse_error_without_token() -> None:
    err = ParseError("Expected expression")
    assert err.token is None
    assert (err.line, err.col) == (0, 0)


@pytest.mark.parametrize(  # type: ignore[misc]
    "err", [LexError("#", 0), ParseError("boom")]
)
def test_errors_share_base(err: EmaError) -> None:
    assert isinstance(err, EmaError)
    with pytest.raises(EmaError):
        raise err


def test_lex_error_is_complete_by_default() -> None:
    assert LexError("#", 0).incomplete is False
    assert LexError("`", 3, message="Unterminated template literal", incomplete=True).incomplete
