import pytest
from hypothesis import given
from hypothesis import strategies as st

from emadocs.ema_constants import KEYWORDS, TokenType
from emadocs.ema_errors import LexError
from emadocs.ema_lexer import CharacterStream, Lexer, Token, tokenize


def kinds(source: str) -> list[str]:
    return [tok.type for tok in tokenize(source)]


def test_single_char_tokens() -> None:
    code = "{ } ( ) [ ] ; , . : ? + - * % = ! & | < > /"
    assert kinds(code) == [
        "LEFT_BRACE",
        "RIGHT_BRACE",
        "LEFT_PAREN",
        "RIGHT_PAREN",
        "LEFT_BRACKET",
        "RIGHT_BRACKET",
        "SEMICOLON",
        "COMMA",
        "DOT",
        "COLON",
        "QUESTION",
        "PLUS",
        "MINUS",
        "MULTIPLY",
        "MODULO",
        "ASSIGN",
        "NOT",
        "BITWISE_AND",
        "BITWISE_OR",
        "LESS",
        "GREATER",
        "DIVIDE",
        "EOF",
    ]


def test_double_char_tokens() -> None:
    code = "== => != && || <= >= </ />"
    assert kinds(code) == [
        "EQUAL_EQUAL",
        "ARROW",
        "NOT_EQUAL",
        "AND",
        "OR",
        "LESS_EQUAL",
        "GREATER_EQUAL",
        "CLOSING_TAG_START",
        "SELF_CLOSING_TAG_END",
        "EOF",
    ]


def test_maximal_munch_equality() -> None:
    tokens = tokenize("a==b")
    assert [t.type for t in tokens] == ["IDENTIFIER", "EQUAL_EQUAL", "IDENTIFIER", "EOF"]
    assert tokens[0].value == "a"
    assert tokens[2].value == "b"


def test_maximal_munch_arrow() -> None:
    assert kinds("x=>y") == ["IDENTIFIER", "ARROW", "IDENTIFIER", "EOF"]


def test_keyword_token() -> None:
    tokens = tokenize("page")
    assert len(tokens) == 2
    assert tokens[0].type == TokenType.PAGE
    assert tokens[0].value == "page"


def test_keyword_prefix_is_identifier() -> None:
    tokens = tokenize("pagex")
    assert tokens[0].type == TokenType.IDENTIFIER
    assert tokens[0].value == "pagex"
    assert tokens[1].type == TokenType.EOF


def test_keywords_are_case_sensitive() -> None:
    assert tokenize("Page")[0].type == TokenType.IDENTIFIER


@pytest.mark.parametrize("word", sorted(KEYWORDS))  # type: ignore[misc]
def test_every_keyword_gets_its_own_kind(word: str) -> None:
    tok = tokenize(word)[0]
    assert tok.type == word.upper()
    assert tok.value == word


def test_contextual_words_are_identifiers() -> None:
    for word in ("prop", "on", "default", "render"):
        assert tokenize(word)[0].type == TokenType.IDENTIFIER


def test_identifier_with_digits_and_underscores() -> None:
    tok = tokenize("_my_var2")[0]
    assert tok.type == TokenType.IDENTIFIER
    assert tok.value == "_my_var2"


def test_number_token() -> None:
    tok = tokenize("123")[0]
    assert tok.type == TokenType.NUMBER
    assert tok.value == 123.0
    assert isinstance(tok.value, float)


def test_float_token() -> None:
    tok = tokenize("123.456")[0]
    assert tok.type == TokenType.NUMBER
    assert tok.value == 123.456


def test_extra_dots_stay_in_one_number() -> None:
    tokens = tokenize("1.2.3")
    assert [t.type for t in tokens] == ["NUMBER", "EOF"]
    assert tokens[0].value == 1.2
    assert tokens[0].text == "1.2.3"


def test_trailing_dot_number() -> None:
    tok = tokenize("7.")[0]
    assert tok.value == 7.0
    assert tok.text == "7."


def test_token_text_is_source_slice() -> None:
    tokens = tokenize('x = "hi" // c\n14px')
    assert [t.text for t in tokens] == ["x", "=", '"hi"', "// c", "14", "px", ""]
    assert tokens[4].offset == 14
    assert tokens[5].offset == 16


def test_hand_built_token_has_no_text() -> None:
    assert Token(TokenType.IDENTIFIER, "x").text is None


def test_string_token() -> None:
    tok = tokenize('"hello world"')[0]
    assert tok.type == TokenType.STRING
    assert tok.value == "hello world"


def test_single_quoted_string() -> None:
    tok = tokenize("'it'")[0]
    assert tok.type == TokenType.STRING
    assert tok.value == "it"


def test_string_escape_keeps_next_char_verbatim() -> None:
    assert tokenize(r'"a\"b"')[0].value == 'a"b'
    # no escape decoding: \n stays the letter n
    assert tokenize(r'"a\nb"')[0].value == "anb"


def test_template_literal_is_raw() -> None:
    tok = tokenize("`Hello ${name}`")[0]
    assert tok.type == TokenType.TEMPLATE_LITERAL
    assert tok.value == "Hello ${name}"


def test_unterminated_string_raises() -> None:
    with pytest.raises(LexError, match="Unterminated string") as exc:
        tokenize('x = "abc')
    assert exc.value.offset == 4
    assert exc.value.char == '"'
    assert not exc.value.incomplete


def test_unterminated_template_raises() -> None:
    with pytest.raises(LexError, match="Unterminated template literal") as exc:
        tokenize("`abc")
    assert exc.value.incomplete


def test_line_comment_token() -> None:
    tokens = tokenize("// hello\nx")
    assert tokens[0].type == TokenType.COMMENT
    assert tokens[0].value == " hello"
    assert tokens[1].type == TokenType.IDENTIFIER


def test_block_comment_token() -> None:
    tokens = tokenize("/* a\n b */ 1")
    assert tokens[0].type == TokenType.COMMENT
    assert tokens[0].value == " a\n b "
    assert tokens[1].type == TokenType.NUMBER


def test_unterminated_block_comment_raises() -> None:
    with pytest.raises(LexError, match="Unterminated block comment") as exc:
        tokenize("/* never closed")
    assert exc.value.incomplete


def test_unknown_character_raises_with_offset() -> None:
    with pytest.raises(LexError) as exc:
        tokenize("a # b")
    assert exc.value.char == "#"
    assert exc.value.offset == 2
    assert str(exc.value) == "Unexpected character '#' at position 2"


def test_non_ascii_letter_is_rejected() -> None:
    with pytest.raises(LexError):
        tokenize("é")


def test_whitespace_is_skipped() -> None:
    assert kinds(" \t\r\n  ") == ["EOF"]


def test_empty_source_is_just_eof() -> None:
    tokens = tokenize("")
    assert len(tokens) == 1
    assert tokens[0].type == TokenType.EOF
    assert tokens[0].value is None


def test_line_and_column_tracking() -> None:
    tokens = tokenize("x = 1\n  y = 2")
    y = tokens[3]
    assert y.value == "y"
    assert y.line == 2
    assert y.col == 3
    assert y.offset == 8


def test_lexer_is_reusable() -> None:
    lexer = Lexer()
    first = lexer.tokenize("page A {}")
    second = lexer.tokenize("page A {}")
    assert first == second


def test_token_repr_and_eq() -> None:
    t1 = Token(TokenType.IDENTIFIER, "x", 1, 2)
    t2 = Token(TokenType.IDENTIFIER, "x", 1, 2)
    t3 = Token(TokenType.NUMBER, 1.0)

    assert repr(t1) == "Token(IDENTIFIER, 'x')"
    assert t1 == t2
    assert t1 != t3
    assert t1 != "x"
    assert len({t1, t2, t3}) == 2


def test_token_to_dict() -> None:
    tok = tokenize("42")[0]
    assert tok.to_dict() == {"type": "NUMBER", "value": 42.0, "line": 1, "col": 1}


def test_character_stream_methods() -> None:
    stream = CharacterStream("ab")
    assert stream.peek() == "a"
    assert stream.peek(1) == "b"
    assert stream.peek(2) == ""
    assert stream.next() == "a"
    stream.next()
    assert stream.end_of_file()
    with pytest.raises(IndexError):
        stream.next()


@given(st.from_regex(r"[0-9]+(\.[0-9]+)?", fullmatch=True))  # type: ignore[misc]
def test_numeric_round_trip(text: str) -> None:
    tokens = tokenize(text)
    assert len(tokens) == 2
    assert tokens[0].type == TokenType.NUMBER
    assert tokens[0].value == float(text)


@given(st.from_regex(r"[A-Za-z_][A-Za-z0-9_]*", fullmatch=True))  # type: ignore[misc]
def test_keyword_identifier_partition(word: str) -> None:
    tokens = tokenize(word)
    assert len(tokens) == 2
    expected = KEYWORDS.get(word, TokenType.IDENTIFIER)
    assert tokens[0].type == expected
    assert tokens[0].value == word


@given(st.text(max_size=100))  # type: ignore[misc]
def test_lexer_is_total(source: str) -> None:
    try:
        tokens = tokenize(source)
    except LexError as e:
        assert 0 <= e.offset < len(source)
        return
    assert tokens[-1].type == TokenType.EOF
    assert sum(1 for t in tokens if t.type == TokenType.EOF) == 1


@given(st.from_regex(r"[0-9][0-9.]*", fullmatch=True))  # type: ignore[misc]
def test_digit_dot_run_is_one_number(text: str) -> None:
    tokens = tokenize(text)
    assert [t.type for t in tokens] == [TokenType.NUMBER, TokenType.EOF]
    assert tokens[0].text == text
    head = text.split(".")
    expected = head[0] + ("." + head[1] if len(head) > 1 else "")
    assert tokens[0].value == float(expected)
