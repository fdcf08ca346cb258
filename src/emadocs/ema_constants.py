"""
Token kinds and lookup tables shared by the EmadocsLang lexer and parser.

All tables are built once at import time and never mutated.

Exports:
    - TokenType: str-valued enum of every token kind.
    - KEYWORDS: reserved word -> TokenType.
    - SINGLE_CHAR_TOKENS: one-character punctuation -> TokenType.
    - DOUBLE_CHAR_TOKENS: two-character operators -> TokenType (checked first).
    - STATEMENT_KEYWORDS: keyword kinds that open a top-level declaration.
    - CONTEXTUAL_WORDS: identifiers treated as keywords only in specific positions.
"""

from enum import Enum


class TokenType(str, Enum):
    """Token kinds. Members compare equal to their name, e.g. ``TokenType.PAGE == "PAGE"``."""

    # Literals
    STRING = "STRING"
    NUMBER = "NUMBER"
    TEMPLATE_LITERAL = "TEMPLATE_LITERAL"
    COMMENT = "COMMENT"
    IDENTIFIER = "IDENTIFIER"

    # Keywords
    PAGE = "PAGE"
    COMPONENT = "COMPONENT"
    STYLE = "STYLE"
    EVENT = "EVENT"
    STATE = "STATE"
    API = "API"
    ROUTER = "ROUTER"
    ROUTE = "ROUTE"
    LAYOUT = "LAYOUT"
    ANIMATION = "ANIMATION"
    TYPE = "TYPE"
    HOOK = "HOOK"
    PLUGIN = "PLUGIN"
    CONFIG = "CONFIG"
    IMPORT = "IMPORT"
    EXPORT = "EXPORT"
    FROM = "FROM"
    AS = "AS"
    IF = "IF"
    ELSE = "ELSE"
    FOR = "FOR"
    WHILE = "WHILE"
    FUNCTION = "FUNCTION"
    ASYNC = "ASYNC"
    AWAIT = "AWAIT"
    RETURN = "RETURN"
    CONST = "CONST"
    LET = "LET"
    VAR = "VAR"
    TRUE = "TRUE"
    FALSE = "FALSE"
    NULL = "NULL"
    UNDEFINED = "UNDEFINED"
    CLASS = "CLASS"
    EXTENDS = "EXTENDS"
    IMPLEMENTS = "IMPLEMENTS"
    INTERFACE = "INTERFACE"
    ENUM = "ENUM"
    NAMESPACE = "NAMESPACE"

    # Punctuation
    LEFT_BRACE = "LEFT_BRACE"
    RIGHT_BRACE = "RIGHT_BRACE"
    LEFT_PAREN = "LEFT_PAREN"
    RIGHT_PAREN = "RIGHT_PAREN"
    LEFT_BRACKET = "LEFT_BRACKET"
    RIGHT_BRACKET = "RIGHT_BRACKET"
    SEMICOLON = "SEMICOLON"
    COMMA = "COMMA"
    DOT = "DOT"
    COLON = "COLON"
    QUESTION = "QUESTION"

    # Operators
    PLUS = "PLUS"
    MINUS = "MINUS"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"
    MODULO = "MODULO"
    ASSIGN = "ASSIGN"
    EQUAL_EQUAL = "EQUAL_EQUAL"
    ARROW = "ARROW"
    NOT = "NOT"
    NOT_EQUAL = "NOT_EQUAL"
    AND = "AND"
    BITWISE_AND = "BITWISE_AND"
    OR = "OR"
    BITWISE_OR = "BITWISE_OR"
    LESS = "LESS"
    LESS_EQUAL = "LESS_EQUAL"
    GREATER = "GREATER"
    GREATER_EQUAL = "GREATER_EQUAL"
    CLOSING_TAG_START = "CLOSING_TAG_START"
    SELF_CLOSING_TAG_END = "SELF_CLOSING_TAG_END"

    EOF = "EOF"

    def __str__(self) -> str:
        return self.value


KEYWORDS: dict[str, TokenType] = {
    word: TokenType(word.upper())
    for word in (
        "page",
        "component",
        "style",
        "event",
        "state",
        "api",
        "router",
        "route",
        "layout",
        "animation",
        "type",
        "hook",
        "plugin",
        "config",
        "import",
        "export",
        "from",
        "as",
        "if",
        "else",
        "for",
        "while",
        "function",
        "async",
        "await",
        "return",
        "const",
        "let",
        "var",
        "true",
        "false",
        "null",
        "undefined",
        "class",
        "extends",
        "implements",
        "interface",
        "enum",
        "namespace",
    )
}

KEYWORD_TYPES: frozenset[TokenType] = frozenset(KEYWORDS.values())

# Longest match wins: the lexer tries these before SINGLE_CHAR_TOKENS.
DOUBLE_CHAR_TOKENS: dict[str, TokenType] = {
    "</": TokenType.CLOSING_TAG_START,
    "/>": TokenType.SELF_CLOSING_TAG_END,
    "==": TokenType.EQUAL_EQUAL,
    "=>": TokenType.ARROW,
    "!=": TokenType.NOT_EQUAL,
    "&&": TokenType.AND,
    "||": TokenType.OR,
    "<=": TokenType.LESS_EQUAL,
    ">=": TokenType.GREATER_EQUAL,
}

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    ":": TokenType.COLON,
    "?": TokenType.QUESTION,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "%": TokenType.MODULO,
    "=": TokenType.ASSIGN,
    "!": TokenType.NOT,
    "&": TokenType.BITWISE_AND,
    "|": TokenType.BITWISE_OR,
    "<": TokenType.LESS,
    ">": TokenType.GREATER,
}

STATEMENT_KEYWORDS: frozenset[TokenType] = frozenset(
    {
        TokenType.PAGE,
        TokenType.COMPONENT,
        TokenType.STYLE,
        TokenType.EVENT,
        TokenType.STATE,
        TokenType.API,
        TokenType.ROUTER,
        TokenType.LAYOUT,
        TokenType.ANIMATION,
        TokenType.TYPE,
        TokenType.HOOK,
        TokenType.PLUGIN,
        TokenType.CONFIG,
        TokenType.IMPORT,
        TokenType.EXPORT,
    }
)

DECLARATION_KINDS: frozenset[TokenType] = frozenset(
    {TokenType.CONST, TokenType.LET, TokenType.VAR}
)

# Lexed as IDENTIFIER; the parser recognises them by value where the grammar expects them.
CONTEXTUAL_WORDS: frozenset[str] = frozenset(
    {"prop", "on", "default", "render", "of", "to"}
)

EQUALITY_OPERATORS = (TokenType.EQUAL_EQUAL, TokenType.NOT_EQUAL)
COMPARISON_OPERATORS = (
    TokenType.LESS,
    TokenType.LESS_EQUAL,
    TokenType.GREATER,
    TokenType.GREATER_EQUAL,
)
ADDITIVE_OPERATORS = (TokenType.PLUS, TokenType.MINUS)
MULTIPLICATIVE_OPERATORS = (TokenType.MULTIPLY, TokenType.DIVIDE, TokenType.MODULO)
UNARY_OPERATORS = (TokenType.NOT, TokenType.MINUS)

__all__ = [
    "ADDITIVE_OPERATORS",
    "COMPARISON_OPERATORS",
    "CONTEXTUAL_WORDS",
    "DECLARATION_KINDS",
    "DOUBLE_CHAR_TOKENS",
    "EQUALITY_OPERATORS",
    "KEYWORDS",
    "KEYWORD_TYPES",
    "MULTIPLICATIVE_OPERATORS",
    "SINGLE_CHAR_TOKENS",
    "STATEMENT_KEYWORDS",
    "TokenType",
    "UNARY_OPERATORS",
]
