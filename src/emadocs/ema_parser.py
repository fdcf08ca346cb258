"""
EmadocsLang Parser

Parses `.ema` source into the abstract syntax tree defined in `emadocs.ema_ast`.

The parser is a hand-written LL(1) recursive-descent parser. Top-level and block
statements are chosen by the keyword at the cursor; everything else is parsed
as an expression with classic precedence climbing. Once a production has
matched its keyword it never backtracks.

Supported Constructs
--------------------
- Declarations:
    * `page Name title = "Home" { ... }`
    * `component Name<T> { prop ...; event ...; state { ... } method() { ... } render { ... } }`
    * `style Name { margin: 0 auto; }`, `animation Name { from { ... } 50% { ... } to { ... } }`
    * `event click on target { ... }`, `state Name { ... }`, `api Name { ... }`
    * `router { route "/" => Home; }`, `layout Name { render { ... } }`
    * `type Name = Type;`, `hook useName(a: T) { ... }`, `plugin Name { ... }`, `config { ... }`
    * `import ... from "..."`, `export ...`

- Block statements:
    * `const|let|var`, `return`, `if`/`else`, `while`, `for (x of xs)`, `[async] function`

- Expressions, loosest to tightest:
    * assignment, `||`, `&&`, `== !=`, `< <= > >=`, `+ -`, `* / %`,
      unary `! - await`, call/member chain, primary

- Type annotations:
    * `Name`, `Name<T, U>`, `(A, B) => R`, `(A, B)`, `A | B`, `T[]`, `"literal"`, `{ key: T }`

Parser Behavior
---------------
- Fails fast: the first violated expectation raises `ParseError`; no partial AST.
- COMMENT tokens are dropped before parsing starts.
- Identifiers `prop`, `on`, `default`, `render`, `of` and `to` act as keywords only
  where the grammar expects them.

Entry Points
------------
- `Parser().parse(source)`: Lex and parse a whole file.
- `Parser().parse_tokens(tokens)`: Parse an existing token list.
- `parse(source)`: Module-level shortcut using a fresh Parser.

Raises
------
ParseError
    Raised on the first token that does not fit the grammar.
LexError
    Propagated unchanged from the lexer.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from emadocs.ema_ast import (
    Animation,
    Api,
    ArrayLiteral,
    Assign,
    Await,
    Binary,
    Call,
    Component,
    Config,
    Event,
    EventDeclaration,
    Export,
    ExportSpecifier,
    Expr,
    ForOf,
    FunctionDeclaration,
    FunctionSignature,
    FunctionType,
    GenericType,
    Get,
    Hook,
    If,
    Import,
    ImportSpecifier,
    Keyframe,
    Layout,
    Literal,
    LiteralType,
    Logical,
    Method,
    ObjectLiteral,
    ObjectType,
    Page,
    Parameter,
    Plugin,
    Program,
    Prop,
    Property,
    Return,
    Route,
    Router,
    State,
    Statement,
    Style,
    StyleRule,
    Type,
    TypeAnnotation,
    TypeMember,
    TypeReference,
    Unary,
    UnionType,
    Variable,
    VariableDeclaration,
    While,
)
from emadocs.ema_constants import (
    ADDITIVE_OPERATORS,
    COMPARISON_OPERATORS,
    DECLARATION_KINDS,
    EQUALITY_OPERATORS,
    KEYWORD_TYPES,
    MULTIPLICATIVE_OPERATORS,
    STATEMENT_KEYWORDS,
    UNARY_OPERATORS,
    TokenType,
)
from emadocs.ema_errors import ParseError
from emadocs.ema_lexer import Lexer, Token

logger = logging.getLogger(__name__)

T = TokenType


class Parser:
    """
    EmadocsLang Parser Class

    Turns a token list into a `Program`. The only parser state is the cursor
    `position` into `tokens`; it moves forward exclusively through `advance()`.
    An instance may be reused for many files, one at a time.

    Attributes
    ----------
    lexer : Lexer
        Lexer used by `parse()`.
    tokens : list[Token]
        Tokens of the file being parsed, comments removed, ending in EOF.
    position : int
        Index of the current token.
    statement_parsers : dict[TokenType, Callable[[], Statement]]
        Keyword dispatch table for top-level declarations.
    block_parsers : dict[TokenType, Callable[[], Statement]]
        Keyword dispatch table for block-level statements.

    Raises
    ------
    ParseError
        When an invalid construct or malformed syntax is encountered.
    """

    def __init__(self) -> None:
        self.lexer = Lexer()
        self.tokens: list[Token] = []
        self.position: int = 0

        self.statement_parsers: dict[TokenType, Callable[[], Statement]] = {
            T.PAGE: self.parse_page,
            T.COMPONENT: self.parse_component,
            T.STYLE: self.parse_style,
            T.EVENT: self.parse_event,
            T.STATE: self.parse_state,
            T.API: self.parse_api,
            T.ROUTER: self.parse_router,
            T.LAYOUT: self.parse_layout,
            T.ANIMATION: self.parse_animation,
            T.TYPE: self.parse_type,
            T.HOOK: self.parse_hook,
            T.PLUGIN: self.parse_plugin,
            T.CONFIG: self.parse_config,
            T.IMPORT: self.parse_import,
            T.EXPORT: self.parse_export,
        }
        assert set(self.statement_parsers) == STATEMENT_KEYWORDS

        self.block_parsers: dict[TokenType, Callable[[], Statement]] = {
            T.CONST: self.parse_variable_declaration,
            T.LET: self.parse_variable_declaration,
            T.VAR: self.parse_variable_declaration,
            T.RETURN: self.parse_return,
            T.IF: self.parse_if,
            T.WHILE: self.parse_while,
            T.FOR: self.parse_for,
            T.FUNCTION: self.parse_function_declaration,
            T.ASYNC: self.parse_function_declaration,
        }

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def parse(self, source: str) -> Program:
        """Lex and parse a complete `.ema` source string."""
        return self.parse_tokens(self.lexer.tokenize(source))

    def parse_tokens(self, tokens: list[Token]) -> Program:
        """Parse a token list (as produced by `Lexer.tokenize`) into a Program."""
        self.tokens = [tok for tok in tokens if tok.type != T.COMMENT]
        if not self.tokens or self.tokens[-1].type != T.EOF:
            self.tokens.append(Token(T.EOF, None))
        self.position = 0

        body: list[Statement] = []
        while not self.is_at_end():
            body.append(self.parse_statement())
        logger.debug("parsed %d top-level statements", len(body))
        return Program(tuple(body))

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def peek(self) -> Token:
        return self.tokens[self.position]

    def previous(self) -> Token:
        return self.tokens[self.position - 1]

    def advance(self) -> Token:
        if not self.is_at_end():
            self.position += 1
        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().type == T.EOF

    def check(self, kind: TokenType) -> bool:
        if self.is_at_end():
            return False
        return self.peek().type == kind

    def match(self, *kinds: TokenType) -> bool:
        """True when the current token has one of `kinds`. Never consumes."""
        return self.peek().type in kinds

    def consume(self, kind: TokenType, message: str) -> Token:
        if self.check(kind):
            return self.advance()
        raise ParseError(message, self.peek())

    def check_word(self, word: str) -> bool:
        """True when the current token is the contextual keyword `word`."""
        tok = self.peek()
        return tok.type == T.IDENTIFIER and tok.value == word

    def consume_word(self, word: str, message: str) -> Token:
        if self.check_word(word):
            return self.advance()
        raise ParseError(message, self.peek())

    def consume_name(self, message: str) -> str:
        """Consume an identifier or keyword used as a plain name (`obj.type`, `prop state`)."""
        tok = self.peek()
        if tok.type == T.IDENTIFIER or tok.type in KEYWORD_TYPES:
            return self.advance().value
        raise ParseError(message, tok)

    def skip_separator(self) -> None:
        if self.match(T.COMMA, T.SEMICOLON):
            self.advance()

    def skip_semicolon(self) -> None:
        if self.match(T.SEMICOLON):
            self.advance()

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def parse_statement(self) -> Statement:
        """Dispatch on the current keyword; anything else is an expression statement."""
        kind = self.peek().type
        handler = self.statement_parsers.get(kind) or self.block_parsers.get(kind)
        if handler is not None:
            return handler()
        expr = self.parse_expression()
        self.skip_semicolon()
        return expr

    def parse_block(self) -> tuple[Statement, ...]:
        """Parse statements up to (not including) the closing `}`."""
        statements: list[Statement] = []
        while not self.check(T.RIGHT_BRACE) and not self.is_at_end():
            statements.append(self.parse_statement())
        return tuple(statements)

    def parse_braced_block(self, context: str) -> tuple[Statement, ...]:
        self.consume(T.LEFT_BRACE, f'Expected "{{" before {context} body')
        body = self.parse_block()
        self.consume(T.RIGHT_BRACE, f'Expected "}}" after {context} body')
        return body

    def parse_page(self) -> Page:
        self.consume(T.PAGE, 'Expected "page"')
        name = self.consume(T.IDENTIFIER, "Expected page name").value
        attributes = self.parse_attributes()
        self.consume(T.LEFT_BRACE, 'Expected "{" after page declaration')
        body = self.parse_block()
        self.consume(T.RIGHT_BRACE, 'Expected "}" after page body')
        return Page(name, attributes, body)

    def parse_attributes(self) -> dict[str, Expr]:
        """Parse `key = value` pairs (comma optional) up to the opening `{`."""
        attributes: dict[str, Expr] = {}
        while not self.check(T.LEFT_BRACE) and not self.is_at_end():
            name = self.consume_name("Expected attribute name")
            self.consume(T.ASSIGN, 'Expected "=" after attribute name')
            attributes[name] = self.parse_expression()
            if self.match(T.COMMA):
                self.advance()
        return attributes

    def parse_component(self) -> Component:
        self.consume(T.COMPONENT, 'Expected "component"')
        name = self.consume(T.IDENTIFIER, "Expected component name").value

        type_params: tuple[str, ...] = ()
        if self.match(T.LESS):
            self.advance()
            type_params = self.parse_type_parameters()
            self.consume(T.GREATER, 'Expected ">" after type parameters')

        self.consume(T.LEFT_BRACE, 'Expected "{" after component declaration')
        props = self.parse_props()
        events = self.parse_events()
        state = self.parse_component_state() if self.check(T.STATE) else None
        methods = self.parse_methods()
        render = self.parse_render() if self.check_word("render") else None
        self.consume(T.RIGHT_BRACE, 'Expected "}" after component body')

        return Component(name, type_params, props, events, state, methods, render)

    def parse_type_parameters(self) -> tuple[str, ...]:
        params = [self.consume(T.IDENTIFIER, "Expected type parameter name").value]
        while self.match(T.COMMA):
            self.advance()
            params.append(
                self.consume(T.IDENTIFIER, "Expected type parameter name").value
            )
        return tuple(params)

    def parse_props(self) -> tuple[Prop, ...]:
        props: list[Prop] = []
        while self.check_word("prop"):
            self.advance()
            name = self.consume_name("Expected prop name")
            self.consume(T.COLON, 'Expected ":" after prop name')
            type_ = self.parse_type_annotation()
            default_value = None
            if self.match(T.ASSIGN):
                self.advance()
                default_value = self.parse_expression()
            props.append(Prop(name, type_, default_value))
            self.skip_separator()
        return tuple(props)

    def parse_events(self) -> tuple[EventDeclaration, ...]:
        events: list[EventDeclaration] = []
        while self.check(T.EVENT):
            self.advance()
            name = self.consume_name("Expected event name")
            self.consume(T.COLON, 'Expected ":" after event name')
            events.append(EventDeclaration(name, self.parse_function_signature()))
            self.skip_separator()
        return tuple(events)

    def parse_function_signature(self) -> FunctionSignature:
        """`(params)` followed by an optional `: Type` or `=> Type` return type."""
        self.consume(T.LEFT_PAREN, 'Expected "(" before parameters')
        parameters = self.parse_parameters()
        self.consume(T.RIGHT_PAREN, 'Expected ")" after parameters')
        return_type = None
        if self.match(T.COLON, T.ARROW):
            self.advance()
            return_type = self.parse_type_annotation()
        return FunctionSignature(parameters, return_type)

    def parse_parameters(self) -> tuple[Parameter, ...]:
        params: list[Parameter] = []
        while not self.check(T.RIGHT_PAREN) and not self.is_at_end():
            name = self.consume_name("Expected parameter name")
            type_ = None
            if self.match(T.COLON):
                self.advance()
                type_ = self.parse_type_annotation()
            params.append(Parameter(name, type_))
            if not self.match(T.COMMA):
                break
            self.advance()
        return tuple(params)

    def parse_component_state(self) -> State:
        self.consume(T.STATE, 'Expected "state"')
        name = self.advance().value if self.check(T.IDENTIFIER) else None
        self.consume(T.LEFT_BRACE, 'Expected "{" after state declaration')
        properties = self.parse_properties()
        self.consume(T.RIGHT_BRACE, 'Expected "}" after state properties')
        return State(name, properties)

    def parse_methods(self) -> tuple[Method, ...]:
        methods: list[Method] = []
        while self.match(T.ASYNC, T.FUNCTION) or (
            self.check(T.IDENTIFIER) and not self.check_word("render")
        ):
            start = self.peek()
            member = self.parse_member()
            if not isinstance(member, Method):
                raise ParseError("Expected method declaration", start)
            methods.append(member)
        return tuple(methods)

    def parse_member(self) -> Method | Property:
        """Parse `[async] [function] name(...) {...}` or `name: value` inside a body."""
        is_async = False
        is_method = False
        if self.match(T.ASYNC):
            self.advance()
            is_async = is_method = True
        if self.match(T.FUNCTION):
            self.advance()
            is_method = True

        name = self.consume_name("Expected property or method name")
        if is_method or self.check(T.LEFT_PAREN):
            signature = self.parse_function_signature()
            body = self.parse_braced_block("method")
            return Method(
                name, signature.parameters, signature.return_type, body, is_async
            )

        if not self.match(T.COLON, T.ASSIGN):
            raise ParseError('Expected ":" after property name', self.peek())
        self.advance()
        value = self.parse_expression()
        self.skip_separator()
        return Property(name, value)

    def parse_render(self) -> tuple[Statement, ...]:
        self.consume_word("render", 'Expected "render"')
        if self.match(T.LEFT_PAREN):
            self.advance()
            self.consume(T.RIGHT_PAREN, 'Expected ")" after "render("')
        return self.parse_braced_block("render")

    def parse_properties(self) -> tuple[Property, ...]:
        """Parse `key: value` entries up to (not including) the closing `}`."""
        properties: list[Property] = []
        while not self.check(T.RIGHT_BRACE) and not self.is_at_end():
            properties.append(self.parse_property())
        return tuple(properties)

    def parse_property(self) -> Property:
        if self.check(T.STRING):
            name = self.advance().value
        else:
            name = self.consume_name("Expected property name")
        if not self.match(T.COLON, T.ASSIGN):
            raise ParseError('Expected ":" after property name', self.peek())
        self.advance()
        value = self.parse_expression()
        self.skip_separator()
        return Property(name, value)

    def parse_style(self) -> Style:
        self.consume(T.STYLE, 'Expected "style"')
        if self.check(T.STRING):
            selector = self.advance().value
        else:
            selector = self.consume(T.IDENTIFIER, "Expected style selector").value
        self.consume(T.LEFT_BRACE, 'Expected "{" after style selector')
        rules = self.parse_style_rules()
        self.consume(T.RIGHT_BRACE, 'Expected "}" after style rules')
        return Style(selector, rules)

    def parse_style_rules(self) -> tuple[StyleRule, ...]:
        rules: list[StyleRule] = []
        while not self.check(T.RIGHT_BRACE) and not self.is_at_end():
            name = self.consume_name("Expected style property")
            # font-size lexes as IDENTIFIER MINUS IDENTIFIER
            while self.match(T.MINUS):
                self.advance()
                name += "-" + self.consume_name("Expected style property")
            self.consume(T.COLON, 'Expected ":" after style property')
            rules.append(StyleRule(name, self.parse_style_value()))
            self.skip_semicolon()
        return tuple(rules)

    def parse_style_value(self) -> str:
        """
        Collect a CSS value as source text, up to `;` or the closing `}`.

        Tokens that touched in the source stay joined (`14px`, `50%`,
        `translateY(-2px)`); any gap between tokens becomes one space.
        """
        parts: list[str] = []
        depth = 0
        end = -1
        while not self.is_at_end():
            if depth == 0 and self.match(T.SEMICOLON, T.RIGHT_BRACE):
                break
            tok = self.advance()
            if tok.type == T.LEFT_PAREN:
                depth += 1
            elif tok.type == T.RIGHT_PAREN:
                depth -= 1
            text = tok.text if tok.text is not None else str(tok.value)
            if parts and tok.offset > end:
                parts.append(" ")
            parts.append(text)
            end = tok.offset + len(text)
        if not parts:
            raise ParseError("Expected style value", self.peek())
        return "".join(parts)

    def parse_event(self) -> Event:
        self.consume(T.EVENT, 'Expected "event"')
        event_type = self.consume(T.IDENTIFIER, "Expected event type").value
        self.consume_word("on", 'Expected "on"')
        target = self.parse_expression()
        self.consume(T.LEFT_BRACE, 'Expected "{" after event declaration')
        body = self.parse_block()
        self.consume(T.RIGHT_BRACE, 'Expected "}" after event body')
        return Event(event_type, target, body)

    def parse_state(self) -> State:
        self.consume(T.STATE, 'Expected "state"')
        name = self.consume(T.IDENTIFIER, "Expected state name").value
        self.consume(T.LEFT_BRACE, 'Expected "{" after state declaration')
        properties = self.parse_properties()
        self.consume(T.RIGHT_BRACE, 'Expected "}" after state properties')
        return State(name, properties)

    def parse_api(self) -> Api:
        self.consume(T.API, 'Expected "api"')
        name = self.consume(T.IDENTIFIER, "Expected API name").value
        self.consume(T.LEFT_BRACE, 'Expected "{" after API declaration')

        properties: list[Property] = []
        methods: list[Method] = []
        while not self.check(T.RIGHT_BRACE) and not self.is_at_end():
            start = self.peek()
            member = self.parse_member()
            if isinstance(member, Method):
                methods.append(member)
            elif methods:
                raise ParseError("API properties must come before methods", start)
            else:
                properties.append(member)

        self.consume(T.RIGHT_BRACE, 'Expected "}" after API body')
        return Api(name, tuple(properties), tuple(methods))

    def parse_router(self) -> Router:
        self.consume(T.ROUTER, 'Expected "router"')
        self.consume(T.LEFT_BRACE, 'Expected "{" after router declaration')
        routes: list[Route] = []
        while self.check(T.ROUTE):
            self.advance()
            path = self.consume(T.STRING, "Expected route path").value
            self.consume(T.ARROW, 'Expected "=>" after route path')
            routes.append(Route(path, self.parse_expression()))
            self.skip_separator()
        self.consume(T.RIGHT_BRACE, 'Expected "}" after router body')
        return Router(tuple(routes))

    def parse_layout(self) -> Layout:
        self.consume(T.LAYOUT, 'Expected "layout"')
        name = self.consume(T.IDENTIFIER, "Expected layout name").value
        self.consume(T.LEFT_BRACE, 'Expected "{" after layout declaration')
        render = self.parse_render()
        self.consume(T.RIGHT_BRACE, 'Expected "}" after layout body')
        return Layout(name, render)

    def parse_animation(self) -> Animation:
        self.consume(T.ANIMATION, 'Expected "animation"')
        name = self.consume(T.IDENTIFIER, "Expected animation name").value
        self.consume(T.LEFT_BRACE, 'Expected "{" after animation declaration')
        keyframes: list[Keyframe] = []
        while not self.check(T.RIGHT_BRACE) and not self.is_at_end():
            offset = self.parse_keyframe_offset()
            self.consume(T.LEFT_BRACE, 'Expected "{" after keyframe selector')
            rules = self.parse_style_rules()
            self.consume(T.RIGHT_BRACE, 'Expected "}" after keyframe rules')
            keyframes.append(Keyframe(offset, rules))
        self.consume(T.RIGHT_BRACE, 'Expected "}" after animation body')
        return Animation(name, tuple(keyframes))

    def parse_keyframe_offset(self) -> str:
        if self.match(T.FROM):
            self.advance()
            return "from"
        if self.check_word("to"):
            self.advance()
            return "to"
        if self.check(T.NUMBER):
            percent = self.advance().value
            self.consume(T.MODULO, 'Expected "%" after keyframe offset')
            return f"{percent:g}%"
        raise ParseError("Expected keyframe selector", self.peek())

    def parse_type(self) -> Type:
        self.consume(T.TYPE, 'Expected "type"')
        name = self.consume(T.IDENTIFIER, "Expected type name").value
        self.consume(T.ASSIGN, 'Expected "=" after type name')
        definition = self.parse_type_annotation()
        self.skip_semicolon()
        return Type(name, definition)

    def parse_hook(self) -> Hook:
        self.consume(T.HOOK, 'Expected "hook"')
        name = self.consume(T.IDENTIFIER, "Expected hook name").value
        self.consume(T.LEFT_PAREN, 'Expected "(" after hook name')
        parameters = self.parse_parameters()
        self.consume(T.RIGHT_PAREN, 'Expected ")" after hook parameters')
        self.consume(T.LEFT_BRACE, 'Expected "{" after hook declaration')
        body = self.parse_block()
        self.consume(T.RIGHT_BRACE, 'Expected "}" after hook body')
        return Hook(name, parameters, body)

    def parse_plugin(self) -> Plugin:
        self.consume(T.PLUGIN, 'Expected "plugin"')
        name = self.consume(T.IDENTIFIER, "Expected plugin name").value
        self.consume(T.LEFT_BRACE, 'Expected "{" after plugin declaration')
        properties = self.parse_properties()
        self.consume(T.RIGHT_BRACE, 'Expected "}" after plugin body')
        return Plugin(name, properties)

    def parse_config(self) -> Config:
        self.consume(T.CONFIG, 'Expected "config"')
        self.consume(T.LEFT_BRACE, 'Expected "{" after config declaration')
        properties = self.parse_properties()
        self.consume(T.RIGHT_BRACE, 'Expected "}" after config body')
        return Config(properties)

    def parse_import(self) -> Import:
        self.consume(T.IMPORT, 'Expected "import"')
        if self.check(T.STRING):
            source = self.advance().value
            self.skip_semicolon()
            return Import((), source)

        specifiers = self.parse_import_specifiers()
        source = None
        if self.match(T.FROM):
            self.advance()
            source = self.consume(T.STRING, "Expected module source").value
        self.skip_semicolon()
        return Import(specifiers, source)

    def parse_import_specifiers(self) -> tuple[ImportSpecifier, ...]:
        specifiers: list[ImportSpecifier] = []
        if self.check(T.IDENTIFIER):
            specifiers.append(ImportSpecifier("default", self.advance().value))
            if not self.match(T.COMMA):
                return tuple(specifiers)
            self.advance()

        if self.match(T.MULTIPLY):
            self.advance()
            self.consume(T.AS, 'Expected "as" after "*"')
            local = self.consume(T.IDENTIFIER, "Expected namespace name").value
            specifiers.append(ImportSpecifier("*", local))
            return tuple(specifiers)

        self.consume(T.LEFT_BRACE, "Expected import specifiers")
        while not self.check(T.RIGHT_BRACE) and not self.is_at_end():
            imported = self.consume_name("Expected import name")
            local = imported
            if self.match(T.AS):
                self.advance()
                local = self.consume(T.IDENTIFIER, 'Expected name after "as"').value
            specifiers.append(ImportSpecifier(imported, local))
            if not self.match(T.COMMA):
                break
            self.advance()
        self.consume(T.RIGHT_BRACE, 'Expected "}" after import specifiers')
        return tuple(specifiers)

    def parse_export(self) -> Export:
        self.consume(T.EXPORT, 'Expected "export"')
        if self.check_word("default"):
            self.advance()
            return Export(declaration=self.parse_statement(), default=True)

        kind = self.peek().type
        if kind in self.statement_parsers or kind in self.block_parsers:
            return Export(declaration=self.parse_statement())

        self.consume(T.LEFT_BRACE, "Expected export specifiers")
        specifiers: list[ExportSpecifier] = []
        while not self.check(T.RIGHT_BRACE) and not self.is_at_end():
            local = self.consume_name("Expected export name")
            exported = local
            if self.match(T.AS):
                self.advance()
                exported = self.consume_name('Expected name after "as"')
            specifiers.append(ExportSpecifier(local, exported))
            if not self.match(T.COMMA):
                break
            self.advance()
        self.consume(T.RIGHT_BRACE, 'Expected "}" after export specifiers')

        source = None
        if self.match(T.FROM):
            self.advance()
            source = self.consume(T.STRING, "Expected module source").value
        self.skip_semicolon()
        return Export(tuple(specifiers), source=source)

    # Block-level statements

    def parse_variable_declaration(self) -> VariableDeclaration:
        if not self.match(*DECLARATION_KINDS):
            raise ParseError('Expected "const", "let" or "var"', self.peek())
        declaration_kind = self.advance().value
        name = self.consume(T.IDENTIFIER, "Expected variable name").value
        type_ = None
        if self.match(T.COLON):
            self.advance()
            type_ = self.parse_type_annotation()
        value = None
        if self.match(T.ASSIGN):
            self.advance()
            value = self.parse_expression()
        self.skip_semicolon()
        return VariableDeclaration(declaration_kind, name, type_, value)

    def parse_return(self) -> Return:
        self.consume(T.RETURN, 'Expected "return"')
        value = None
        if not self.match(T.SEMICOLON, T.RIGHT_BRACE, T.EOF):
            value = self.parse_expression()
        self.skip_semicolon()
        return Return(value)

    def parse_condition(self, keyword: str) -> Expr:
        self.consume(T.LEFT_PAREN, f'Expected "(" after "{keyword}"')
        condition = self.parse_expression()
        self.consume(T.RIGHT_PAREN, f'Expected ")" after {keyword} condition')
        return condition

    def parse_if(self) -> If:
        self.consume(T.IF, 'Expected "if"')
        condition = self.parse_condition("if")
        then_branch = self.parse_braced_block("if")
        else_branch = None
        if self.match(T.ELSE):
            self.advance()
            if self.check(T.IF):
                else_branch = (self.parse_if(),)
            else:
                else_branch = self.parse_braced_block("else")
        return If(condition, then_branch, else_branch)

    def parse_while(self) -> While:
        self.consume(T.WHILE, 'Expected "while"')
        condition = self.parse_condition("while")
        return While(condition, self.parse_braced_block("while"))

    def parse_for(self) -> ForOf:
        self.consume(T.FOR, 'Expected "for"')
        self.consume(T.LEFT_PAREN, 'Expected "(" after "for"')
        if self.match(*DECLARATION_KINDS):
            self.advance()
        name = self.consume(T.IDENTIFIER, "Expected loop variable name").value
        self.consume_word("of", 'Expected "of" in for loop')
        iterable = self.parse_expression()
        self.consume(T.RIGHT_PAREN, 'Expected ")" after for clause')
        return ForOf(name, iterable, self.parse_braced_block("for"))

    def parse_function_declaration(self) -> FunctionDeclaration:
        is_async = False
        if self.match(T.ASYNC):
            self.advance()
            is_async = True
        self.consume(T.FUNCTION, 'Expected "function"')
        name = self.consume(T.IDENTIFIER, "Expected function name").value
        signature = self.parse_function_signature()
        body = self.parse_braced_block("function")
        return FunctionDeclaration(
            name, signature.parameters, signature.return_type, body, is_async
        )

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_expression(self) -> Expr:
        return self.parse_assignment()

    def parse_assignment(self) -> Expr:
        expr = self.parse_or()
        if self.match(T.ASSIGN):
            equals = self.advance()
            value = self.parse_assignment()
            if isinstance(expr, Variable):
                return Assign(expr.name, value)
            raise ParseError("Invalid assignment target", equals)
        return expr

    def parse_or(self) -> Expr:
        expr = self.parse_and()
        while self.match(T.OR):
            operator = self.advance().value
            expr = Logical(operator, expr, self.parse_and())
        return expr

    def parse_and(self) -> Expr:
        expr = self.parse_equality()
        while self.match(T.AND):
            operator = self.advance().value
            expr = Logical(operator, expr, self.parse_equality())
        return expr

    def _binary_level(
        self, operand: Callable[[], Expr], operators: tuple[TokenType, ...]
    ) -> Expr:
        expr = operand()
        while self.match(*operators):
            operator = self.advance().value
            expr = Binary(operator, expr, operand())
        return expr

    def parse_equality(self) -> Expr:
        return self._binary_level(self.parse_comparison, EQUALITY_OPERATORS)

    def parse_comparison(self) -> Expr:
        return self._binary_level(self.parse_term, COMPARISON_OPERATORS)

    def parse_term(self) -> Expr:
        return self._binary_level(self.parse_factor, ADDITIVE_OPERATORS)

    def parse_factor(self) -> Expr:
        return self._binary_level(self.parse_unary, MULTIPLICATIVE_OPERATORS)

    def parse_unary(self) -> Expr:
        if self.match(*UNARY_OPERATORS):
            operator = self.advance().value
            return Unary(operator, self.parse_unary())
        if self.match(T.AWAIT):
            self.advance()
            return Await(self.parse_unary())
        return self.parse_call()

    def parse_call(self) -> Expr:
        expr = self.parse_primary()
        while True:
            if self.match(T.LEFT_PAREN):
                self.advance()
                expr = self.finish_call(expr)
            elif self.match(T.DOT):
                self.advance()
                name = self.consume_name('Expected property name after "."')
                expr = Get(expr, name=name)
            elif self.match(T.LEFT_BRACKET):
                self.advance()
                index = self.parse_expression()
                self.consume(T.RIGHT_BRACKET, 'Expected "]" after index')
                expr = Get(expr, index=index)
            else:
                break
        return expr

    def finish_call(self, callee: Expr) -> Call:
        args: list[Expr] = []
        while not self.check(T.RIGHT_PAREN) and not self.is_at_end():
            args.append(self.parse_expression())
            if not self.match(T.COMMA):
                break
            self.advance()
        self.consume(T.RIGHT_PAREN, 'Expected ")" after arguments')
        return Call(callee, tuple(args))

    def parse_primary(self) -> Expr:
        tok = self.peek()
        if self.match(T.FALSE):
            self.advance()
            return Literal(False)
        if self.match(T.TRUE):
            self.advance()
            return Literal(True)
        if self.match(T.NULL, T.UNDEFINED):
            self.advance()
            return Literal(None)
        if self.match(T.NUMBER, T.STRING):
            return Literal(self.advance().value)
        if self.match(T.TEMPLATE_LITERAL):
            return Literal(self.advance().value, is_template=True)
        if self.match(T.IDENTIFIER):
            return Variable(self.advance().value)
        if self.match(T.LEFT_PAREN):
            self.advance()
            expr = self.parse_expression()
            self.consume(T.RIGHT_PAREN, 'Expected ")" after expression')
            return expr
        if self.match(T.LEFT_BRACKET):
            return self.parse_array_literal()
        if self.match(T.LEFT_BRACE):
            self.advance()
            properties = self.parse_properties()
            self.consume(T.RIGHT_BRACE, 'Expected "}" after object literal')
            return ObjectLiteral(properties)
        raise ParseError("Expected expression", tok)

    def parse_array_literal(self) -> ArrayLiteral:
        self.consume(T.LEFT_BRACKET, 'Expected "["')
        elements: list[Expr] = []
        while not self.check(T.RIGHT_BRACKET) and not self.is_at_end():
            elements.append(self.parse_expression())
            if not self.match(T.COMMA):
                break
            self.advance()
        self.consume(T.RIGHT_BRACKET, 'Expected "]" after array elements')
        return ArrayLiteral(tuple(elements))

    # ------------------------------------------------------------------
    # Type annotations
    # ------------------------------------------------------------------

    def parse_type_annotation(self) -> TypeAnnotation:
        first = self.parse_type_primary()
        if not self.match(T.BITWISE_OR):
            return first
        types = [first]
        while self.match(T.BITWISE_OR):
            self.advance()
            types.append(self.parse_type_primary())
        return UnionType(tuple(types))

    def parse_type_primary(self) -> TypeAnnotation:
        """A type atom followed by any number of `[]` suffixes (`Item[]` is `Array<Item>`)."""
        type_ = self.parse_type_atom()
        while self.match(T.LEFT_BRACKET):
            self.advance()
            self.consume(T.RIGHT_BRACKET, 'Expected "]" in array type')
            type_ = GenericType("Array", (type_,))
        return type_

    def parse_type_atom(self) -> TypeAnnotation:
        tok = self.peek()
        if tok.type == T.IDENTIFIER or tok.type in KEYWORD_TYPES:
            name = self.advance().value
            if self.match(T.LESS):
                self.advance()
                type_params = self.parse_type_list()
                self.consume(T.GREATER, 'Expected ">" after type arguments')
                return GenericType(name, type_params)
            return TypeReference(name)

        if self.match(T.STRING):
            return LiteralType(self.advance().value)

        if self.match(T.LEFT_PAREN):
            self.advance()
            types: tuple[TypeAnnotation, ...] = ()
            if not self.check(T.RIGHT_PAREN):
                types = self.parse_type_list()
            self.consume(T.RIGHT_PAREN, 'Expected ")" after type list')
            if self.match(T.ARROW):
                self.advance()
                return FunctionType(types, self.parse_type_annotation())
            if not types:
                raise ParseError('Expected "=>" after empty type list', self.peek())
            if len(types) == 1:
                return types[0]
            return UnionType(types)

        if self.match(T.LEFT_BRACE):
            self.advance()
            members: list[TypeMember] = []
            while not self.check(T.RIGHT_BRACE) and not self.is_at_end():
                name = self.consume_name("Expected member name")
                self.consume(T.COLON, 'Expected ":" after member name')
                members.append(TypeMember(name, self.parse_type_annotation()))
                self.skip_separator()
            self.consume(T.RIGHT_BRACE, 'Expected "}" after object type')
            return ObjectType(tuple(members))

        raise ParseError("Expected type annotation", tok)

    def parse_type_list(self) -> tuple[TypeAnnotation, ...]:
        types = [self.parse_type_list_item()]
        while self.match(T.COMMA):
            self.advance()
            types.append(self.parse_type_list_item())
        return tuple(types)

    def parse_type_list_item(self) -> TypeAnnotation:
        item = self.parse_type_annotation()
        # `(event: Event) => void`: the name before ":" is documentation only
        if isinstance(item, TypeReference) and self.match(T.COLON):
            self.advance()
            item = self.parse_type_annotation()
        return item


def parse(source: str) -> Program:
    """Parse `source` with a fresh Parser."""
    return Parser().parse(source)


__all__ = ["Parser", "parse"]
