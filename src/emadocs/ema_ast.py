"""
Defines the abstract syntax tree (AST) produced by the EmadocsLang parser.

Every node is a frozen dataclass deriving from `ASTNode`. Nodes are grouped into
three families that mirror the grammar:

    Statements:
        Page, Component, Style, Event, State, Api, Router, Layout, Animation,
        Type, Hook, Plugin, Config, Import, Export, plus the block-level
        VariableDeclaration, Return, If, While, ForOf and FunctionDeclaration.
        A bare expression is also a valid statement.

    Expressions:
        Literal, Variable, Assign, Logical, Binary, Unary, Await, Call, Get,
        ArrayLiteral, ObjectLiteral.

    Type annotations:
        TypeReference, GenericType, FunctionType, UnionType, LiteralType, ObjectType.

Supporting records (Property, Prop, Parameter, Method, ...) hold the pieces of
the larger declarations.

Sequences are stored as tuples and the tree holds no back-references, so a
parsed Program can be shared freely. `ASTNode.to_dict()` converts any subtree
into plain dicts/lists suitable for `json.dumps`.

Example:
    node = Binary("+", Literal(1.0), Variable("x"))
    node.to_dict()["kind"]  # "Binary"
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Union

ASTDict = dict[str, Any]
"""Serialized form of a node: a ``"kind"`` tag plus one key per field."""


def _serialize(value: Any) -> Any:
    if isinstance(value, ASTNode):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    return value


class ASTNode:
    """Base class of every EmadocsLang syntax node."""

    def to_dict(self) -> ASTDict:
        data: ASTDict = {"kind": type(self).__name__}
        for f in fields(self):  # type: ignore[arg-type]
            data[f.name] = _serialize(getattr(self, f.name))
        return data


# ---------------------------------------------------------------------------
# Type annotations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TypeReference(ASTNode):
    name: str


@dataclass(frozen=True)
class GenericType(ASTNode):
    """`Name<T, U>`; each parameter is itself an annotation."""

    name: str
    type_params: tuple[TypeAnnotation, ...]


@dataclass(frozen=True)
class FunctionType(ASTNode):
    """`(A, B) => R`."""

    parameters: tuple[TypeAnnotation, ...]
    return_type: TypeAnnotation


@dataclass(frozen=True)
class UnionType(ASTNode):
    """`(A, B)` without an arrow, or `A | B`."""

    types: tuple[TypeAnnotation, ...]


@dataclass(frozen=True)
class LiteralType(ASTNode):
    """A string literal used as a type, e.g. `"primary"`."""

    value: str


@dataclass(frozen=True)
class TypeMember(ASTNode):
    name: str
    type: TypeAnnotation


@dataclass(frozen=True)
class ObjectType(ASTNode):
    """`{ name: T; other: U }`."""

    members: tuple[TypeMember, ...]


TypeAnnotation = Union[
    TypeReference, GenericType, FunctionType, UnionType, LiteralType, ObjectType
]


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Literal(ASTNode):
    """A literal value.

    `value` is a float for numbers, a str for strings and template literals,
    a bool for `true`/`false` and None for `null`/`undefined`. Template
    literals keep their raw text and set `is_template`.
    """

    value: float | str | bool | None
    is_template: bool = False


@dataclass(frozen=True)
class Variable(ASTNode):
    name: str


@dataclass(frozen=True)
class Assign(ASTNode):
    name: str
    value: Expr


@dataclass(frozen=True)
class Logical(ASTNode):
    """`||` and `&&`."""

    operator: str
    left: Expr
    right: Expr


@dataclass(frozen=True)
class Binary(ASTNode):
    """Equality, comparison and arithmetic operators."""

    operator: str
    left: Expr
    right: Expr


@dataclass(frozen=True)
class Unary(ASTNode):
    operator: str
    operand: Expr


@dataclass(frozen=True)
class Await(ASTNode):
    argument: Expr


@dataclass(frozen=True)
class Call(ASTNode):
    callee: Expr
    args: tuple[Expr, ...]


@dataclass(frozen=True)
class Get(ASTNode):
    """Member access: `object.name` sets `name`, `object[index]` sets `index`."""

    object: Expr
    name: str | None = None
    index: Expr | None = None


@dataclass(frozen=True)
class ArrayLiteral(ASTNode):
    elements: tuple[Expr, ...]


@dataclass(frozen=True)
class Property(ASTNode):
    """A `key: value` (or `key = value`) entry in a property list or object literal."""

    name: str
    value: Expr


@dataclass(frozen=True)
class ObjectLiteral(ASTNode):
    properties: tuple[Property, ...]


Expr = Union[
    Literal,
    Variable,
    Assign,
    Logical,
    Binary,
    Unary,
    Await,
    Call,
    Get,
    ArrayLiteral,
    ObjectLiteral,
]


# ---------------------------------------------------------------------------
# Declaration pieces
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Parameter(ASTNode):
    name: str
    type: TypeAnnotation | None = None


@dataclass(frozen=True)
class FunctionSignature(ASTNode):
    parameters: tuple[Parameter, ...]
    return_type: TypeAnnotation | None = None


@dataclass(frozen=True)
class Prop(ASTNode):
    """`prop name: Type [= default]` inside a component."""

    name: str
    type: TypeAnnotation
    default_value: Expr | None = None


@dataclass(frozen=True)
class EventDeclaration(ASTNode):
    """`event name: (params): ReturnType` inside a component."""

    name: str
    signature: FunctionSignature


@dataclass(frozen=True)
class Method(ASTNode):
    name: str
    parameters: tuple[Parameter, ...]
    return_type: TypeAnnotation | None
    body: tuple[Statement, ...]
    is_async: bool = False


@dataclass(frozen=True)
class StyleRule(ASTNode):
    """`property: value`. Hyphenated names such as `font-size` are kept whole and
    `value` is the CSS text as written, with gaps collapsed to single spaces."""

    property: str
    value: str


@dataclass(frozen=True)
class Route(ASTNode):
    path: str
    target: Expr


@dataclass(frozen=True)
class Keyframe(ASTNode):
    """One animation step; `offset` is "from", "to" or a percentage such as "50%"."""

    offset: str
    rules: tuple[StyleRule, ...]


@dataclass(frozen=True)
class ImportSpecifier(ASTNode):
    """`imported as local`. Default imports use "default", namespace imports "*"."""

    imported: str
    local: str


@dataclass(frozen=True)
class ExportSpecifier(ASTNode):
    local: str
    exported: str


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Page(ASTNode):
    name: str
    attributes: dict[str, Expr]
    body: tuple[Statement, ...]


@dataclass(frozen=True)
class State(ASTNode):
    """A state block. `name` is None for the anonymous `state { }` of a component."""

    name: str | None
    properties: tuple[Property, ...]


@dataclass(frozen=True)
class Component(ASTNode):
    name: str
    type_params: tuple[str, ...] = ()
    props: tuple[Prop, ...] = ()
    events: tuple[EventDeclaration, ...] = ()
    state: State | None = None
    methods: tuple[Method, ...] = ()
    render: tuple[Statement, ...] | None = None


@dataclass(frozen=True)
class Style(ASTNode):
    selector: str
    rules: tuple[StyleRule, ...]


@dataclass(frozen=True)
class Event(ASTNode):
    event_type: str
    target: Expr
    body: tuple[Statement, ...]


@dataclass(frozen=True)
class Api(ASTNode):
    name: str
    properties: tuple[Property, ...]
    methods: tuple[Method, ...]


@dataclass(frozen=True)
class Router(ASTNode):
    routes: tuple[Route, ...]


@dataclass(frozen=True)
class Layout(ASTNode):
    name: str
    render: tuple[Statement, ...]


@dataclass(frozen=True)
class Animation(ASTNode):
    name: str
    keyframes: tuple[Keyframe, ...]


@dataclass(frozen=True)
class Type(ASTNode):
    name: str
    definition: TypeAnnotation


@dataclass(frozen=True)
class Hook(ASTNode):
    name: str
    parameters: tuple[Parameter, ...]
    body: tuple[Statement, ...]


@dataclass(frozen=True)
class Plugin(ASTNode):
    name: str
    properties: tuple[Property, ...]


@dataclass(frozen=True)
class Config(ASTNode):
    properties: tuple[Property, ...]


@dataclass(frozen=True)
class Import(ASTNode):
    specifiers: tuple[ImportSpecifier, ...]
    source: str | None = None


@dataclass(frozen=True)
class Export(ASTNode):
    """Either a specifier list (optionally re-exported `from` a source) or a declaration."""

    specifiers: tuple[ExportSpecifier, ...] = ()
    declaration: Statement | None = None
    source: str | None = None
    default: bool = False


@dataclass(frozen=True)
class VariableDeclaration(ASTNode):
    """`const|let|var name [: Type] [= value]`."""

    declaration_kind: str
    name: str
    type: TypeAnnotation | None = None
    value: Expr | None = None


@dataclass(frozen=True)
class Return(ASTNode):
    value: Expr | None = None


@dataclass(frozen=True)
class If(ASTNode):
    condition: Expr
    then_branch: tuple[Statement, ...]
    else_branch: tuple[Statement, ...] | None = None


@dataclass(frozen=True)
class While(ASTNode):
    condition: Expr
    body: tuple[Statement, ...]


@dataclass(frozen=True)
class ForOf(ASTNode):
    name: str
    iterable: Expr
    body: tuple[Statement, ...]


@dataclass(frozen=True)
class FunctionDeclaration(ASTNode):
    name: str
    parameters: tuple[Parameter, ...]
    return_type: TypeAnnotation | None
    body: tuple[Statement, ...]
    is_async: bool = False


Statement = Union[
    Page,
    Component,
    Style,
    Event,
    State,
    Api,
    Router,
    Layout,
    Animation,
    Type,
    Hook,
    Plugin,
    Config,
    Import,
    Export,
    VariableDeclaration,
    Return,
    If,
    While,
    ForOf,
    FunctionDeclaration,
    Expr,
]


@dataclass(frozen=True)
class Program(ASTNode):
    body: tuple[Statement, ...] = field(default_factory=tuple)


__all__ = [
    "ASTDict",
    "ASTNode",
    "Animation",
    "Api",
    "ArrayLiteral",
    "Assign",
    "Await",
    "Binary",
    "Call",
    "Component",
    "Config",
    "Event",
    "EventDeclaration",
    "Export",
    "ExportSpecifier",
    "Expr",
    "ForOf",
    "FunctionDeclaration",
    "FunctionSignature",
    "FunctionType",
    "GenericType",
    "Get",
    "Hook",
    "If",
    "Import",
    "ImportSpecifier",
    "Keyframe",
    "Layout",
    "Literal",
    "LiteralType",
    "Logical",
    "Method",
    "ObjectLiteral",
    "ObjectType",
    "Page",
    "Parameter",
    "Plugin",
    "Program",
    "Prop",
    "Property",
    "Return",
    "Route",
    "Router",
    "State",
    "Statement",
    "Style",
    "StyleRule",
    "Type",
    "TypeAnnotation",
    "TypeMember",
    "TypeReference",
    "Unary",
    "Variable",
    "VariableDeclaration",
    "While",
]
