"""Abstract statements and expressions produced by the synthesizers.

The model only covers what generated accessors need. The emitter turns it
into concrete Go syntax.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Ident:
    name: str


@dataclass(frozen=True)
class Selector:
    x: "Expr"
    sel: str


@dataclass(frozen=True)
class Call:
    func: "Expr"
    args: tuple["Expr", ...] = ()


@dataclass(frozen=True)
class CompositeLit:
    type_name: str
    elements: tuple["Expr", ...] = ()


@dataclass(frozen=True)
class AddressOf:
    x: "Expr"


@dataclass(frozen=True)
class Deref:
    x: "Expr"


@dataclass(frozen=True)
class Index:
    x: "Expr"
    index: "Expr"


@dataclass(frozen=True)
class NotEqual:
    x: "Expr"
    y: "Expr"


@dataclass(frozen=True)
class IntLit:
    value: int


@dataclass(frozen=True)
class PointerType:
    """Parenthesized pointer type used as a conversion, ``(*X)``."""
    elem: "Expr"


Expr = Union[Ident, Selector, Call, CompositeLit, AddressOf, Deref, Index, NotEqual, IntLit,
             PointerType]


@dataclass(frozen=True)
class DeclareVar:
    name: str
    type: Expr


@dataclass(frozen=True)
class Assign:
    name: str
    value: Expr


@dataclass(frozen=True)
class Defer:
    call: Call


@dataclass(frozen=True)
class ExprStmt:
    expr: Expr


@dataclass(frozen=True)
class Return:
    results: tuple[Expr, ...] = ()


@dataclass(frozen=True)
class BlankLine:
    pass


Statement = Union[DeclareVar, Assign, Defer, ExprStmt, Return, BlankLine]


def member(variable: str, name: str) -> Selector:
    return Selector(Ident(variable), name)


def method_call(variable: str, method: str, *args: Expr) -> Call:
    return Call(member(variable, method), tuple(args))


def c_ref(name: str) -> Selector:
    return member("C", name)


def c_call(name: str, *args: Expr) -> Call:
    """C.<name>(args...), used both for native calls and C casts."""
    return Call(c_ref(name), tuple(args))


def cast(type_name: str, value: Expr) -> Call:
    return Call(Ident(type_name), (value,))


class FunctionBuilder:
    """Collects statements in order; ``build`` freezes them."""

    def __init__(self):
        self._statements: list[Statement] = []

    def declare(self, name: str, type_expr: Expr) -> "FunctionBuilder":
        self._statements.append(DeclareVar(name, type_expr))
        return self

    def assign(self, name: str, value: Expr) -> "FunctionBuilder":
        self._statements.append(Assign(name, value))
        return self

    def defer(self, call: Call) -> "FunctionBuilder":
        self._statements.append(Defer(call))
        return self

    def call(self, expr: Expr) -> "FunctionBuilder":
        self._statements.append(ExprStmt(expr))
        return self

    def blank(self) -> "FunctionBuilder":
        # never two in a row, never first
        if self._statements and not isinstance(self._statements[-1], BlankLine):
            self._statements.append(BlankLine())
        return self

    def returns(self, *results: Expr) -> "FunctionBuilder":
        self._statements.append(Return(tuple(results)))
        return self

    def build(self) -> tuple[Statement, ...]:
        return tuple(self._statements)
