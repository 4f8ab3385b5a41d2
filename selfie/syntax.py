"""Syntax tree of a module: declarations, expressions, patterns and types."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Union

from selfie.names import Sym

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_U16_MAX = 2**16 - 1


@dataclass(frozen=True)
class Span:
    """A half-open range of character offsets within a source file."""

    start: int
    end: int
    source: str = ""

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span {self.start}..{self.end}")


@dataclass
class Attribute:
    """An attribute attached to a declaration, with its raw argument tokens."""

    span: Span
    sym: Sym
    args: list[Any] = field(default_factory=list)


class TypeKind(enum.Enum):
    INT64 = "Int64"
    FLOAT64 = "Float64"
    BOOL = "Bool"
    CHAR = "Char"
    UNIT = "Unit"
    STRING = "String"
    TUPLE = "Tuple"
    NAMED = "Named"
    FN = "Fn"


@dataclass
class TypeExpr:
    """A type as written in source.

    ``items`` holds the element types of a tuple or the parameter types of a
    function type; ``sym`` is set for named types and ``ret`` for function types.
    """

    span: Span
    kind: TypeKind
    items: list[TypeExpr] = field(default_factory=list)
    sym: Optional[Sym] = None
    ret: Optional[TypeExpr] = None

    def __post_init__(self) -> None:
        if (self.sym is None) == (self.kind is TypeKind.NAMED):
            raise ValueError("a named type, and only a named type, carries a symbol")
        if (self.ret is None) == (self.kind is TypeKind.FN):
            raise ValueError("a function type, and only a function type, has a return type")
        if self.items and self.kind not in (TypeKind.TUPLE, TypeKind.FN):
            raise ValueError(f"{self.kind.value} type cannot have component types")


class LitKind(enum.Enum):
    INT64 = "Int64"
    FLOAT64 = "Float64"
    BOOL = "Bool"
    CHAR = "Char"
    UNIT = "Unit"
    STRING = "String"


@dataclass(frozen=True)
class Literal:
    """A literal value; ``value`` is None for the unit literal."""

    span: Span
    kind: LitKind
    value: Union[int, float, bool, str, None] = None

    def __post_init__(self) -> None:
        value = self.value
        kind = self.kind
        if kind is LitKind.UNIT:
            if value is not None:
                raise ValueError("unit literal carries no value")
        elif kind is LitKind.BOOL:
            if not isinstance(value, bool):
                raise TypeError("Bool literal needs a bool")
        elif kind is LitKind.INT64:
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError("Int64 literal needs an int")
            if not _I64_MIN <= value <= _I64_MAX:
                raise ValueError(f"Int64 literal out of range: {value}")
        elif kind is LitKind.FLOAT64:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TypeError("Float64 literal needs a number")
            object.__setattr__(self, "value", float(value))
        elif kind is LitKind.CHAR:
            if not isinstance(value, str):
                raise TypeError("Char literal needs a string")
            if len(value) != 1:
                raise ValueError("Char literal must be exactly one character")
        elif not isinstance(value, str):
            raise TypeError("String literal needs a string")


@dataclass
class Empty:
    span: Span


@dataclass
class Var:
    span: Span
    sym: Sym


@dataclass
class NamedArg:
    span: Span
    sym: Sym
    value: Expr


class Op1(enum.Enum):
    NOT = "!"
    NEG = "-"


class Op2(enum.Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    EQ = "=="
    NEQ = "!="
    LT = "<"
    GT = ">"
    LEQ = "<="
    GEQ = ">="
    AND = "&&"
    OR = "||"


@dataclass
class UnaryOp:
    span: Span
    op: Op1
    expr: Expr


@dataclass
class BinaryOp:
    span: Span
    op: Op2
    lhs: Expr
    rhs: Expr


@dataclass
class FnCall:
    span: Span
    sym: Sym
    args: list[Arg] = field(default_factory=list)


@dataclass
class MethodCall:
    span: Span
    expr: Expr
    sym: Sym
    args: list[Arg] = field(default_factory=list)


@dataclass
class FieldSelect:
    span: Span
    expr: Expr
    sym: Sym


@dataclass
class TupleSelect:
    span: Span
    expr: Expr
    index: int

    def __post_init__(self) -> None:
        if not 0 <= self.index <= _U16_MAX:
            raise ValueError(f"tuple index out of range: {self.index}")


@dataclass
class Tuple:
    span: Span
    items: list[Expr] = field(default_factory=list)


@dataclass
class WildcardPattern:
    span: Span


@dataclass
class TuplePattern:
    span: Span
    items: list[Pattern] = field(default_factory=list)


@dataclass
class EnumPattern:
    span: Span
    ty: Optional[Sym]
    variant: Sym
    arg: Optional[Pattern] = None


@dataclass
class MatchCase:
    span: Span
    pattern: Pattern
    expr: Expr


@dataclass
class Match:
    span: Span
    scrut: Expr
    cases: list[MatchCase] = field(default_factory=list)


@dataclass
class Let:
    span: Span
    sym: Sym
    value: Expr
    body: Expr


@dataclass
class If:
    span: Span
    cnd: Expr
    thn: Expr
    els: Expr


@dataclass
class StructInit:
    span: Span
    sym: Sym
    args: list[NamedArg] = field(default_factory=list)


@dataclass
class EnumInit:
    span: Span
    ty: Optional[Sym]
    variant: Sym
    arg: Optional[Expr] = None


Expr = Union[
    Empty,
    Literal,
    Var,
    FnCall,
    MethodCall,
    FieldSelect,
    TupleSelect,
    Tuple,
    Match,
    Let,
    UnaryOp,
    BinaryOp,
    If,
    StructInit,
    EnumInit,
]

Pattern = Union[WildcardPattern, Var, TuplePattern, EnumPattern]

Arg = Union[NamedArg, Expr]


def arg_expr(arg: Arg) -> Expr:
    """The expression passed by an argument, labelled or not."""
    return arg.value if isinstance(arg, NamedArg) else arg


@dataclass(frozen=True)
class ParamKind:
    """How a parameter is passed: anonymously, by its name, or by an alias."""

    anonymous: bool = False
    alias: Optional[Sym] = None

    def __post_init__(self) -> None:
        if self.anonymous and self.alias is not None:
            raise ValueError("an anonymous parameter cannot have an alias")

    def is_anon(self) -> bool:
        return self.anonymous

    def is_normal(self) -> bool:
        return not self.anonymous and self.alias is None

    def is_alias(self) -> bool:
        return self.alias is not None


@dataclass
class Param:
    span: Span
    sym: Sym
    ty: TypeExpr
    kind: ParamKind = field(default_factory=ParamKind)


@dataclass
class FnDecl:
    span: Span
    sym: Sym
    params: list[Param]
    return_type: TypeExpr
    body: Expr
    attrs: list[Attribute] = field(default_factory=list)


@dataclass
class Field:
    span: Span
    sym: Sym
    ty: TypeExpr


@dataclass
class StructDecl:
    span: Span
    sym: Sym
    fields: list[Field] = field(default_factory=list)
    attrs: list[Attribute] = field(default_factory=list)


@dataclass
class Variant:
    span: Span
    sym: Sym
    ty: Optional[TypeExpr] = None


@dataclass
class EnumDecl:
    span: Span
    sym: Sym
    variants: list[Variant] = field(default_factory=list)
    attrs: list[Attribute] = field(default_factory=list)


Decl = Union[FnDecl, StructDecl, EnumDecl]


@dataclass
class Module:
    span: Span
    sym: Sym
    decls: list[Decl] = field(default_factory=list)

    def fns(self) -> Iterator[FnDecl]:
        """The function declarations of the module, in order."""
        return (decl for decl in self.decls if isinstance(decl, FnDecl))