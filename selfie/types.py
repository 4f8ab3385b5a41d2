"""Semantic types assigned by the typer."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional

from selfie.names import Sym
from selfie.syntax import TypeExpr, TypeKind


class Type:
    """Base of every semantic type."""


class Primitive(Type, enum.Enum):
    """Built-in types that carry no components."""

    INT64 = "Int64"
    FLOAT64 = "Float64"
    BOOL = "Bool"
    CHAR = "Char"
    UNIT = "Unit"
    STRING = "String"
    UNKNOWN = "{unknown}"

    def __str__(self) -> str:
        return self.value


def _join(types: tuple[Type, ...]) -> str:
    return ", ".join(str(ty) for ty in types)


@dataclass(frozen=True)
class TupleType(Type):
    items: tuple[Type, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __str__(self) -> str:
        return f"({_join(self.items)})"


@dataclass(frozen=True)
class NamedType(Type):
    """A struct or enum type, referred to by its declaration's symbol."""

    sym: Sym

    def __str__(self) -> str:
        return str(self.sym)


@dataclass(frozen=True)
class FnType(Type):
    args: tuple[Type, ...]
    ret: Type

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    def __str__(self) -> str:
        return f"({_join(self.args)}) -> {self.ret}"


@dataclass
class StructType:
    """The field types of a struct, in declaration order."""

    fields: dict[Sym, Type] = field(default_factory=dict)


@dataclass
class EnumType:
    """The argument type of each variant of an enum, in declaration order."""

    variants: dict[Sym, Optional[Type]] = field(default_factory=dict)


_PRIMITIVES = {
    TypeKind.INT64: Primitive.INT64,
    TypeKind.FLOAT64: Primitive.FLOAT64,
    TypeKind.BOOL: Primitive.BOOL,
    TypeKind.CHAR: Primitive.CHAR,
    TypeKind.UNIT: Primitive.UNIT,
    TypeKind.STRING: Primitive.STRING,
}


def from_syntax(ty: TypeExpr) -> Type:
    """The semantic type denoted by a type written in source."""
    primitive = _PRIMITIVES.get(ty.kind)
    if primitive is not None:
        return primitive
    if ty.kind is TypeKind.TUPLE:
        return TupleType(tuple(from_syntax(item) for item in ty.items))
    if ty.kind is TypeKind.NAMED:
        assert ty.sym is not None
        return NamedType(ty.sym)
    assert ty.ret is not None
    return FnType(tuple(from_syntax(arg) for arg in ty.items), from_syntax(ty.ret))