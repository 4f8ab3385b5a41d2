"""Tables of the names declared in a scope."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from selfie.names import Name, Sym
from selfie.syntax import ParamKind, Span, TypeExpr


@dataclass
class FnSym:
    """A function's symbol with its parameters and their aliases, in order."""

    sym: Sym
    span: Span
    params: dict[Name, tuple[Sym, ParamKind]] = field(default_factory=dict)
    aliases: dict[Name, Sym] = field(default_factory=dict)


@dataclass
class StructSym:
    sym: Sym
    span: Span
    fields: dict[Name, Sym] = field(default_factory=dict)


@dataclass
class VariantSym:
    sym: Sym
    span: Span
    ty: Optional[TypeExpr] = None


@dataclass
class EnumSym:
    sym: Sym
    span: Span
    variants: dict[Name, VariantSym] = field(default_factory=dict)


@dataclass
class Symbols:
    """Variables, functions, structs and enums declared in one scope.

    Adding a name that is already present replaces its entry in place.
    """

    vars: dict[Name, Sym] = field(default_factory=dict)
    fns: dict[Name, FnSym] = field(default_factory=dict)
    structs: dict[Name, StructSym] = field(default_factory=dict)
    enums: dict[Name, EnumSym] = field(default_factory=dict)

    def add_var(self, sym: Sym) -> None:
        self.vars[sym.name] = sym

    def get_var(self, name: Name) -> Optional[Sym]:
        return self.vars.get(name)

    def add_fn(self, fn_sym: FnSym) -> None:
        self.fns[fn_sym.sym.name] = fn_sym

    def get_fn(self, name: Name) -> Optional[FnSym]:
        return self.fns.get(name)

    def add_struct(self, struct_sym: StructSym) -> None:
        self.structs[struct_sym.sym.name] = struct_sym

    def get_struct(self, name: Name) -> Optional[StructSym]:
        return self.structs.get(name)

    def add_enum(self, enum_sym: EnumSym) -> None:
        self.enums[enum_sym.sym.name] = enum_sym

    def get_enum(self, name: Name) -> Optional[EnumSym]:
        return self.enums.get(name)