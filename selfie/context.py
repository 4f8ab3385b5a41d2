"""The typing context: types of variables, functions, structs, enums and expressions."""

from __future__ import annotations

from typing import Optional

from selfie.names import Sym
from selfie.symbols import Symbols
from selfie.syntax import EnumDecl, Expr, FnDecl, StructDecl
from selfie.types import EnumType, FnType, StructType, Type, from_syntax


def _expr_key(expr: Expr) -> str:
    # Expressions are keyed by structure, so equal expressions share a type.
    return repr(expr)


class TyCtx:
    """Everything the typer has learnt about a program so far."""

    def __init__(self, syms: Symbols) -> None:
        self._syms = syms
        self._vars: dict[Sym, Type] = {}
        self._fns: dict[Sym, FnType] = {}
        self._structs: dict[Sym, StructType] = {}
        self._enums: dict[Sym, EnumType] = {}
        self._exprs: dict[str, Type] = {}

    def add_var(self, sym: Sym, ty: Type) -> None:
        self._vars[sym] = ty

    def get_var(self, sym: Sym) -> Optional[Type]:
        return self._vars.get(sym)

    def add_fn(self, sym: Sym, ty: FnType) -> None:
        self._fns[sym] = ty

    def get_fn(self, sym: Sym) -> Optional[FnType]:
        return self._fns.get(sym)

    def add_expr(self, expr: Expr, ty: Type) -> None:
        self._exprs[_expr_key(expr)] = ty

    def get_expr(self, expr: Expr) -> Optional[Type]:
        return self._exprs.get(_expr_key(expr))

    def add_struct(self, sym: Sym, ty: StructType) -> None:
        self._structs[sym] = ty

    def get_struct(self, sym: Sym) -> Optional[StructType]:
        return self._structs.get(sym)

    def add_enum(self, sym: Sym, ty: EnumType) -> None:
        self._enums[sym] = ty

    def get_enum(self, sym: Sym) -> Optional[EnumType]:
        return self._enums.get(sym)

    def add_fn_decl(self, sym: Sym, fn_decl: FnDecl) -> None:
        """Record the signature of a function declaration under ``sym``."""
        fn_ty = FnType(
            tuple(from_syntax(param.ty) for param in fn_decl.params),
            from_syntax(fn_decl.return_type),
        )
        self.add_fn(sym, fn_ty)

    def add_struct_decl(self, struct_decl: StructDecl) -> None:
        struct_ty = StructType({f.sym: from_syntax(f.ty) for f in struct_decl.fields})
        self.add_struct(struct_decl.sym, struct_ty)

    def add_enum_decl(self, enum_decl: EnumDecl) -> None:
        enum_ty = EnumType(
            {
                variant.sym: None if variant.ty is None else from_syntax(variant.ty)
                for variant in enum_decl.variants
            }
        )
        self.add_enum(enum_decl.sym, enum_ty)

    def __repr__(self) -> str:
        return (
            f"TyCtx(vars={self._vars!r}, fns={self._fns!r}, "
            f"structs={self._structs!r}, enums={self._enums!r})"
        )