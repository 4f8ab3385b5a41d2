"""Type checking of named programs.

Works bidirectionally: expressions are either checked against an expected
type or their type is inferred from their parts.
"""

from __future__ import annotations

from typing import Optional, Sequence

from selfie.context import TyCtx
from selfie.names import Sym
from selfie.program import Program
from selfie.symbols import Symbols
from selfie.syntax import (
    BinaryOp,
    Decl,
    Empty,
    EnumDecl,
    EnumInit,
    EnumPattern,
    Expr,
    FieldSelect,
    FnCall,
    FnDecl,
    If,
    Let,
    LitKind,
    Literal,
    Match,
    MatchCase,
    MethodCall,
    Module,
    Op1,
    Op2,
    Pattern,
    StructDecl,
    StructInit,
    Tuple,
    TuplePattern,
    TupleSelect,
    UnaryOp,
    Var,
    WildcardPattern,
    arg_expr,
)
from selfie.types import EnumType, FnType, NamedType, Primitive, StructType, TupleType, Type, from_syntax
from selfie.typing_errors import (
    AmbiguousEnumVariant,
    ExpectedNumericType,
    ExpectedTupleType,
    FieldNotFound,
    MismatchedMatchArms,
    TupleIndexOutOfBounds,
    TypeMismatch,
    TypingError,
    TypingFailed,
    VariantNotFound,
)

_LITERAL_TYPES = {
    LitKind.INT64: Primitive.INT64,
    LitKind.FLOAT64: Primitive.FLOAT64,
    LitKind.BOOL: Primitive.BOOL,
    LitKind.CHAR: Primitive.CHAR,
    LitKind.UNIT: Primitive.UNIT,
    LitKind.STRING: Primitive.STRING,
}

_NUMERIC = (Primitive.INT64, Primitive.FLOAT64)

_ARITHMETIC = frozenset({Op2.ADD, Op2.SUB, Op2.MUL, Op2.DIV, Op2.MOD})
_ORDERING = frozenset({Op2.LT, Op2.GT, Op2.LEQ, Op2.GEQ})
_EQUALITY = frozenset({Op2.EQ, Op2.NEQ})
_LOGICAL = frozenset({Op2.AND, Op2.OR})

_Bindings = list[tuple[Sym, Type]]


class Typer:
    """Assigns types to the expressions of a program, recording them in ``ctx``."""

    def __init__(self, syms: Symbols) -> None:
        self.ctx = TyCtx(syms)

    # Declarations

    def type_module(self, module: Module) -> None:
        """Type every declaration; raise TypingFailed with all errors found."""
        for decl in module.decls:
            if isinstance(decl, FnDecl):
                self.ctx.add_fn_decl(decl.sym, decl)
            elif isinstance(decl, StructDecl):
                self.ctx.add_struct_decl(decl)
            elif isinstance(decl, EnumDecl):
                self.ctx.add_enum_decl(decl)

        errors: list[TypingError] = []
        for decl in module.decls:
            try:
                self.type_decl(decl)
            except TypingError as err:
                errors.append(err)

        if errors:
            raise TypingFailed(errors)

    def type_decl(self, decl: Decl) -> None:
        if isinstance(decl, FnDecl):
            self.type_fn_decl(decl)
        elif not isinstance(decl, (StructDecl, EnumDecl)):
            raise TypeError(f"not a declaration: {decl!r}")

    def type_fn_decl(self, fn_decl: FnDecl) -> None:
        for param in fn_decl.params:
            self.ctx.add_var(param.sym, from_syntax(param.ty))
        self.check_expr(fn_decl.body, from_syntax(fn_decl.return_type))

    # Checking

    def check_expr(self, expr: Expr, expected: Type) -> None:
        """Check that ``expr`` has type ``expected``, raising TypingError if not."""
        if isinstance(expr, Empty):
            return

        if isinstance(expr, Tuple) and isinstance(expected, TupleType):
            self.check_tuple(expr, expected.items)
            self.ctx.add_expr(expr, expected)
            return

        if isinstance(expr, EnumInit) and isinstance(expected, NamedType):
            if expr.ty is None:
                expr.ty = expected.sym
            return

        if isinstance(expr, If):
            self.check_expr(expr.cnd, Primitive.BOOL)
            self.check_expr(expr.thn, expected)
            self.check_expr(expr.els, expected)
            return

        if isinstance(expr, Let):
            value_ty = self.infer_expr(expr.value)
            self.ctx.add_var(expr.sym, value_ty)
            self.check_expr(expr.body, expected)
            return

        if isinstance(expr, Match):
            scrut_ty = self.infer_expr(expr.scrut)
            for case in expr.cases:
                self._bind_case(case, scrut_ty)
                self.check_expr(case.expr, expected)

        actual = self.infer_expr(expr)
        if actual != expected:
            raise TypeMismatch(expr.span, expected, actual)

    def check_tuple(self, tup: Tuple, tys: Sequence[Type]) -> None:
        for item, expected in zip(tup.items, tys):
            self.check_expr(item, expected)

    # Inference

    def infer_expr(self, expr: Expr) -> Type:
        """Infer and record the type of ``expr``."""
        if isinstance(expr, Empty):
            raise TypeError("cannot infer the type of an empty expression")
        if isinstance(expr, Literal):
            ty = self.infer_lit(expr)
        elif isinstance(expr, Var):
            ty = self.infer_var(expr)
        elif isinstance(expr, FnCall):
            ty = self.infer_fn_call(expr)
        elif isinstance(expr, MethodCall):
            raise TypeError(f"method call `{expr.sym}` cannot be typed: methods are unsupported")
        elif isinstance(expr, FieldSelect):
            ty = self._infer_field_select(expr)
        elif isinstance(expr, TupleSelect):
            ty = self._infer_tuple_select(expr)
        elif isinstance(expr, Match):
            ty = self.infer_match(expr)
        elif isinstance(expr, Tuple):
            ty = self.infer_tuple(expr)
        elif isinstance(expr, Let):
            ty = self.infer_let(expr)
        elif isinstance(expr, UnaryOp):
            ty = self.infer_unop(expr)
        elif isinstance(expr, BinaryOp):
            ty = self.infer_binop(expr)
        elif isinstance(expr, If):
            ty = self.infer_if(expr)
        elif isinstance(expr, StructInit):
            ty = self.infer_struct_init(expr)
        elif isinstance(expr, EnumInit):
            ty = self.infer_enum_init(expr)
        else:
            raise TypeError(f"not an expression: {expr!r}")

        self.ctx.add_expr(expr, ty)
        return ty

    def infer_var(self, var: Var) -> Type:
        ty = self.ctx.get_var(var.sym)
        if ty is None:
            raise KeyError(f"var not found: {var.sym!r}")
        return ty

    def infer_lit(self, lit: Literal) -> Type:
        return _LITERAL_TYPES[lit.kind]

    def infer_fn_call(self, fn_call: FnCall) -> Type:
        fn_ty = self._fn_type(fn_call.sym)
        for arg, ty in zip(fn_call.args, fn_ty.args):
            self.check_expr(arg_expr(arg), ty)
        return fn_ty.ret

    def _infer_tuple_select(self, select: TupleSelect) -> Type:
        ty = self.infer_expr(select.expr)
        if not isinstance(ty, TupleType):
            raise ExpectedTupleType(select.span, ty)
        if select.index >= len(ty.items):
            raise TupleIndexOutOfBounds(select.span, select.index, ty)
        return ty.items[select.index]

    def _infer_field_select(self, select: FieldSelect) -> Type:
        ty = self.infer_expr(select.expr)
        if isinstance(ty, TupleType):
            raise TypeError("field selection on tuples is unsupported")
        if isinstance(ty, NamedType):
            struct_ty = self.ctx.get_struct(ty.sym)
            if struct_ty is not None:
                for field_sym, field_ty in struct_ty.fields.items():
                    if field_sym.name == select.sym.name:
                        select.sym = field_sym
                        return field_ty
        raise FieldNotFound(select.span, ty, select.sym)

    def _bind_case(self, case: MatchCase, scrut_ty: Type) -> None:
        bindings: _Bindings = []
        self._bind_pattern(case.pattern, scrut_ty, bindings)
        for sym, ty in bindings:
            self.ctx.add_var(sym, ty)

    def _bind_pattern(self, pattern: Pattern, expected: Type, bindings: _Bindings) -> None:
        if isinstance(pattern, WildcardPattern):
            return
        if isinstance(pattern, Var):
            bindings.append((pattern.sym, expected))
        elif isinstance(pattern, TuplePattern):
            if not isinstance(expected, TupleType):
                raise TypeError(f"tuple pattern cannot match a value of type {expected}")
            for item, ty in zip(pattern.items, expected.items):
                self._bind_pattern(item, ty, bindings)
        elif isinstance(pattern, EnumPattern):
            if pattern.ty is not None:
                enum_sym = pattern.ty
            elif isinstance(expected, NamedType):
                enum_sym = expected.sym
            else:
                raise AmbiguousEnumVariant(pattern.span, pattern.variant)
            self._bind_variant(pattern, enum_sym, bindings)
        else:
            raise TypeError(f"not a pattern: {pattern!r}")

    def _bind_variant(self, pattern: EnumPattern, enum_sym: Sym, bindings: _Bindings) -> None:
        enum_ty = self._enum_type(enum_sym)
        found = _find_variant(enum_ty, pattern.variant)
        if found is None:
            raise VariantNotFound(pattern.span, enum_sym, pattern.variant)
        variant_sym, arg_ty = found
        pattern.variant = variant_sym
        if pattern.arg is not None and arg_ty is not None:
            self._bind_pattern(pattern.arg, arg_ty, bindings)

    def infer_match(self, match: Match) -> Type:
        scrut_ty = self.infer_expr(match.scrut)

        case_tys = []
        for case in match.cases:
            self._bind_case(case, scrut_ty)
            case_tys.append((case.span, self.infer_expr(case.expr)))

        if not case_tys:
            raise ValueError("match expression must have at least one case")

        first_span, first_ty = case_tys[0]
        for case_span, case_ty in case_tys[1:]:
            if case_ty != first_ty:
                raise MismatchedMatchArms(case_span, first_span, first_ty, case_ty)
        return first_ty

    def infer_tuple(self, tup: Tuple) -> Type:
        return TupleType(tuple(self.infer_expr(item) for item in tup.items))

    def infer_let(self, let: Let) -> Type:
        self.ctx.add_var(let.sym, self.infer_expr(let.value))
        return self.infer_expr(let.body)

    def infer_unop(self, unop: UnaryOp) -> Type:
        if unop.op is Op1.NOT:
            self.check_expr(unop.expr, Primitive.BOOL)
            return Primitive.BOOL
        ty = self.infer_expr(unop.expr)
        if ty not in _NUMERIC:
            raise ExpectedNumericType(unop.span, ty)
        return ty

    def infer_binop(self, binop: BinaryOp) -> Type:
        op = binop.op
        if op in _ARITHMETIC:
            return self._check_same_numeric_type(binop.lhs, binop.rhs)
        if op in _ORDERING:
            self._check_same_numeric_type(binop.lhs, binop.rhs)
            return Primitive.BOOL
        if op in _EQUALITY:
            self._check_same_type(binop.lhs, binop.rhs)
            return Primitive.BOOL
        if op in _LOGICAL:
            self.check_expr(binop.lhs, Primitive.BOOL)
            self.check_expr(binop.rhs, Primitive.BOOL)
            return Primitive.BOOL
        raise TypeError(f"unknown binary operator: {op!r}")

    def _check_same_type(self, lhs: Expr, rhs: Expr) -> Type:
        lhs_ty = self.infer_expr(lhs)
        self.check_expr(rhs, lhs_ty)
        return lhs_ty

    def _check_same_numeric_type(self, lhs: Expr, rhs: Expr) -> Type:
        actual = self._check_same_type(lhs, rhs)
        if actual not in _NUMERIC:
            raise ExpectedNumericType(rhs.span, actual)
        return actual

    def infer_if(self, if_: If) -> Type:
        self.check_expr(if_.cnd, Primitive.BOOL)
        ty = self.infer_expr(if_.thn)
        self.check_expr(if_.els, ty)
        return ty

    def infer_struct_init(self, struct_init: StructInit) -> Type:
        struct_ty = self._struct_type(struct_init.sym)
        for arg, ty in zip(struct_init.args, struct_ty.fields.values()):
            self.check_expr(arg.value, ty)
        return NamedType(struct_init.sym)

    def infer_enum_init(self, enum_init: EnumInit) -> Type:
        if enum_init.ty is None:
            raise AmbiguousEnumVariant(enum_init.span, enum_init.variant)
        sym = enum_init.ty
        found = _find_variant(self._enum_type(sym), enum_init.variant)
        if found is None:
            raise VariantNotFound(enum_init.span, sym, enum_init.variant)

        variant_sym, arg_ty = found
        enum_init.variant = variant_sym

        if enum_init.arg is None and arg_ty is None:
            return NamedType(sym)
        if enum_init.arg is not None and arg_ty is not None:
            self.check_expr(enum_init.arg, arg_ty)
            return NamedType(sym)
        raise ValueError(
            f"argument of variant `{variant_sym}` does not match its declaration"
        )

    # Lookups

    def _fn_type(self, sym: Sym) -> FnType:
        ty = self.ctx.get_fn(sym)
        if ty is None:
            raise KeyError(f"fn not found: {sym!r}")
        return ty

    def _struct_type(self, sym: Sym) -> StructType:
        ty = self.ctx.get_struct(sym)
        if ty is None:
            raise KeyError(f"struct not found: {sym!r}")
        return ty

    def _enum_type(self, sym: Sym) -> EnumType:
        ty = self.ctx.get_enum(sym)
        if ty is None:
            raise KeyError(f"enum not found: {sym!r}")
        return ty


def _find_variant(enum_ty: EnumType, variant: Sym) -> Optional[tuple[Sym, Optional[Type]]]:
    return next(
        ((sym, ty) for sym, ty in enum_ty.variants.items() if sym.name == variant.name),
        None,
    )


def type_program(program: Program, syms: Symbols) -> TyCtx:
    """Type every module of ``program``; raise TypingFailed on the first module with errors."""
    typer = Typer(syms)
    for module in program.modules:
        typer.type_module(module)
    return typer.ctx