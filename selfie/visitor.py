"""Read-only traversal of expressions and written types.

Visitors walk the syntax tree in source order. Override a ``visit_*`` method to
act on a node. Call the base method from the override to keep descending into
the node's children.
"""

from __future__ import annotations

from typing import Iterable, Union

from selfie.syntax import (
    Arg,
    BinaryOp,
    Empty,
    EnumInit,
    Expr,
    FieldSelect,
    FnCall,
    If,
    Let,
    Literal,
    Match,
    MatchCase,
    MethodCall,
    NamedArg,
    StructInit,
    Tuple,
    TupleSelect,
    TypeExpr,
    TypeKind,
    UnaryOp,
    Var,
)


class ExprVisitor:
    """Walks an expression tree, visiting every sub-expression in order."""

    def _visit_leaf(self, node: Union[Literal, Var]) -> None:
        """Common hook for expressions that have no sub-expressions."""

    def visit_expr(self, expr: Expr) -> None:
        walk_expr(expr, self)

    def visit_lit(self, lit: Literal) -> None:
        self._visit_leaf(lit)

    def visit_var(self, var: Var) -> None:
        self._visit_leaf(var)

    def visit_fn_call(self, call: FnCall) -> None:
        self.visit_args(call.args)

    def visit_method_call(self, call: MethodCall) -> None:
        self.visit_expr(call.expr)
        self.visit_args(call.args)

    def visit_tuple(self, tuple_: Tuple) -> None:
        for item in tuple_.items:
            self.visit_expr(item)

    def visit_match(self, match: Match) -> None:
        self.visit_expr(match.scrut)
        for case in match.cases:
            self.visit_match_case(case)

    def visit_match_case(self, case: MatchCase) -> None:
        self.visit_expr(case.expr)

    def visit_let(self, let: Let) -> None:
        self.visit_expr(let.value)
        self.visit_expr(let.body)

    def visit_field_select(self, field: FieldSelect) -> None:
        self.visit_expr(field.expr)

    def visit_tuple_select(self, select: TupleSelect) -> None:
        self.visit_expr(select.expr)

    def visit_unary_op(self, op: UnaryOp) -> None:
        self.visit_expr(op.expr)

    def visit_binary_op(self, op: BinaryOp) -> None:
        self.visit_expr(op.lhs)
        self.visit_expr(op.rhs)

    def visit_if(self, if_: If) -> None:
        self.visit_expr(if_.cnd)
        self.visit_expr(if_.thn)
        self.visit_expr(if_.els)

    def visit_struct_init(self, init: StructInit) -> None:
        for arg in init.args:
            self.visit_expr(arg.value)

    def visit_enum_init(self, init: EnumInit) -> None:
        if init.arg is not None:
            self.visit_expr(init.arg)

    def visit_args(self, args: Iterable[Arg]) -> None:
        for arg in args:
            self.visit_arg(arg)

    def visit_arg(self, arg: Arg) -> None:
        if isinstance(arg, NamedArg):
            self.visit_expr(arg.value)
        else:
            self.visit_expr(arg)


def walk_expr(expr: Expr, visitor: ExprVisitor) -> None:
    """Hand ``expr`` to the visitor method that matches its kind."""
    match expr:
        case Empty():
            pass
        case Literal():
            visitor.visit_lit(expr)
        case Var():
            visitor.visit_var(expr)
        case FnCall():
            visitor.visit_fn_call(expr)
        case MethodCall():
            visitor.visit_method_call(expr)
        case FieldSelect():
            visitor.visit_field_select(expr)
        case TupleSelect():
            visitor.visit_tuple_select(expr)
        case Tuple():
            visitor.visit_tuple(expr)
        case Match():
            visitor.visit_match(expr)
        case Let():
            visitor.visit_let(expr)
        case UnaryOp():
            visitor.visit_unary_op(expr)
        case BinaryOp():
            visitor.visit_binary_op(expr)
        case If():
            visitor.visit_if(expr)
        case StructInit():
            visitor.visit_struct_init(expr)
        case EnumInit():
            visitor.visit_enum_init(expr)
        case _:
            raise TypeError(f"not an expression: {expr!r}")


class TypeVisitor:
    """Walks a written type, visiting every component type in order."""

    def _visit_leaf(self, ty: TypeExpr) -> None:
        """Common hook for types that have no component types."""

    def visit_type(self, ty: TypeExpr) -> None:
        walk_type(ty, self)

    def visit_int64(self, ty: TypeExpr) -> None:
        self._visit_leaf(ty)

    def visit_float64(self, ty: TypeExpr) -> None:
        self._visit_leaf(ty)

    def visit_string(self, ty: TypeExpr) -> None:
        self._visit_leaf(ty)

    def visit_bool(self, ty: TypeExpr) -> None:
        self._visit_leaf(ty)

    def visit_char(self, ty: TypeExpr) -> None:
        self._visit_leaf(ty)

    def visit_unit(self, ty: TypeExpr) -> None:
        self._visit_leaf(ty)

    def visit_tuple(self, ty: TypeExpr) -> None:
        for item in ty.items:
            self.visit_type(item)

    def visit_named(self, ty: TypeExpr) -> None:
        self._visit_leaf(ty)

    def visit_fn(self, ty: TypeExpr) -> None:
        for arg in ty.items:
            self.visit_type(arg)
        if ty.ret is not None:
            self.visit_type(ty.ret)


def walk_type(ty: TypeExpr, visitor: TypeVisitor) -> None:
    """Hand ``ty`` to the visitor method that matches its kind."""
    match ty.kind:
        case TypeKind.INT64:
            visitor.visit_int64(ty)
        case TypeKind.FLOAT64:
            visitor.visit_float64(ty)
        case TypeKind.BOOL:
            visitor.visit_bool(ty)
        case TypeKind.CHAR:
            visitor.visit_char(ty)
        case TypeKind.UNIT:
            visitor.visit_unit(ty)
        case TypeKind.STRING:
            visitor.visit_string(ty)
        case TypeKind.TUPLE:
            visitor.visit_tuple(ty)
        case TypeKind.NAMED:
            visitor.visit_named(ty)
        case TypeKind.FN:
            visitor.visit_fn(ty)