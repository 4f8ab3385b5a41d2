"""Name resolution: gives every binding a unique id and checks references."""

from __future__ import annotations

import copy
from dataclasses import replace

from selfie.names import Sym
from selfie.naming_errors import (
    DuplicateDecl,
    DuplicateField,
    DuplicateModule,
    DuplicateParam,
    DuplicateVariant,
    ExtraneousArgLabel,
    MissingArgLabel,
    MissingField,
    MissingVariantArg,
    NamingError,
    NamingFailed,
    UnboundFn,
    UnboundVar,
    UnexpectedArg,
    UnexpectedVariantArg,
    UnknownField,
    UnknownType,
    UnknownVariant,
    WrongArgCount,
    WrongArgLabel,
)
from selfie.program import Program
from selfie.scopes import ScopeStack
from selfie.symbols import EnumSym, FnSym, StructSym, Symbols, VariantSym
from selfie.syntax import (
    Decl,
    EnumDecl,
    EnumInit,
    EnumPattern,
    Expr,
    FnCall,
    FnDecl,
    Let,
    MatchCase,
    MethodCall,
    Module,
    NamedArg,
    ParamKind,
    Pattern,
    StructDecl,
    StructInit,
    TuplePattern,
    TypeExpr,
    Var,
    WildcardPattern,
    arg_expr,
)
from selfie.visitor import ExprVisitor, TypeVisitor


class Ids:
    """Hands out consecutive symbol ids, starting at 0."""

    def __init__(self) -> None:
        self._next = 0

    def next(self) -> int:
        id_ = self._next
        self._next += 1
        return id_

    def freshen(self, sym: Sym) -> Sym:
        """The same symbol carrying a new unique id."""
        return replace(sym, id=self.next())


class _NameExprVisitor(ExprVisitor):
    def __init__(self, ids: Ids, scope: ScopeStack, errors: list[NamingError]) -> None:
        self._ids = ids
        self._scope = scope
        self._errors = errors

    def visit_var(self, var: Var) -> None:
        sym = self._scope.get_var(var.sym.name)
        if sym is None:
            self._errors.append(UnboundVar(var.span, var.sym))
        else:
            var.sym = sym

    def visit_fn_call(self, call: FnCall) -> None:
        fn_sym = self._scope.get_fn(call.sym.name)
        if fn_sym is None:
            self._errors.append(UnboundFn(call.span, call.sym))
        else:
            call.sym = fn_sym.sym
            if len(call.args) != len(fn_sym.params):
                self._errors.append(
                    WrongArgCount(
                        call.span, fn_sym, call.sym, len(call.args), len(fn_sym.params)
                    )
                )
                return
            for arg, (param, kind) in zip(call.args, fn_sym.params.values()):
                self._check_arg(fn_sym, arg, param, kind)

        for arg in call.args:
            self.visit_expr(arg_expr(arg))

    def _check_arg(self, fn_sym: FnSym, arg, param: Sym, kind: ParamKind) -> None:
        if not isinstance(arg, NamedArg):
            if not kind.is_anon():
                self._errors.append(MissingArgLabel(arg.span, fn_sym, param))
            return
        if kind.is_anon():
            self._errors.append(ExtraneousArgLabel(arg.span, fn_sym, arg.sym, param))
        elif kind.is_normal():
            if arg.sym.name == param.name:
                arg.sym = param
            else:
                self._errors.append(UnexpectedArg(arg.span, fn_sym, arg.sym, param))
        else:
            alias = kind.alias
            assert alias is not None
            if arg.sym.name == alias.name:
                arg.sym = alias
            elif arg.sym.name == param.name:
                self._errors.append(WrongArgLabel(arg.span, fn_sym, arg.sym, alias))
            else:
                self._errors.append(UnexpectedArg(arg.span, fn_sym, arg.sym, alias))

    def visit_method_call(self, call: MethodCall) -> None:
        raise TypeError(f"method call `{call.sym}` cannot be resolved: methods are unsupported")

    def visit_match_case(self, case: MatchCase) -> None:
        with self._scope.in_scope():
            self._name_pattern(case.pattern)
            self.visit_expr(case.expr)

    def _name_pattern(self, pattern: Pattern) -> None:
        if isinstance(pattern, WildcardPattern):
            return
        if isinstance(pattern, Var):
            pattern.sym = self._ids.freshen(pattern.sym)
            self._scope.add_var(pattern.sym)
        elif isinstance(pattern, TuplePattern):
            for item in pattern.items:
                self._name_pattern(item)
        elif isinstance(pattern, EnumPattern):
            if pattern.ty is not None:
                enum_sym = self._scope.get_enum(pattern.ty.name)
                if enum_sym is None:
                    self._errors.append(UnknownType(pattern.span, pattern.ty))
                    return
                pattern.ty = enum_sym.sym
            if pattern.arg is not None:
                self._name_pattern(pattern.arg)
        else:
            raise TypeError(f"not a pattern: {pattern!r}")

    def visit_let(self, let: Let) -> None:
        self.visit_expr(let.value)
        with self._scope.in_scope():
            let.sym = self._ids.freshen(let.sym)
            self._scope.add_var(let.sym)
            self.visit_expr(let.body)

    def visit_struct_init(self, init: StructInit) -> None:
        struct_sym = self._scope.get_struct(init.sym.name)
        if struct_sym is None:
            self._errors.append(UnknownType(init.span, init.sym))
        else:
            init.sym = struct_sym.sym
            for field_name in struct_sym.fields:
                if not any(arg.sym.name == field_name for arg in init.args):
                    self._errors.append(MissingField(init.span, struct_sym, field_name))
            for arg in init.args:
                field_sym = struct_sym.fields.get(arg.sym.name)
                if field_sym is None:
                    self._errors.append(UnknownField(arg.span, struct_sym, arg.sym))
                else:
                    arg.sym = field_sym

        for arg in init.args:
            self.visit_expr(arg.value)

    def visit_enum_init(self, init: EnumInit) -> None:
        if init.ty is None:
            if init.arg is not None:
                self.visit_expr(init.arg)
            return

        enum_sym = self._scope.get_enum(init.ty.name)
        if enum_sym is None:
            self._errors.append(UnknownType(init.span, init.ty))
            return
        init.ty = enum_sym.sym

        variant_sym = enum_sym.variants.get(init.variant.name)
        if variant_sym is None:
            self._errors.append(UnknownVariant(init.span, enum_sym, init.variant))
            return

        init.variant = variant_sym.sym
        if init.arg is not None and variant_sym.ty is None:
            self._errors.append(UnexpectedVariantArg(init.span, enum_sym, init.variant))
        elif init.arg is None and variant_sym.ty is not None:
            self._errors.append(MissingVariantArg(init.span, enum_sym, init.variant))
        elif init.arg is not None:
            self.visit_expr(init.arg)


class _NameTypeVisitor(TypeVisitor):
    def __init__(self, scope: ScopeStack, errors: list[NamingError]) -> None:
        self._scope = scope
        self._errors = errors

    def visit_named(self, ty: TypeExpr) -> None:
        assert ty.sym is not None
        struct_sym = self._scope.get_struct(ty.sym.name)
        if struct_sym is not None:
            ty.sym = struct_sym.sym
            return
        enum_sym = self._scope.get_enum(ty.sym.name)
        if enum_sym is not None:
            ty.sym = enum_sym.sym
            return
        self._errors.append(UnknownType(ty.span, ty.sym))


class Namer:
    """Resolves every name of a program, rewriting symbols in place."""

    def __init__(self) -> None:
        self._ids = Ids()
        self._scope = ScopeStack()
        self._errors: list[NamingError] = []

    def name_program(self, program: Program) -> ScopeStack:
        """Name every module; raise NamingFailed if any error was found."""
        seen = set()
        for module in program.modules:
            if module.sym.name in seen:
                raise NamingFailed([DuplicateModule(module.span, module.sym)])
            seen.add(module.sym.name)
            module.sym = self._ids.freshen(module.sym)

        for module in program.modules:
            self._name_module(module)

        if self._errors:
            raise NamingFailed(self._errors)
        return self._scope

    def _name_module(self, module: Module) -> None:
        seen = set()
        for decl in module.decls:
            if decl.sym in seen:
                self._errors.append(DuplicateDecl(decl.span, decl.sym))
            seen.add(decl.sym)
            self._name_decl_sig(decl)

        for decl in module.decls:
            if isinstance(decl, FnDecl):
                self._name_fn(decl)

    def _name_fn(self, fn_decl: FnDecl) -> None:
        self._name_type(fn_decl.return_type)
        for param in fn_decl.params:
            self._name_type(param.ty)

        fn_sym = self._scope.get_fn(fn_decl.sym.name)
        assert fn_sym is not None
        expr_scope = Symbols()
        for name, (sym, _kind) in fn_sym.params.items():
            expr_scope.vars[name] = sym

        self._scope.push_scope(expr_scope)
        try:
            self._name_expr(fn_decl.body)
        finally:
            self._scope.pop_scope()

    def _name_decl_sig(self, decl: Decl) -> None:
        if isinstance(decl, FnDecl):
            self._name_fn_decl_sig(decl)
        elif isinstance(decl, StructDecl):
            self._name_struct_decl(decl)
        elif isinstance(decl, EnumDecl):
            self._name_enum_decl(decl)
        else:
            raise TypeError(f"not a declaration: {decl!r}")

    def _name_fn_decl_sig(self, fn_decl: FnDecl) -> None:
        fn_decl.sym = self._ids.freshen(fn_decl.sym)
        fn_sym = FnSym(fn_decl.sym, fn_decl.span)

        for param in fn_decl.params:
            param.sym = self._ids.freshen(param.sym)

            if param.kind.alias is not None:
                alias = self._ids.freshen(param.kind.alias)
                param.kind = ParamKind(alias=alias)
                if alias.name in fn_sym.aliases:
                    self._errors.append(DuplicateParam(param.span, alias))
                fn_sym.aliases[alias.name] = alias

            if param.sym.name in fn_sym.params:
                self._errors.append(DuplicateParam(param.span, param.sym))
            fn_sym.params[param.sym.name] = (param.sym, param.kind)

        self._scope.add_fn(fn_sym)

    def _name_struct_decl(self, struct_decl: StructDecl) -> None:
        struct_decl.sym = self._ids.freshen(struct_decl.sym)
        struct_sym = StructSym(struct_decl.sym, struct_decl.span)
        self._scope.add_struct(StructSym(struct_decl.sym, struct_decl.span))

        for field in struct_decl.fields:
            field.sym = self._ids.freshen(field.sym)
            if field.sym.name in struct_sym.fields:
                self._errors.append(DuplicateField(field.span, field.sym))
            struct_sym.fields[field.sym.name] = field.sym
            self._name_type(field.ty)

        self._scope.add_struct(struct_sym)

    def _name_enum_decl(self, enum_decl: EnumDecl) -> None:
        enum_decl.sym = self._ids.freshen(enum_decl.sym)
        enum_sym = EnumSym(enum_decl.sym, enum_decl.span)
        self._scope.add_enum(EnumSym(enum_decl.sym, enum_decl.span))

        for variant in enum_decl.variants:
            variant.sym = self._ids.freshen(variant.sym)
            variant_sym = VariantSym(variant.sym, variant.span, copy.deepcopy(variant.ty))
            if variant.sym.name in enum_sym.variants:
                self._errors.append(DuplicateVariant(variant.span, variant.sym))
            enum_sym.variants[variant.sym.name] = variant_sym
            if variant.ty is not None:
                self._name_type(variant.ty)

        self._scope.add_enum(enum_sym)

    def _name_expr(self, expr: Expr) -> None:
        _NameExprVisitor(self._ids, self._scope, self._errors).visit_expr(expr)

    def _name_type(self, ty: TypeExpr) -> None:
        _NameTypeVisitor(self._scope, self._errors).visit_type(ty)


def name_program(program: Program) -> Symbols:
    """Resolve the names of ``program`` and return its global symbols."""
    return Namer().name_program(program).into_global()