"""A stack of nested scopes used while resolving names."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from selfie.names import Name, Sym
from selfie.symbols import EnumSym, FnSym, StructSym, Symbols


class ScopeStack:
    """Nested symbol tables; lookups search from the innermost scope outwards.

    The bottom scope is the global one and can never be popped.
    """

    def __init__(self) -> None:
        self._scopes: list[Symbols] = [Symbols()]

    def __len__(self) -> int:
        return len(self._scopes)

    def push_new_scope(self) -> Symbols:
        """Open an empty scope and return it."""
        return self.push_scope(Symbols())

    def push_scope(self, scope: Symbols) -> Symbols:
        """Open ``scope`` as the innermost scope and return it."""
        self._scopes.append(scope)
        return scope

    def pop_scope(self) -> Symbols:
        """Close the innermost scope and return it."""
        if len(self._scopes) == 1:
            raise IndexError("cannot pop root scope")
        return self._scopes.pop()

    @contextmanager
    def in_scope(self) -> Iterator[Symbols]:
        """Open a fresh scope for the duration of a ``with`` block."""
        scope = self.push_new_scope()
        try:
            yield scope
        finally:
            self.pop_scope()

    def current_scope(self) -> Symbols:
        return self._scopes[-1]

    def add_var(self, sym: Sym) -> None:
        self.current_scope().add_var(sym)

    def get_var(self, name: Name) -> Optional[Sym]:
        return next(
            (sym for scope in reversed(self._scopes) if (sym := scope.get_var(name)) is not None),
            None,
        )

    def add_fn(self, fn_sym: FnSym) -> None:
        self.current_scope().add_fn(fn_sym)

    def get_fn(self, name: Name) -> Optional[FnSym]:
        return next(
            (sym for scope in reversed(self._scopes) if (sym := scope.get_fn(name)) is not None),
            None,
        )

    def add_struct(self, struct_sym: StructSym) -> None:
        self.current_scope().add_struct(struct_sym)

    def get_struct(self, name: Name) -> Optional[StructSym]:
        return next(
            (
                sym
                for scope in reversed(self._scopes)
                if (sym := scope.get_struct(name)) is not None
            ),
            None,
        )

    def add_enum(self, enum_sym: EnumSym) -> None:
        self.current_scope().add_enum(enum_sym)

    def get_enum(self, name: Name) -> Optional[EnumSym]:
        return next(
            (sym for scope in reversed(self._scopes) if (sym := scope.get_enum(name)) is not None),
            None,
        )

    def into_global(self) -> Symbols:
        """The global scope, holding every top-level declaration."""
        return self._scopes[0]