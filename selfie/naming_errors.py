"""Errors reported while resolving names."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import ClassVar, Iterable, Optional

from selfie.names import Name, Sym
from selfie.symbols import EnumSym, FnSym, StructSym
from selfie.syntax import Span


class NamingError(Exception):
    """A problem found while resolving names, located by its span."""

    span: Span
    _template: ClassVar[str] = "naming error"

    def __str__(self) -> str:
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        return self._template.format(**values)

    def note(self) -> Optional[str]:
        """Extra context for the error, if any."""
        return None

    def help(self) -> Optional[str]:
        """A suggested fix, if any."""
        return None


@dataclass(eq=False)
class DuplicateModule(NamingError):
    span: Span
    sym: Sym
    _template: ClassVar[str] = "duplicate module `{sym}`"


@dataclass(eq=False)
class DuplicateParam(NamingError):
    span: Span
    sym: Sym
    _template: ClassVar[str] = "duplicate param `{sym}`"


@dataclass(eq=False)
class DuplicateDecl(NamingError):
    span: Span
    sym: Sym
    _template: ClassVar[str] = "duplicate declaration `{sym}`"


@dataclass(eq=False)
class UnboundVar(NamingError):
    span: Span
    sym: Sym
    _template: ClassVar[str] = "unbound variable `{sym}`"


@dataclass(eq=False)
class UnboundFn(NamingError):
    span: Span
    sym: Sym
    _template: ClassVar[str] = "call to unbound function `{sym}`"


@dataclass(eq=False)
class UnknownType(NamingError):
    span: Span
    sym: Sym
    _template: ClassVar[str] = "unknown type `{sym}`"


@dataclass(eq=False)
class DuplicateField(NamingError):
    span: Span
    sym: Sym
    _template: ClassVar[str] = "duplicate field `{sym}`"


@dataclass(eq=False)
class DuplicateVariant(NamingError):
    span: Span
    sym: Sym
    _template: ClassVar[str] = "duplicate variant `{sym}`"


@dataclass(eq=False)
class UnexpectedArg(NamingError):
    span: Span
    fn_sym: FnSym
    arg: Sym
    expected: Sym
    _template: ClassVar[str] = "unexpected argument `{arg}`, expected `{expected}`"


@dataclass(eq=False)
class WrongArgCount(NamingError):
    span: Span
    fn_sym: FnSym
    sym: Sym
    arg_count: int
    param_count: int
    _template: ClassVar[str] = (
        "wrong number of arguments for `{sym}`: expected {arg_count}, found {param_count}"
    )


@dataclass(eq=False)
class ExtraneousArgLabel(NamingError):
    span: Span
    fn_sym: FnSym
    arg: Sym
    param: Sym
    _template: ClassVar[str] = (
        "extraneous argument label `{arg}:` for anonymous parameter `{param}`"
    )

    def help(self) -> Optional[str]:
        return f"consider removing the argument label `{self.arg}:`"


@dataclass(eq=False)
class MissingArgLabel(NamingError):
    span: Span
    fn_sym: FnSym
    param: Sym
    _template: ClassVar[str] = "missing argument label `{param}:`"

    def help(self) -> Optional[str]:
        return f"consider adding an argument label `{self.param}:`"


@dataclass(eq=False)
class UnknownVariant(NamingError):
    span: Span
    enum_sym: EnumSym
    variant: Sym
    _template: ClassVar[str] = "unknown variant `{variant}`"

    def note(self) -> Optional[str]:
        available = ", ".join(str(name) for name in self.enum_sym.variants)
        return f"available variants: {available}"


@dataclass(eq=False)
class MissingField(NamingError):
    span: Span
    struct_sym: StructSym
    field: Name
    _template: ClassVar[str] = "missing field `{field}`"


@dataclass(eq=False)
class UnknownField(NamingError):
    span: Span
    struct_sym: StructSym
    field: Sym
    _template: ClassVar[str] = "unknown field `{field}`"

    def note(self) -> Optional[str]:
        available = ", ".join(str(name) for name in self.struct_sym.fields)
        return f"available fields: {available}"


@dataclass(eq=False)
class WrongArgLabel(NamingError):
    span: Span
    fn_sym: FnSym
    arg: Sym
    expected: Sym
    _template: ClassVar[str] = "wrong argument label for `{arg}`, expected `{expected}`"

    def note(self) -> Optional[str]:
        return f"parameter `{self.arg}` exists but is aliased as `{self.expected}`"

    def help(self) -> Optional[str]:
        return f"consider changing `{self.arg}:` to `{self.expected}:`"


@dataclass(eq=False)
class MissingVariantArg(NamingError):
    span: Span
    enum_sym: EnumSym
    variant: Sym
    _template: ClassVar[str] = "missing argument for variant `{variant}`"


@dataclass(eq=False)
class UnexpectedVariantArg(NamingError):
    span: Span
    enum_sym: EnumSym
    variant: Sym
    _template: ClassVar[str] = (
        "enum variant `{enum_sym.sym}.{variant}` does not take any argument"
    )


class NamingFailed(Exception):
    """Raised when naming a program found one or more errors."""

    def __init__(self, errors: Iterable[NamingError]) -> None:
        self.errors: list[NamingError] = list(errors)
        super().__init__("\n".join(str(error) for error in self.errors))