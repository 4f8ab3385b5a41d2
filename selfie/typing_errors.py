"""Errors reported while checking types."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import ClassVar, Iterable, Optional

from selfie.names import Sym
from selfie.syntax import Span
from selfie.types import Type


class TypingError(Exception):
    """A type error, located by its span."""

    span: Span
    _template: ClassVar[str] = "type error"
    _header: ClassVar[str] = "type error"
    _note: ClassVar[Optional[str]] = None
    _help: ClassVar[Optional[str]] = None

    def _render(self, template: str) -> str:
        values = {f.name: str(getattr(self, f.name)) for f in fields(self)}
        return template.format(**values)

    def _render_optional(self, template: Optional[str]) -> Optional[str]:
        return None if template is None else self._render(template)

    def __str__(self) -> str:
        return self._render(self._template)

    def header(self) -> str:
        """A short title for the error."""
        return self._render(self._header)

    def note(self) -> Optional[str]:
        """An extra remark on the error, if the error kind has one."""
        return self._render_optional(self._note)

    def help(self) -> Optional[str]:
        """A suggested fix, if the error kind has one."""
        return self._render_optional(self._help)


@dataclass(eq=False)
class TypeMismatch(TypingError):
    span: Span
    expected: Type
    actual: Type
    _template: ClassVar[str] = "expected {expected}, found {actual}"
    _header: ClassVar[str] = "type mismatch"


@dataclass(eq=False)
class ExpectedNumericType(TypingError):
    span: Span
    actual: Type
    _template: ClassVar[str] = "found non-numeric type {actual}"
    _header: ClassVar[str] = "expected numeric type"


@dataclass(eq=False)
class FieldNotFound(TypingError):
    span: Span
    ty: Type
    field: Sym
    _template: ClassVar[str] = "unknown field `{field}`"
    _header: ClassVar[str] = "no field `{field}` on type `{ty}`"


@dataclass(eq=False)
class AmbiguousEnumVariant(TypingError):
    span: Span
    variant: Sym
    _template: ClassVar[str] = "cannot infer the type of the enum from the context"
    _header: ClassVar[str] = "ambiguous enum variant `{variant}`"


@dataclass(eq=False)
class VariantNotFound(TypingError):
    span: Span
    sym: Sym
    variant: Sym
    _template: ClassVar[str] = "unknown variant `{variant}`"
    _header: ClassVar[str] = "no variant `{variant}` on type `{sym}`"


@dataclass(eq=False)
class ExpectedTupleType(TypingError):
    span: Span
    actual: Type
    _template: ClassVar[str] = "expected tuple type, found: {actual}"
    _header: ClassVar[str] = "cannot select numeric index on non-tuple"


@dataclass(eq=False)
class TupleIndexOutOfBounds(TypingError):
    span: Span
    index: int
    ty: Type
    _template: ClassVar[str] = "index {index} out of bounds for tuple `{ty}`"
    _header: ClassVar[str] = "tuple index out of bounds"


@dataclass(eq=False)
class MismatchedMatchArms(TypingError):
    span: Span
    first_span: Span
    expected: Type
    actual: Type
    _template: ClassVar[str] = "expected {expected}, found {actual}"
    _header: ClassVar[str] = "mismatched match arms"


class TypingFailed(Exception):
    """Raised when typing a program found one or more errors."""

    def __init__(self, errors: Iterable[TypingError]) -> None:
        self.errors: list[TypingError] = list(errors)
        super().__init__("\n".join(str(error) for error in self.errors))