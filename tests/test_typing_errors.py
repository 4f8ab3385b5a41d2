import pytest

from selfie.names import Sym
from selfie.syntax import Span
from selfie.types import NamedType, Primitive, TupleType
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

SPAN = Span(3, 7)
POINT = Sym.named("Point")
COLOR = Sym.named("Color")


def test_type_mismatch():
    err = TypeMismatch(SPAN, Primitive.INT64, Primitive.BOOL)
    assert str(err) == "expected Int64, found Bool"
    assert err.header() == "type mismatch"
    assert err.span == SPAN


def test_expected_numeric():
    err = ExpectedNumericType(SPAN, Primitive.STRING)
    assert str(err) == "found non-numeric type String"
    assert err.header() == "expected numeric type"


def test_field_not_found():
    err = FieldNotFound(SPAN, NamedType(POINT), Sym.named("z"))
    assert str(err) == "unknown field `z`"
    assert err.header() == "no field `z` on type `Point`"


def test_ambiguous_variant():
    err = AmbiguousEnumVariant(SPAN, Sym.named("Red"))
    assert str(err) == "cannot infer the type of the enum from the context"
    assert err.header() == "ambiguous enum variant `Red`"


def test_variant_not_found():
    err = VariantNotFound(SPAN, COLOR, Sym.named("Pink"))
    assert str(err) == "unknown variant `Pink`"
    assert err.header() == "no variant `Pink` on type `Color`"


def test_expected_tuple():
    err = ExpectedTupleType(SPAN, Primitive.INT64)
    assert str(err) == "expected tuple type, found: Int64"
    assert err.header() == "cannot select numeric index on non-tuple"


def test_tuple_index_out_of_bounds():
    err = TupleIndexOutOfBounds(SPAN, 2, TupleType((Primitive.INT64, Primitive.BOOL)))
    assert str(err) == "index 2 out of bounds for tuple `(Int64, Bool)`"
    assert err.header() == "tuple index out of bounds"


def test_mismatched_match_arms():
    first = Span(0, 2)
    err = MismatchedMatchArms(SPAN, first, Primitive.UNIT, Primitive.CHAR)
    assert str(err) == "expected Unit, found Char"
    assert err.header() == "mismatched match arms"
    assert err.first_span == first


@pytest.mark.parametrize(
    "err",
    [
        TypeMismatch(SPAN, Primitive.INT64, Primitive.BOOL),
        ExpectedNumericType(SPAN, Primitive.BOOL),
        AmbiguousEnumVariant(SPAN, Sym.named("A")),
    ],
)
def test_no_note_or_help(err):
    assert err.note() is None
    assert err.help() is None
    assert isinstance(err, TypingError)


def test_errors_can_be_raised():
    with pytest.raises(TypingError, match="found non-numeric type Bool") as excinfo:
        raise ExpectedNumericType(SPAN, Primitive.BOOL)
    assert excinfo.value.span == SPAN
    assert excinfo.value.header() == "expected numeric type"


def test_typing_failed_collects_errors():
    errors = [
        TypeMismatch(SPAN, Primitive.INT64, Primitive.BOOL),
        ExpectedNumericType(SPAN, Primitive.BOOL),
    ]
    failure = TypingFailed(iter(errors))
    assert failure.errors == errors
    assert str(failure).splitlines() == [str(e) for e in errors]