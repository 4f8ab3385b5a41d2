import pytest

from selfie.names import Sym
from selfie.syntax import Span, TypeExpr, TypeKind
from selfie.types import (
    EnumType,
    FnType,
    NamedType,
    Primitive,
    StructType,
    TupleType,
    from_syntax,
)

SPAN = Span(0, 1)


def written(kind, **kwargs):
    return TypeExpr(SPAN, kind, **kwargs)


@pytest.mark.parametrize(
    "kind, expected",
    [
        (TypeKind.INT64, Primitive.INT64),
        (TypeKind.FLOAT64, Primitive.FLOAT64),
        (TypeKind.BOOL, Primitive.BOOL),
        (TypeKind.CHAR, Primitive.CHAR),
        (TypeKind.UNIT, Primitive.UNIT),
        (TypeKind.STRING, Primitive.STRING),
    ],
)
def test_primitive_from_syntax(kind, expected):
    assert from_syntax(written(kind)) is expected
    assert str(expected) == kind.value


def test_unknown_display_inside_composite():
    ty = TupleType((Primitive.UNKNOWN, Primitive.INT64))
    assert str(ty) == "({unknown}, Int64)"
    assert str(FnType((), Primitive.UNKNOWN)) == "() -> {unknown}"


def test_tuple_from_syntax_and_display():
    ty = from_syntax(
        written(TypeKind.TUPLE, items=[written(TypeKind.INT64), written(TypeKind.BOOL)])
    )
    assert ty == TupleType((Primitive.INT64, Primitive.BOOL))
    assert str(ty) == "(Int64, Bool)"


def test_empty_tuple_display():
    assert str(TupleType()) == "()"


def test_named_keeps_symbol():
    sym = Sym.named("Point")
    ty = from_syntax(written(TypeKind.NAMED, sym=sym))
    assert ty == NamedType(sym)
    assert str(ty) == str(sym)


def test_fn_from_syntax_and_display():
    ty = from_syntax(
        written(
            TypeKind.FN,
            items=[written(TypeKind.INT64), written(TypeKind.FLOAT64)],
            ret=written(TypeKind.BOOL),
        )
    )
    assert ty == FnType((Primitive.INT64, Primitive.FLOAT64), Primitive.BOOL)
    assert str(ty) == "(Int64, Float64) -> Bool"


def test_nested_conversion():
    inner = written(TypeKind.FN, items=[], ret=written(TypeKind.UNIT))
    ty = from_syntax(written(TypeKind.TUPLE, items=[inner, written(TypeKind.CHAR)]))
    assert ty == TupleType((FnType((), Primitive.UNIT), Primitive.CHAR))


def test_list_items_are_normalised_and_hashable():
    a = TupleType([Primitive.INT64])
    b = TupleType((Primitive.INT64,))
    assert a == b
    assert hash(a) == hash(b)
    assert FnType([Primitive.BOOL], Primitive.UNIT) == FnType((Primitive.BOOL,), Primitive.UNIT)


def test_distinct_kinds_differ():
    assert TupleType((Primitive.INT64,)) != FnType((Primitive.INT64,), Primitive.INT64)
    assert NamedType(Sym.named("A")) != NamedType(Sym.named("B"))


def test_struct_and_enum_types_keep_order():
    x, y = Sym.named("x"), Sym.named("y")
    struct = StructType({y: Primitive.INT64, x: Primitive.BOOL})
    assert list(struct.fields) == [y, x]
    enum_ty = EnumType({x: None, y: Primitive.CHAR})
    assert list(enum_ty.variants.values()) == [None, Primitive.CHAR]