import pytest

from selfie.names import Name, Sym
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
from selfie.symbols import EnumSym, FnSym, StructSym, VariantSym
from selfie.syntax import Span

SPAN = Span(3, 9)


def sym(text, id_=0):
    return Sym(Name(text), id_)


def fn_sym():
    return FnSym(sym("f", 1), SPAN)


def color_enum():
    enum_sym = EnumSym(sym("Color", 2), SPAN)
    for variant in ("Red", "Green"):
        enum_sym.variants[Name(variant)] = VariantSym(sym(variant, 3), SPAN)
    return enum_sym


def point_struct():
    struct_sym = StructSym(sym("Point", 4), SPAN)
    struct_sym.fields[Name("x")] = sym("x", 5)
    struct_sym.fields[Name("y")] = sym("y", 6)
    return struct_sym


def test_duplicate_module_message_uses_plain_name():
    assert str(DuplicateModule(SPAN, sym("main", 7))) == "duplicate module `main`"


def test_unexpected_arg_message():
    error = UnexpectedArg(SPAN, fn_sym(), sym("y"), sym("x", 2))
    assert str(error) == "unexpected argument `y`, expected `x`"


def test_wrong_arg_count_message():
    error = WrongArgCount(SPAN, fn_sym(), sym("f", 1), 2, 1)
    assert str(error) == "wrong number of arguments for `f`: expected 2, found 1"


def test_extraneous_arg_label_message_and_help():
    error = ExtraneousArgLabel(SPAN, fn_sym(), sym("a"), sym("b", 3))
    assert str(error) == "extraneous argument label `a:` for anonymous parameter `b`"
    assert error.help() == "consider removing the argument label `a:`"
    assert error.note() is None


def test_missing_arg_label_help():
    error = MissingArgLabel(SPAN, fn_sym(), sym("x", 2))
    assert str(error) == "missing argument label `x:`"
    assert error.help() == "consider adding an argument label `x:`"


def test_unknown_variant_note_lists_variants():
    error = UnknownVariant(SPAN, color_enum(), sym("Blue"))
    assert str(error) == "unknown variant `Blue`"
    assert error.note() == "available variants: Red, Green"


def test_missing_field_message():
    error = MissingField(SPAN, point_struct(), Name("x"))
    assert str(error) == "missing field `x`"


def test_unknown_field_note_lists_fields():
    error = UnknownField(SPAN, point_struct(), sym("z"))
    assert str(error) == "unknown field `z`"
    assert error.note() == "available fields: x, y"


def test_wrong_arg_label_note_and_help():
    error = WrongArgLabel(SPAN, fn_sym(), sym("x"), sym("with", 3))
    assert str(error) == "wrong argument label for `x`, expected `with`"
    assert error.note() == "parameter `x` exists but is aliased as `with`"
    assert error.help() == "consider changing `x:` to `with:`"


def test_missing_variant_arg_message():
    error = MissingVariantArg(SPAN, color_enum(), sym("Red", 3))
    assert str(error) == "missing argument for variant `Red`"


def test_unexpected_variant_arg_message():
    error = UnexpectedVariantArg(SPAN, color_enum(), sym("Red", 3))
    assert str(error) == "enum variant `Color.Red` does not take any argument"


@pytest.mark.parametrize(
    "error",
    [
        DuplicateParam(SPAN, sym("p")),
        DuplicateDecl(SPAN, sym("d")),
        UnboundVar(SPAN, sym("v")),
        UnboundFn(SPAN, sym("g")),
        UnknownType(SPAN, sym("T")),
        DuplicateField(SPAN, sym("x")),
        DuplicateVariant(SPAN, sym("A")),
    ],
)
def test_simple_errors_have_no_note_or_help(error):
    assert error.note() is None
    assert error.help() is None
    assert error.span == SPAN


def test_errors_raise_as_naming_error():
    with pytest.raises(NamingError) as info:
        raise UnboundVar(SPAN, sym("q"))
    assert info.value.span == SPAN
    assert str(info.value) == "unbound variable `q`"


def test_naming_failed_keeps_errors_in_order():
    errors = [UnboundVar(SPAN, sym("a")), UnboundFn(SPAN, sym("b"))]
    failed = NamingFailed(errors)
    assert failed.errors == errors
    assert str(errors[0]) in str(failed)
    assert str(errors[1]) in str(failed)