import pytest

from selfie.strings import LiteralSyntaxError, parse_char, parse_string


def test_plain_string():
    text = '"abc"'
    assert parse_string(text) == ("abc", len(text))


def test_empty_string():
    assert parse_string('""') == ("", 2)


@pytest.mark.parametrize(
    "code, value",
    [
        ("n", "\n"),
        ("r", "\r"),
        ("t", "\t"),
        ("b", "\x08"),
        ("f", "\x0c"),
        ("\\", "\\"),
        ("/", "/"),
        ('"', '"'),
        ("'", "'"),
    ],
)
def test_simple_escapes(code, value):
    text = '"a\\' + code + 'b"'
    assert parse_string(text) == ("a" + value + "b", len(text))
    char_text = "'\\" + code + "'"
    assert parse_char(char_text) == (value, len(char_text))


def test_unicode_escape():
    assert parse_string(r'"\u{41}"')[0] == "A"
    assert parse_string(r'"x\u{1F600}y"')[0] == "x\U0001F600y"


def test_escaped_whitespace_is_dropped():
    text = '"a\\   \n\t  b"'
    assert parse_string(text) == ("ab", len(text))


def test_start_offset():
    text = 'x = "hi";'
    value, end = parse_string(text, text.index('"'))
    assert value == "hi"
    assert text[end:] == ";"


@pytest.mark.parametrize("s", ["hello world", "tab\there", "ünïcödé", "a'b"])
def test_round_trip_without_specials(s):
    assert parse_string('"' + s + '"') == (s, len(s) + 2)


@pytest.mark.parametrize(
    "text",
    [
        '"abc',
        r'"\q"',
        r'"\u{D800}"',
        r'"\u{110000}"',
        r'"\u{1234567}"',
        r'"\u{}"',
        "abc",
        "",
    ],
)
def test_bad_strings(text):
    with pytest.raises(LiteralSyntaxError):
        parse_string(text)


def test_error_reports_position():
    with pytest.raises(LiteralSyntaxError) as info:
        parse_string(r'"ab\q"')
    assert info.value.position == 3


def test_plain_char():
    assert parse_char("'a'") == ("a", 3)


def test_char_unicode_escape():
    text = r"'\u{263A}'"
    assert parse_char(text) == ("\u263a", len(text))


def test_char_start_offset():
    text = "c = 'z'"
    value, end = parse_char(text, text.index("'"))
    assert value == "z"
    assert end == len(text)


@pytest.mark.parametrize("text", ["''", "'ab'", r"'\'", r"'\x'", "'a", "a'", "'\\u{D800}'"])
def test_bad_chars(text):
    with pytest.raises(LiteralSyntaxError):
        parse_char(text)