import pytest

from airtable_outline_sync.field_value import FieldKind, FieldValue


@pytest.mark.parametrize(
    "raw, kind",
    [
        ("hello", FieldKind.STRING),
        ("", FieldKind.STRING),
        (3, FieldKind.NUMBER),
        (2.5, FieldKind.NUMBER),
        (True, FieldKind.BOOL),
        (False, FieldKind.BOOL),
        (["a", "b"], FieldKind.STRING_ARRAY),
        ([], FieldKind.STRING_ARRAY),
        (None, FieldKind.NULL),
        ({"url": "https://x"}, FieldKind.NULL),
        ([1, 2], FieldKind.NULL),
        (["a", 1], FieldKind.NULL),
        ([{"id": "att1"}], FieldKind.NULL),
        (10**400, FieldKind.NULL),
        (float("inf"), FieldKind.NULL),
        (float("nan"), FieldKind.NULL),
    ],
)
def test_decode_picks_single_variant(raw, kind) -> None:
    assert FieldValue.decode(raw).kind is kind


def test_numeric_looking_string_stays_string() -> None:
    value = FieldValue.decode("42")
    assert value == FieldValue.string("42")
    assert value.encode() == "42"


def test_boolean_looking_string_stays_string() -> None:
    assert FieldValue.decode("true") == FieldValue.string("true")


def test_bool_is_not_decoded_as_number() -> None:
    assert FieldValue.decode(True) == FieldValue.boolean(True)


def test_encode_restores_json_values() -> None:
    assert FieldValue.decode(7).encode() == 7.0
    assert FieldValue.decode(False).encode() is False
    assert FieldValue.decode(["x", "y"]).encode() == ["x", "y"]
    assert FieldValue.null().encode() is None


def test_display_escapes_pipes_in_strings() -> None:
    assert FieldValue.string("a|b").format_for_display() == "a\\|b"


@pytest.mark.parametrize(
    "value, expected",
    [
        (FieldValue.number(42), "42.0"),
        (FieldValue.number(1.5), "1.5"),
        (FieldValue.boolean(True), "✓"),
        (FieldValue.boolean(False), "✗"),
        (FieldValue.string_array(["red", "green"]), "red, green"),
        (FieldValue.string_array([]), ""),
        (FieldValue.null(), ""),
    ],
)
def test_display_formatting(value, expected) -> None:
    assert value.format_for_display() == expected


def test_display_keeps_multiline_text_in_one_cell() -> None:
    assert FieldValue.string("line one\nline two\r\nthree").format_for_display() == "line one<br>line two<br>three"


def test_display_escapes_each_array_element() -> None:
    value = FieldValue.string_array(["a|b", "two\nlines"])

    assert value.format_for_display() == "a\\|b, two<br>lines"
