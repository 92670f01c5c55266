from datetime import datetime, timezone

from airtable_outline_sync.airtable_api import AirtableRecord
from airtable_outline_sync.field_value import FieldValue
from airtable_outline_sync.markdown_converter import MarkdownConverter

NOW = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


def _record(record_id: str, **fields) -> AirtableRecord:
    return AirtableRecord(
        id=record_id,
        fields={name: FieldValue.decode(value) for name, value in fields.items()},
    )


def _table_lines(markdown: str) -> list[str]:
    return [line for line in markdown.splitlines() if line.startswith("|")]


def test_empty_table_renders_message_and_no_table() -> None:
    markdown = MarkdownConverter().convert([], "Foo", now=NOW)

    assert markdown.startswith("# Foo\n")
    assert "no records found" in markdown.lower()
    assert _table_lines(markdown) == []


def test_header_and_timestamp() -> None:
    markdown = MarkdownConverter().convert([_record("1", a="x")], "Foo", now=NOW)

    assert "# Foo" in markdown
    assert "Last updated: 2024-05-01 12:30 UTC" in markdown


def test_columns_are_sorted_union_regardless_of_record_order() -> None:
    first = _record("1", b="b1", a="a1")
    second = _record("2", c="c2", a="a2")
    converter = MarkdownConverter()

    for records in ([first, second], [second, first]):
        header = _table_lines(converter.convert(records, "T", now=NOW))[0]
        assert header == "| a | b | c |"


def test_rows_follow_input_order_with_empty_cells_for_missing_fields() -> None:
    markdown = MarkdownConverter().convert(
        [_record("1", b="b1", a="a1"), _record("2", c="c2", a="a2")], "T", now=NOW
    )

    assert _table_lines(markdown) == [
        "| a | b | c |",
        "| --- | --- | --- |",
        "| a1 | b1 |  |",
        "| a2 |  | c2 |",
    ]


def test_pipes_are_escaped_in_cells() -> None:
    markdown = MarkdownConverter().convert([_record("1", Note="left|right")], "T", now=NOW)

    assert "| left\\|right |" in _table_lines(markdown)


def test_mixed_types_in_one_column_render_per_cell() -> None:
    markdown = MarkdownConverter().convert(
        [_record("1", Value=3), _record("2", Value="three"), _record("3", Value=True)], "T", now=NOW
    )

    assert _table_lines(markdown)[2:] == ["| 3.0 |", "| three |", "| ✓ |"]


def test_two_record_table_with_total() -> None:
    markdown = MarkdownConverter().convert([_record("1", Name="A"), _record("2", Name="B")], "Team", now=NOW)

    assert _table_lines(markdown) == ["| Name |", "| --- |", "| A |", "| B |"]
    assert markdown.rstrip().endswith("**Total records:** 2")


def test_output_is_deterministic_for_fixed_time() -> None:
    records = [_record("1", Name="A", Tags=["x", "y"])]
    converter = MarkdownConverter()

    assert converter.convert(records, "T", now=NOW) == converter.convert(records, "T", now=NOW)


def test_multiline_text_stays_on_one_row() -> None:
    markdown = MarkdownConverter().convert([_record("1", Notes="first\nsecond")], "T", now=NOW)

    assert _table_lines(markdown) == ["| Notes |", "| --- |", "| first<br>second |"]
