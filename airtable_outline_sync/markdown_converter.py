"""
AirTable records to Markdown converter.

Renders one table's records as a single Markdown document:
- Heading with the table label
- "Last updated" timestamp
- A table with one column per field name (sorted) and one row per record
- A trailing record count
"""

from datetime import datetime, timezone
from typing import Optional

from airtable_outline_sync.airtable_api import AirtableRecord
from airtable_outline_sync.field_value import escape_cell_text

NO_RECORDS_MESSAGE = "No records found."


class MarkdownConverter:
    """
    Converts AirTable records to Markdown.

    Formatting is per cell: two records that disagree on a field's type
    each render their own value as-is.
    """

    def convert(
        self,
        records: list[AirtableRecord],
        table_label: str,
        now: Optional[datetime] = None,
    ) -> str:
        """
        Convert a list of records to a Markdown document.

        Args:
            records: Records in the order they should appear.
            table_label: Used for the document heading.
            now: Timestamp for the "last updated" line. Defaults to now (UTC).

        Returns:
            The Markdown document.
        """
        if now is None:
            now = datetime.now(timezone.utc)

        lines = [
            f"# {table_label}",
            "",
            f"> Last updated: {now.strftime('%Y-%m-%d %H:%M UTC')}",
            "",
        ]

        if not records:
            lines.append(NO_RECORDS_MESSAGE)
            return "\n".join(lines) + "\n"

        columns = self.collect_columns(records)

        lines.append(self._row(escape_cell_text(name) for name in columns))
        lines.append(self._row("---" for _ in columns))

        for record in records:
            lines.append(self._row(self._cell(record, name) for name in columns))

        lines.append("")
        lines.append(f"**Total records:** {len(records)}")

        return "\n".join(lines) + "\n"

    @staticmethod
    def collect_columns(records: list[AirtableRecord]) -> list[str]:
        """Union of all field names, sorted so column order never depends on record order."""
        names: set[str] = set()
        for record in records:
            names.update(record.fields)
        return sorted(names)

    def _cell(self, record: AirtableRecord, column: str) -> str:
        value = record.fields.get(column)
        if value is None or value.is_null:
            return ""
        return value.format_for_display()

    def _row(self, cells) -> str:
        return f"| {' | '.join(cells)} |"
