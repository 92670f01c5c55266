"""
Typed model for AirTable cell values.

AirTable returns heterogeneous JSON per cell. Every cell is decoded into
exactly one FieldValue variant, trying the variants in a fixed order:

    string -> number -> boolean -> string array -> null

The order matters: a cell holding the text "42" or "true" stays a String.

Known limitation: shapes outside those variants (attachments, linked
records, collaborators, numeric arrays, nested objects) decode to Null
and render as empty cells. So do numbers outside the float64 range.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

BOOL_TRUE_GLYPH = "✓"
BOOL_FALSE_GLYPH = "✗"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def escape_cell_text(text: str) -> str:
    """Make text safe to place inside one Markdown table cell."""
    return _LINE_BREAK.sub("<br>", text.replace("|", "\\|"))


class FieldKind(Enum):
    """Variants a cell value can take."""
    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    STRING_ARRAY = "string_array"
    NULL = "null"


@dataclass(frozen=True)
class FieldValue:
    """A single decoded cell value."""

    kind: FieldKind
    value: Union[str, float, bool, tuple[str, ...], None] = None

    @classmethod
    def string(cls, text: str) -> "FieldValue":
        return cls(FieldKind.STRING, text)

    @classmethod
    def number(cls, number: float) -> "FieldValue":
        return cls(FieldKind.NUMBER, float(number))

    @classmethod
    def boolean(cls, flag: bool) -> "FieldValue":
        return cls(FieldKind.BOOL, flag)

    @classmethod
    def string_array(cls, items) -> "FieldValue":
        return cls(FieldKind.STRING_ARRAY, tuple(items))

    @classmethod
    def null(cls) -> "FieldValue":
        return cls(FieldKind.NULL, None)

    @classmethod
    def decode(cls, raw: Any) -> "FieldValue":
        """
        Decode an untyped JSON value. Never raises.

        Args:
            raw: Value as produced by json.loads.

        Returns:
            The first variant that accepts the value, or Null.
        """
        if isinstance(raw, str):
            return cls.string(raw)

        # bool is a subclass of int, so it must not reach the number branch
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            # Integers beyond float range and inf/NaN are not float64 numbers
            try:
                number = float(raw)
            except OverflowError:
                return cls.null()
            if not math.isfinite(number):
                return cls.null()
            return cls.number(number)

        if isinstance(raw, bool):
            return cls.boolean(raw)

        if isinstance(raw, list) and all(isinstance(item, str) for item in raw):
            return cls.string_array(raw)

        return cls.null()

    def encode(self) -> Any:
        """Convert back to a JSON-compatible value."""
        if self.kind is FieldKind.STRING_ARRAY:
            return list(self.value)
        return self.value

    def format_for_display(self) -> str:
        """
        Render the value as Markdown table cell text.

        Pipes are escaped and line breaks become <br> so text
        stays inside a single table cell.
        """
        if self.kind is FieldKind.STRING:
            return escape_cell_text(self.value)
        if self.kind is FieldKind.NUMBER:
            return str(self.value)
        if self.kind is FieldKind.BOOL:
            return BOOL_TRUE_GLYPH if self.value else BOOL_FALSE_GLYPH
        if self.kind is FieldKind.STRING_ARRAY:
            return ", ".join(escape_cell_text(item) for item in self.value)
        return ""

    @property
    def is_null(self) -> bool:
        return self.kind is FieldKind.NULL
