"""
Error taxonomy for schema resolution, header binding, and value coercion.

**Conceptual**: Every failure the mapper can produce is one of the classes
below. All of them are terminal for the operation that raised them: there is
no retry and no partial result. Each carries the context needed to diagnose
the problem without stepping through the mapper (field name, column name,
raw offending cell text, file path).

Hierarchy:
  MappingError
    NotARecordType
    DuplicateColumnMapping
    ColumnNotFound
    FieldError
      RowTooShort
      UnsupportedFieldKind
      CellParseError (also a ValueError)
        InvalidBool
        InvalidInt
        InvalidFloat
    SourceReadError
    SinkWriteError
"""

from __future__ import annotations

from typing import Any, Sequence


class MappingError(Exception):
    """Base class for every error raised by tagcsv."""
    pass


class NotARecordType(MappingError):
    """Raised when the target type is not a dataclass type."""

    def __init__(self, record_type: Any) -> None:
        super().__init__(
            f"{record_type!r} is not a record type. "
            f"Expected a class decorated with @dataclass."
        )
        self.record_type = record_type


class DuplicateColumnMapping(MappingError):
    """Raised when two or more fields are annotated with the same column name."""

    def __init__(self, column: str, fields: Sequence[str]) -> None:
        super().__init__(
            f"Column '{column}' is mapped by more than one field: {list(fields)}."
        )
        self.column = column
        self.fields = list(fields)


class ColumnNotFound(MappingError):
    """Raised when an annotated column is absent from the header row."""

    def __init__(self, column: str, header: Sequence[str] | None = None) -> None:
        message = f"Column '{column}' does not exist in the header row."
        if header is not None:
            message += f" Found columns: {list(header)}."
        super().__init__(message)
        self.column = column
        self.header = list(header) if header is not None else None


class FieldError(MappingError):
    """
    Base class for failures tied to one field of one row.

    `row_number` is the 1-based line in the source grid (header is row 1).
    It stays None when the failing row was decoded on its own.
    """

    def __init__(self, message: str, field: str) -> None:
        super().__init__(message)
        self.field = field
        self.row_number: int | None = None

    def __str__(self) -> str:
        message = super().__str__()
        if self.row_number is not None:
            return f"row {self.row_number}: {message}"
        return message


class RowTooShort(FieldError):
    """Raised when a bound column index lies beyond the end of a data row."""

    def __init__(self, field: str, column_index: int, row_length: int) -> None:
        super().__init__(
            f"Field '{field}' is bound to column index {column_index}, "
            f"but the row only has {row_length} cells.",
            field,
        )
        self.column_index = column_index
        self.row_length = row_length


class UnsupportedFieldKind(FieldError):
    """Raised when a participating field has no supported scalar kind."""

    def __init__(self, field: str, kind: Any) -> None:
        super().__init__(
            f"Field '{field}' has unsupported type {kind!r}. "
            f"Supported kinds: bool, signed integers, floats, str.",
            field,
        )
        self.kind = kind


class CellParseError(FieldError, ValueError):
    """Raised when a cell's text cannot be parsed as the field's kind."""

    kind_label = "value"

    def __init__(self, field: str, raw_value: str, reason: str | None = None) -> None:
        message = f"Field '{field}' has invalid {self.kind_label} value {raw_value!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message, field)
        self.raw_value = raw_value
        self.reason = reason


class InvalidBool(CellParseError):
    kind_label = "bool"


class InvalidInt(CellParseError):
    kind_label = "int"


class InvalidFloat(CellParseError):
    kind_label = "float"


class SourceReadError(MappingError):
    """Raised when the CSV source cannot be opened or parsed into rows."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class SinkWriteError(MappingError):
    """Raised when rows cannot be framed or persisted to the CSV sink."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path
