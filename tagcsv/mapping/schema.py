"""
Tag resolution: record type -> field-to-column schema.

**Conceptual**: The schema is the part of a record type that matters for
CSV: which fields participate and which column each one maps to. It depends
only on the type, never on a file, so the same schema drives both reading
(where it is bound against a file's header) and writing (where it *is* the
header).

A schema is a plain dict `{field_name: column_name}`. Insertion order is field
declaration order, so iterating over it gives the output header order.
"""

from __future__ import annotations

from typing import Any

from tagcsv.mapping.descriptors import describe_record_type
from tagcsv.mapping.errors import DuplicateColumnMapping


def resolve_schema(record_type: Any) -> dict[str, str]:
    """
    Extract the field-to-column mapping declared on a record type.

    Fields without a column marker are skipped silently. Duplicate column
    names are not checked here (see `check_unique_columns`).

    Args:
        record_type: A dataclass type, or its RecordTypeDescriptor.

    Returns:
        Dict of field name -> column name in declaration order.

    Raises:
        NotARecordType: If `record_type` is not a dataclass type.

    Example:
        >>> @dataclass
        ... class Person:
        ...     name: str = col("name")
        ...     active: bool = col("active")
        ...     note: str = ""
        >>> resolve_schema(Person)
        {'name': 'name', 'active': 'active'}
    """
    descriptor = describe_record_type(record_type)
    return {f.name: f.column for f in descriptor.mapped_fields}


def check_unique_columns(schema: dict[str, str]) -> None:
    """
    Reject schemas in which two fields map to the same column.

    On read, such fields would silently share one column index; on write, the
    column would appear twice in the header.

    Raises:
        DuplicateColumnMapping: For the first column claimed by more than one field.
    """
    fields_by_column: dict[str, list[str]] = {}
    for field_name, column in schema.items():
        fields_by_column.setdefault(column, []).append(field_name)

    for column, field_names in fields_by_column.items():
        if len(field_names) > 1:
            raise DuplicateColumnMapping(column, field_names)
