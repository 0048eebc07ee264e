"""
Value coder: cell text <-> typed record fields.

**Conceptual**: Decoding turns one data row into a fresh record using a
binding (field -> column index). Encoding turns one record into one row
using the schema, whose order is the header order. Both directions dispatch
on the field's FieldKind through the PARSERS / FORMATTERS tables in
`kinds.py`.

**Failure semantics**:
  - The first failing field aborts the whole row; no partially populated
    record is ever returned.
  - encode_records builds every row in memory before returning, so a failure
    on any record leaves nothing to persist.
  - Rows are independent: decoding one row never looks at another.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from tagcsv.mapping.descriptors import (
    FieldDescriptor,
    RecordTypeDescriptor,
    describe_record_type,
)
from tagcsv.mapping.errors import (
    CellParseError,
    FieldError,
    InvalidBool,
    InvalidFloat,
    InvalidInt,
    RowTooShort,
    UnsupportedFieldKind,
)
from tagcsv.mapping.kinds import FORMATTERS, PARSERS, FieldKind, zero_value


def _parse_error_class(kind: FieldKind) -> type[CellParseError]:
    if kind is FieldKind.BOOL:
        return InvalidBool
    if kind.is_integer:
        return InvalidInt
    return InvalidFloat


def _require_kind(field_name: str, descriptor: FieldDescriptor | None) -> FieldKind:
    if descriptor is None:
        raise UnsupportedFieldKind(field_name, None)
    if descriptor.kind is None:
        raise UnsupportedFieldKind(field_name, descriptor.type_hint)
    return descriptor.kind


def _decode_cell(field_name: str, kind: FieldKind, raw: str) -> Any:
    try:
        return PARSERS[kind](raw)
    except ValueError as e:
        raise _parse_error_class(kind)(field_name, raw, str(e)) from e


def _instantiate(descriptor: RecordTypeDescriptor, values: dict[str, Any]) -> Any:
    """Construct a record from decoded values; unmapped required fields get zero values."""
    init_kwargs: dict[str, Any] = {}
    late_values: dict[str, Any] = {}
    for f in descriptor.fields:
        if f.name in values:
            if f.init:
                init_kwargs[f.name] = values[f.name]
            else:
                late_values[f.name] = values[f.name]
        elif f.init and not f.has_default:
            init_kwargs[f.name] = zero_value(f.kind)

    record = descriptor.record_type(**init_kwargs)
    # init=False fields are set directly, which also works on frozen dataclasses
    for name, value in late_values.items():
        object.__setattr__(record, name, value)
    return record


def decode_row(binding: dict[str, int], row: Sequence[str], record_type: Any) -> Any:
    """
    Decode one data row into a new record instance.

    Args:
        binding: Field name -> column index, from bind_header().
        row: Cells of one data row. Cells not referenced by the binding are
             ignored, so the row may be longer than the header.
        record_type: Dataclass type or its RecordTypeDescriptor.

    Returns:
        A new instance of the record type.

    Raises:
        RowTooShort: If a bound index is beyond the end of `row`.
        UnsupportedFieldKind: If a bound field has no supported kind, or is
                              not a field of the record type at all.
        InvalidBool / InvalidInt / InvalidFloat: If a cell cannot be parsed.

    Example:
        >>> decode_row({"name": 1, "active": 0}, ["true", "Ann"], Person)
        Person(name='Ann', active=True)
    """
    descriptor = describe_record_type(record_type)

    values: dict[str, Any] = {}
    for field_name, column_index in binding.items():
        if column_index >= len(row):
            raise RowTooShort(field_name, column_index, len(row))
        raw = row[column_index]
        kind = _require_kind(field_name, descriptor.get(field_name))
        values[field_name] = _decode_cell(field_name, kind, raw)

    return _instantiate(descriptor, values)


def decode_rows(
    binding: dict[str, int],
    rows: Iterable[Sequence[str]],
    record_type: Any,
    first_row_number: int = 2,
) -> list[Any]:
    """
    Decode data rows in order, stopping at the first failure.

    Errors are annotated with the failing row's number (`row_number`),
    counting from `first_row_number` (2 by default: row 1 is the header).
    """
    descriptor = describe_record_type(record_type)
    records = []
    for row_number, row in enumerate(rows, start=first_row_number):
        try:
            records.append(decode_row(binding, row, descriptor))
        except FieldError as e:
            e.row_number = row_number
            raise
    return records


def encode_record(
    schema: dict[str, str],
    record: Any,
    record_type: Any,
    float_precision: int | None = 0,
) -> list[str]:
    """
    Encode one record into cell text, one cell per schema entry, in schema order.

    Raises:
        UnsupportedFieldKind: If a mapped field has no supported kind.
    """
    descriptor = describe_record_type(record_type)

    row = []
    for field_name in schema:
        kind = _require_kind(field_name, descriptor.get(field_name))
        value = getattr(record, field_name)
        row.append(FORMATTERS[kind](value, float_precision))
    return row


def encode_records(
    schema: dict[str, str],
    records: Iterable[Any],
    record_type: Any,
    float_precision: int | None = 0,
) -> tuple[list[str], list[list[str]]]:
    """
    Encode records into a header row plus data rows.

    **Functionally**:
      - The header is the schema's column names in field declaration order.
        It is the only place output column order is decided.
      - Cell i of every data row corresponds to header cell i.
      - Floats use `float_precision` decimal places (0 by default, see
        kinds.py).

    Returns:
        (header_row, data_rows)

    Raises:
        UnsupportedFieldKind: If a mapped field has no supported kind.
    """
    descriptor = describe_record_type(record_type)
    header_row = list(schema.values())
    data_rows = [
        encode_record(schema, record, descriptor, float_precision)
        for record in records
    ]
    return header_row, data_rows
