"""
Grid-level read and write paths.

These functions connect tag resolution, header binding, and the value coder
over an in-memory grid of rows (a list of lists of str, header first). They
perform no file I/O: `tagcsv.data.records` pairs them with the CSV reader and
writer in `tagcsv.data.io`.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from tagcsv.mapping.binding import bind_header
from tagcsv.mapping.coder import decode_rows, encode_records
from tagcsv.mapping.descriptors import describe_record_type
from tagcsv.mapping.schema import check_unique_columns, resolve_schema

logger = logging.getLogger(__name__)


def records_from_rows(
    rows: Sequence[Sequence[str]],
    record_type: Any,
    *,
    reject_duplicate_columns: bool = True,
) -> list[Any]:
    """
    Decode a tokenized grid into records.

    The first row is the header. An empty grid is treated as an empty header
    with no data rows, so it yields [] when the type maps no columns and
    ColumnNotFound otherwise.

    Args:
        rows: Header row followed by data rows.
        record_type: Dataclass type to decode into.
        reject_duplicate_columns: Raise DuplicateColumnMapping when two fields
                                  share a column name.

    Raises:
        NotARecordType, DuplicateColumnMapping, ColumnNotFound, RowTooShort,
        UnsupportedFieldKind, InvalidBool, InvalidInt, InvalidFloat.

    Example:
        >>> records_from_rows([["active", "name"], ["true", "Ann"]], Person)
        [Person(name='Ann', active=True)]
    """
    descriptor = describe_record_type(record_type)
    schema = resolve_schema(descriptor)
    if reject_duplicate_columns:
        check_unique_columns(schema)

    header_row = rows[0] if rows else []
    binding = bind_header(schema, header_row)
    records = decode_rows(binding, rows[1:], descriptor)

    logger.debug("Decoded %d %s records", len(records), descriptor.name)
    return records


def records_to_rows(
    records: Iterable[Any],
    record_type: Any,
    *,
    float_precision: int | None = 0,
    reject_duplicate_columns: bool = True,
) -> list[list[str]]:
    """
    Encode records into a tokenized grid, header row first.

    Header order follows field declaration order on `record_type`, not the
    order of any file the records were read from.

    Raises:
        NotARecordType, DuplicateColumnMapping, UnsupportedFieldKind.

    Example:
        >>> records_to_rows([Person(name="Ann", active=True)], Person)
        [['name', 'active'], ['Ann', 'true']]
    """
    descriptor = describe_record_type(record_type)
    schema = resolve_schema(descriptor)
    if reject_duplicate_columns:
        check_unique_columns(schema)

    header_row, data_rows = encode_records(schema, records, descriptor, float_precision)

    logger.debug("Encoded %d %s records", len(data_rows), descriptor.name)
    return [header_row, *data_rows]
