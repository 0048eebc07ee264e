"""
Typed record files: read a CSV into dataclass records, write records to a CSV.

**Rule**: These two functions are the consumer-facing API. They join the CSV
framing in `tagcsv.data.io` to the mapping layer in `tagcsv.mapping`. Each call
is self-contained: the schema and binding it derives are discarded when it
returns, and the records it produces belong to the caller.

Usage:

    @dataclass
    class Person:
        name: str = col("name")
        active: bool = col("active")

    people = read_records("people.csv", Person)
    write_records("people_out.csv", people, Person)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

from tagcsv.config.settings import MapperSettings, get_settings
from tagcsv.data.io import read_rows, write_rows
from tagcsv.mapping.mapper import records_from_rows, records_to_rows

logger = logging.getLogger(__name__)


def read_records(
    path: Path | str,
    record_type: Any,
    settings: MapperSettings | None = None,
) -> list[Any]:
    """
    Read a CSV file into a list of records of `record_type`.

    The first row of the file is the header. Columns are matched by name, so
    their order in the file does not matter and unmapped columns are ignored.

    Args:
        path: Path to the CSV file.
        record_type: Dataclass type whose `col(...)` fields name the columns.
        settings: Optional settings; defaults to get_settings().

    Returns:
        One record per data row, in file order.

    Raises:
        SourceReadError: If the file cannot be read or parsed as CSV.
        NotARecordType: If `record_type` is not a dataclass type.
        DuplicateColumnMapping: If two fields share a column (unless disabled).
        ColumnNotFound: If a mapped column is missing from the header.
        RowTooShort, UnsupportedFieldKind, InvalidBool, InvalidInt,
        InvalidFloat: On the first bad data row (with `row_number` set).
    """
    settings = settings or get_settings()

    rows = read_rows(path, encoding=settings.encoding)
    records = records_from_rows(
        rows,
        record_type,
        reject_duplicate_columns=settings.reject_duplicate_columns,
    )

    logger.info("Loaded %d records from %s", len(records), path)
    return records


def write_records(
    path: Path | str,
    records: Iterable[Any],
    record_type: Any,
    settings: MapperSettings | None = None,
) -> None:
    """
    Write records to a CSV file, header first.

    Header order follows field declaration order on `record_type`. Every
    record is encoded before the file is touched, so an encoding failure
    leaves any existing file unchanged.

    Args:
        path: Destination CSV path. Parent directories are created.
        records: Records to write.
        record_type: Dataclass type of the records.
        settings: Optional settings; defaults to get_settings().

    Raises:
        NotARecordType: If `record_type` is not a dataclass type.
        DuplicateColumnMapping: If two fields share a column (unless disabled).
        UnsupportedFieldKind: If a mapped field has no supported kind.
        SinkWriteError: If the file cannot be written.
    """
    settings = settings or get_settings()

    header_row, *data_rows = records_to_rows(
        records,
        record_type,
        float_precision=settings.float_precision,
        reject_duplicate_columns=settings.reject_duplicate_columns,
    )
    write_rows(path, header_row, data_rows, encoding=settings.encoding)
