"""
CSV framing: files <-> tokenized grids of text cells.

**Conceptual**: This module is the only place tagcsv touches the filesystem.
It turns a CSV file into a list of rows (each a list of str) and back. The
mapping layer works entirely on those grids and never sees quoting, line
endings, or encodings.

**Reading**: rows are framed with the csv module, so every cell comes back as
the exact text in the file ("NA", "", "007" stay as written) and the first
line is just another row. Blank lines are skipped. Each row must have as
many fields as the header; a short or long row is rejected rather than
padded, since a padded cell cannot be told apart from a real empty one.

**Writing**: rows are written through DataFrame.to_csv with "\\n" line
endings. Output goes to a temporary file next to the target, which then
replaces the target, so readers never see a half-written file.
"""

from __future__ import annotations

import csv
import logging
import os
import tempfile
from pathlib import Path
from typing import Sequence

import pandas as pd

from tagcsv.mapping.errors import SinkWriteError, SourceReadError

logger = logging.getLogger(__name__)


def read_rows(path: Path | str, encoding: str = "utf-8") -> list[list[str]]:
    """
    Read a CSV file into a list of rows of text cells.

    Every non-blank row must have as many fields as the first row (the
    header). A ragged row is a framing error: it is never padded or
    truncated.

    Args:
        path: Path to the CSV file.
        encoding: Text encoding of the file.

    Returns:
        All rows, header first, every cell as str.

    Raises:
        SourceReadError: If the file is missing, unreadable, empty, not
                         decodable with `encoding`, not valid CSV, or has a
                         row whose field count differs from the header.

    Example:
        >>> read_rows("people.csv")
        [['active', 'name'], ['true', 'Ann'], ['false', 'Bob']]
    """
    path = Path(path)

    if not path.exists():
        raise SourceReadError(
            f"CSV file not found: {path}. "
            f"Ensure the file exists and the path is correct.",
            path=str(path),
        )

    rows: list[list[str]] = []
    try:
        with open(path, "r", encoding=encoding, newline="") as f:
            reader = csv.reader(f, strict=True)
            for row in reader:
                if not row:
                    continue
                if rows and len(row) != len(rows[0]):
                    raise SourceReadError(
                        f"{path}: line {reader.line_num} has {len(row)} fields, "
                        f"expected {len(rows[0])} (from the header)",
                        path=str(path),
                    )
                rows.append(row)
    except (OSError, ValueError, csv.Error) as e:
        # UnicodeDecodeError is a ValueError
        raise SourceReadError(
            f"{path}: Failed to read CSV. Error: {e}",
            path=str(path),
        ) from e

    if not rows:
        raise SourceReadError(f"{path}: CSV file is empty", path=str(path))

    logger.info("Read %d rows from %s", len(rows), path)
    return rows


def write_rows(
    path: Path | str,
    header: Sequence[str],
    rows: Sequence[Sequence[str]],
    encoding: str = "utf-8",
) -> None:
    """
    Write a header row and data rows to a CSV file, replacing it atomically.

    Parent directories are created if needed.

    Args:
        path: Destination CSV path.
        header: Column names.
        rows: Data rows, each with one cell per header column.
        encoding: Text encoding of the output file.

    Raises:
        SinkWriteError: If the rows cannot be framed or the file cannot be
                        written. The target is left untouched.
    """
    path = Path(path)
    tmp_name = None

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        frame = pd.DataFrame(list(rows), columns=range(len(header)), dtype=object)

        with tempfile.NamedTemporaryFile(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as tmp:
            tmp_name = tmp.name

        frame.to_csv(
            tmp_name,
            index=False,
            header=list(header),
            lineterminator="\n",
            encoding=encoding,
        )
        os.replace(tmp_name, path)
        tmp_name = None
    except (OSError, ValueError) as e:
        raise SinkWriteError(
            f"{path}: Failed to write CSV. Error: {e}",
            path=str(path),
        ) from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)

    logger.info("Wrote %d rows to %s", len(rows), path)
