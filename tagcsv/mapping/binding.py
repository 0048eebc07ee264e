"""
Header binding: schema + one file's header row -> field-to-index binding.
"""

from __future__ import annotations

import logging
from typing import Sequence

from tagcsv.mapping.errors import ColumnNotFound

logger = logging.getLogger(__name__)


def bind_header(schema: dict[str, str], header_row: Sequence[str]) -> dict[str, int]:
    """
    Resolve every schema column against a concrete header row.

    **Functionally**:
      - Builds a column name -> index map scanning the header left to right;
        a name that appears twice keeps its last index.
      - Looks up each schema column in that map. Column order in the file is
        irrelevant and extra columns are ignored.
      - Either every field is bound or ColumnNotFound is raised; no partial
        binding is ever returned.

    Args:
        schema: Field name -> column name, from resolve_schema().
        header_row: First row of the file.

    Returns:
        Dict of field name -> zero-based column index, valid only for rows
        framed under this header.

    Raises:
        ColumnNotFound: For the first schema column missing from the header.

    Example:
        >>> bind_header({"name": "name", "active": "active"}, ["active", "name"])
        {'name': 1, 'active': 0}
    """
    positions = {column: index for index, column in enumerate(header_row)}

    binding: dict[str, int] = {}
    for field_name, column in schema.items():
        if column not in positions:
            raise ColumnNotFound(column, header_row)
        binding[field_name] = positions[column]

    logger.debug("Bound %d fields against header %s", len(binding), list(header_row))
    return binding
