"""
tagcsv - map CSV files to and from typed dataclass records.

Fields opt into mapping with the `col(...)` marker; reading matches columns by
name against the file's header, writing emits columns in field declaration
order.
"""

__version__ = "0.1.0"

from tagcsv.data.records import read_records, write_records
from tagcsv.mapping.descriptors import col
from tagcsv.mapping.kinds import FieldKind

__all__ = [
    "col",
    "FieldKind",
    "read_records",
    "write_records",
]
