"""
Record type descriptors: the static field table behind every mapping.

**Conceptual**: A record type is a dataclass whose fields opt into CSV
mapping through the `col(...)` marker:

    @dataclass
    class Person:
        name: str = col("name")
        active: bool = col("active")
        age: int = col("age", kind=FieldKind.INT8)
        note: str = ""                      # not mapped, never read or written

`describe_record_type` turns such a class into a `RecordTypeDescriptor`:
one `FieldDescriptor` per dataclass field, in declaration order, carrying
the field's scalar kind and its column name (None when unmapped). The
descriptor is built once per type and kept in a bounded cache.

**Kind resolution**: an explicit `kind=` on the marker wins. Otherwise the
kind comes from the resolved type hint (see `kinds.kind_for_type`). Hints are
resolved per field when the class as a whole cannot be, so one unresolvable
annotation does not affect the others. A field with an unsupported type still
gets a descriptor, with kind None; the coder reports it as
UnsupportedFieldKind when the field is actually mapped.
"""

from __future__ import annotations

import dataclasses
import logging
import sys
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

import numpy as np

from tagcsv.mapping.errors import NotARecordType
from tagcsv.mapping.kinds import FieldKind, kind_for_type

logger = logging.getLogger(__name__)

# Metadata keys read from dataclasses.field(metadata=...)
COLUMN_MARKER = "col"
KIND_MARKER = "col_kind"

# Annotation text -> type, for string annotations that cannot be evaluated
# in the defining module.
_HINTS_BY_NAME: dict[str, Any] = {"bool": bool, "int": int, "float": float, "str": str}
for _np_name in ("bool_", "int8", "int16", "int32", "int64", "float32", "float64"):
    for _prefix in ("np.", "numpy."):
        _HINTS_BY_NAME[_prefix + _np_name] = getattr(np, _np_name)

# Descriptors kept; record types defined per call fall out of the cache.
_DESCRIPTOR_CACHE_SIZE = 256


def col(name: str, *, kind: FieldKind | None = None, **field_kwargs: Any) -> Any:
    """
    Declare a dataclass field mapped to the CSV column `name`.

    Accepts the usual dataclasses.field keyword arguments (default,
    default_factory, init, repr, ...). Existing metadata is preserved.

    Args:
        name: Column name in the CSV header. An empty name leaves the field
              unmapped.
        kind: Optional explicit scalar kind, e.g. FieldKind.INT16 for an int
              field that must fit in 16 bits.

    Raises:
        TypeError: If `kind` is neither None nor a FieldKind.
    """
    if kind is not None and not isinstance(kind, FieldKind):
        raise TypeError(f"kind must be a FieldKind or None, got: {kind!r}")
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[COLUMN_MARKER] = name
    if kind is not None:
        metadata[KIND_MARKER] = kind
    return dataclasses.field(metadata=metadata, **field_kwargs)


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Static description of one dataclass field.

    Attributes:
        name: Attribute name on the record.
        kind: Scalar kind, or None if the type is not supported.
        column: Mapped column name, or None if the field is not mapped.
        type_hint: Resolved annotation (for error messages).
        init: Whether the field is an __init__ parameter.
        has_default: Whether the dataclass supplies a default for it.
    """
    name: str
    kind: FieldKind | None
    column: str | None
    type_hint: Any = None
    init: bool = True
    has_default: bool = False

    @property
    def is_mapped(self) -> bool:
        return self.column is not None


@dataclass(frozen=True)
class RecordTypeDescriptor:
    """Ordered field table for one record type."""
    record_type: type
    fields: tuple[FieldDescriptor, ...]

    def get(self, field_name: str) -> FieldDescriptor | None:
        for descriptor in self.fields:
            if descriptor.name == field_name:
                return descriptor
        return None

    @property
    def mapped_fields(self) -> tuple[FieldDescriptor, ...]:
        return tuple(f for f in self.fields if f.is_mapped)

    @property
    def name(self) -> str:
        return self.record_type.__name__


def _resolve_annotation(annotation: Any, globalns: dict, localns: dict) -> Any:
    if not isinstance(annotation, str):
        return annotation
    try:
        return eval(annotation, globalns, localns)
    except (NameError, AttributeError, SyntaxError, TypeError):
        return _HINTS_BY_NAME.get(annotation.strip(), annotation)


def _resolve_type_hints(record_type: type) -> dict[str, Any]:
    """
    Resolve the annotation of every field on `record_type`.

    typing.get_type_hints fails as a whole when any one annotation cannot be
    evaluated (a forward reference to a local class, say). In that case each
    field is resolved on its own, so one bad annotation only costs that
    field its kind.
    """
    try:
        return typing.get_type_hints(record_type)
    except (NameError, TypeError, AttributeError):
        logger.debug(
            "Could not resolve all type hints for %s; resolving per field",
            record_type.__name__,
        )

    module = sys.modules.get(record_type.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    localns = dict(vars(record_type))
    return {
        f.name: _resolve_annotation(f.type, globalns, localns)
        for f in dataclasses.fields(record_type)
    }


@lru_cache(maxsize=_DESCRIPTOR_CACHE_SIZE)
def _describe(record_type: type) -> RecordTypeDescriptor:
    hints = _resolve_type_hints(record_type)
    fields = []
    for f in dataclasses.fields(record_type):
        type_hint = hints.get(f.name, f.type)
        kind = f.metadata.get(KIND_MARKER) or kind_for_type(type_hint)
        column = f.metadata.get(COLUMN_MARKER) or None
        has_default = (
            f.default is not dataclasses.MISSING
            or f.default_factory is not dataclasses.MISSING
        )
        fields.append(FieldDescriptor(
            name=f.name,
            kind=kind,
            column=column,
            type_hint=type_hint,
            init=f.init,
            has_default=has_default,
        ))

    descriptor = RecordTypeDescriptor(record_type=record_type, fields=tuple(fields))
    logger.debug(
        "Described record type %s: %d fields, %d mapped",
        record_type.__name__, len(descriptor.fields), len(descriptor.mapped_fields),
    )
    return descriptor


def describe_record_type(record_type: Any) -> RecordTypeDescriptor:
    """
    Build (or fetch from cache) the descriptor for a record type.

    Also accepts an existing RecordTypeDescriptor and returns it unchanged,
    so downstream functions can take either.

    Raises:
        NotARecordType: If `record_type` is not a dataclass type. Dataclass
                        instances are rejected too.
    """
    if isinstance(record_type, RecordTypeDescriptor):
        return record_type
    if not (isinstance(record_type, type) and dataclasses.is_dataclass(record_type)):
        raise NotARecordType(record_type)
    return _describe(record_type)
