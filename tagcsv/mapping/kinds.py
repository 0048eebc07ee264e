"""
Scalar kinds and the per-kind text coercion functions.

**Conceptual**: A field's kind decides how its cell text is parsed on read and
how its value is rendered on write. The set of kinds is closed (`FieldKind`),
and every kind has exactly one parser and one formatter registered in the
dispatch tables at the bottom of this module.

**Kinds**:
  - BOOL: token set 1/t/T/TRUE/true/True and 0/f/F/FALSE/false/False,
    written as "true"/"false".
  - INT8, INT16, INT32, INT64: base-10 with optional sign, range-checked
    against the declared width (numpy.iinfo bounds).
  - FLOAT32, FLOAT64: decimal or exponential notation plus inf/infinity/nan.
    FLOAT32 values are rounded through numpy.float32.
  - STRING: cell text is the value, unchanged in both directions.

**Float output precision**: Floats are written in fixed-point notation with
`float_precision` decimal places. The default is 0, so 3.7 is written as "4"
and 2.5 as "2" (round half to even). Files written this way lose any fractional
part. Pass `float_precision=None` for the shortest text that parses
back to the same value.
"""

from __future__ import annotations

import math
import re
from enum import Enum
from typing import Any, Callable

import numpy as np


class FieldKind(Enum):
    """Closed set of scalar kinds a mapped field can have."""

    BOOL = "bool"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    STRING = "str"

    @property
    def is_integer(self) -> bool:
        return self in _INTEGER_DTYPES


_INTEGER_DTYPES = {
    FieldKind.INT8: np.int8,
    FieldKind.INT16: np.int16,
    FieldKind.INT32: np.int32,
    FieldKind.INT64: np.int64,
}

# Type hint -> kind. Python's int is treated as a 64-bit integer.
_KINDS_BY_TYPE = {
    bool: FieldKind.BOOL,
    int: FieldKind.INT64,
    float: FieldKind.FLOAT64,
    str: FieldKind.STRING,
    np.bool_: FieldKind.BOOL,
    np.int8: FieldKind.INT8,
    np.int16: FieldKind.INT16,
    np.int32: FieldKind.INT32,
    np.int64: FieldKind.INT64,
    np.float32: FieldKind.FLOAT32,
    np.float64: FieldKind.FLOAT64,
}

_ZERO_VALUES = {
    FieldKind.BOOL: False,
    FieldKind.INT8: 0,
    FieldKind.INT16: 0,
    FieldKind.INT32: 0,
    FieldKind.INT64: 0,
    FieldKind.FLOAT32: 0.0,
    FieldKind.FLOAT64: 0.0,
    FieldKind.STRING: "",
}

_TRUE_TOKENS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_TOKENS = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)
_NON_FINITE_LITERALS = frozenset({"inf", "infinity", "nan"})

_FLOAT32_MAX = float(np.finfo(np.float32).max)


def kind_for_type(type_hint: Any) -> FieldKind | None:
    """
    Map a resolved type hint to its scalar kind.

    Returns None for anything outside the supported set (containers,
    Optional[...], datetimes, string forward references, ...). Callers decide
    whether that is an error.
    """
    try:
        return _KINDS_BY_TYPE.get(type_hint)
    except TypeError:
        # Unhashable hints cannot be scalar types.
        return None


def zero_value(kind: FieldKind | None) -> Any:
    """Return the value an unmapped field receives on a freshly decoded record."""
    if kind is None:
        return None
    return _ZERO_VALUES[kind]


# ============================================================================
# Parsers (cell text -> value). Each raises ValueError with a short reason.
# ============================================================================

def parse_bool(raw: str) -> bool:
    if raw in _TRUE_TOKENS:
        return True
    if raw in _FALSE_TOKENS:
        return False
    raise ValueError("expected one of 1, t, true, 0, f, false")


def _int_parser(kind: FieldKind) -> Callable[[str], int]:
    bounds = np.iinfo(_INTEGER_DTYPES[kind])
    low, high = int(bounds.min), int(bounds.max)

    def parse_int(raw: str) -> int:
        if not _INT_PATTERN.fullmatch(raw):
            raise ValueError("not a base-10 integer")
        value = int(raw)
        if value < low or value > high:
            raise ValueError(f"out of range for {kind.value} [{low}, {high}]")
        return value

    return parse_int


def _parse_float_text(raw: str) -> float:
    if not _FLOAT_PATTERN.fullmatch(raw):
        raise ValueError("not a decimal floating point number")
    value = float(raw)
    if math.isinf(value) and raw.lstrip("+-").lower() not in _NON_FINITE_LITERALS:
        raise ValueError("out of range for float64")
    return value


def parse_float64(raw: str) -> float:
    return _parse_float_text(raw)


def parse_float32(raw: str) -> float:
    value = _parse_float_text(raw)
    if math.isfinite(value) and abs(value) > _FLOAT32_MAX:
        raise ValueError("out of range for float32")
    return float(np.float32(value))


def parse_string(raw: str) -> str:
    return raw


# ============================================================================
# Formatters (value -> cell text).
# ============================================================================

def format_bool(value: Any, float_precision: int | None = 0) -> str:
    return "true" if value else "false"


def format_int(value: Any, float_precision: int | None = 0) -> str:
    return str(int(value))


def _format_float(value: float, float_precision: int | None) -> str:
    if float_precision is None:
        return np.format_float_positional(value, trim="-")
    return format(float(value), f".{float_precision}f")


def format_float64(value: Any, float_precision: int | None = 0) -> str:
    return _format_float(np.float64(value), float_precision)


def format_float32(value: Any, float_precision: int | None = 0) -> str:
    return _format_float(np.float32(value), float_precision)


def format_string(value: Any, float_precision: int | None = 0) -> str:
    return value if isinstance(value, str) else str(value)


PARSERS: dict[FieldKind, Callable[[str], Any]] = {
    FieldKind.BOOL: parse_bool,
    FieldKind.INT8: _int_parser(FieldKind.INT8),
    FieldKind.INT16: _int_parser(FieldKind.INT16),
    FieldKind.INT32: _int_parser(FieldKind.INT32),
    FieldKind.INT64: _int_parser(FieldKind.INT64),
    FieldKind.FLOAT32: parse_float32,
    FieldKind.FLOAT64: parse_float64,
    FieldKind.STRING: parse_string,
}

FORMATTERS: dict[FieldKind, Callable[[Any, int | None], str]] = {
    FieldKind.BOOL: format_bool,
    FieldKind.INT8: format_int,
    FieldKind.INT16: format_int,
    FieldKind.INT32: format_int,
    FieldKind.INT64: format_int,
    FieldKind.FLOAT32: format_float32,
    FieldKind.FLOAT64: format_float64,
    FieldKind.STRING: format_string,
}
