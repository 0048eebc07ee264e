"""
Tests for tagcsv/mapping/kinds.py

These tests verify the per-kind parsers and formatters, including the
fixed zero-decimal float output and integer width checks.
"""

import math
from typing import Optional

import numpy as np
import pytest

from tagcsv.mapping.kinds import (
    FORMATTERS,
    PARSERS,
    FieldKind,
    format_bool,
    format_float32,
    format_float64,
    format_int,
    kind_for_type,
    parse_bool,
    parse_float32,
    parse_float64,
    zero_value,
)


# ============================================================================
# Dispatch tables
# ============================================================================

def test_every_kind_has_parser_and_formatter():
    """Each FieldKind must be registered in both dispatch tables."""
    assert set(PARSERS) == set(FieldKind)
    assert set(FORMATTERS) == set(FieldKind)


def test_kind_for_type_builtin_and_numpy_types():
    assert kind_for_type(bool) is FieldKind.BOOL
    assert kind_for_type(int) is FieldKind.INT64
    assert kind_for_type(float) is FieldKind.FLOAT64
    assert kind_for_type(str) is FieldKind.STRING
    assert kind_for_type(np.int8) is FieldKind.INT8
    assert kind_for_type(np.int32) is FieldKind.INT32
    assert kind_for_type(np.float32) is FieldKind.FLOAT32


def test_kind_for_type_unsupported_types():
    assert kind_for_type(list[str]) is None
    assert kind_for_type(Optional[int]) is None
    assert kind_for_type(bytes) is None
    assert kind_for_type("int") is None


def test_zero_values():
    assert zero_value(FieldKind.BOOL) is False
    assert zero_value(FieldKind.INT16) == 0
    assert zero_value(FieldKind.FLOAT64) == 0.0
    assert zero_value(FieldKind.STRING) == ""
    assert zero_value(None) is None


# ============================================================================
# Bool
# ============================================================================

@pytest.mark.parametrize("raw", ["1", "t", "T", "TRUE", "true", "True"])
def test_parse_bool_true_tokens(raw):
    assert parse_bool(raw) is True


@pytest.mark.parametrize("raw", ["0", "f", "F", "FALSE", "false", "False"])
def test_parse_bool_false_tokens(raw):
    assert parse_bool(raw) is False


@pytest.mark.parametrize("raw", ["yes", "no", "", " true", "tRuE", "2"])
def test_parse_bool_rejects_other_text(raw):
    with pytest.raises(ValueError):
        parse_bool(raw)


def test_format_bool():
    assert format_bool(True) == "true"
    assert format_bool(False) == "false"
    assert format_bool(np.bool_(True)) == "true"


# ============================================================================
# Integers
# ============================================================================

def test_parse_int_accepts_signed_decimal():
    parse = PARSERS[FieldKind.INT64]
    assert parse("42") == 42
    assert parse("-42") == -42
    assert parse("+7") == 7
    assert parse("007") == 7


@pytest.mark.parametrize("raw", ["abc", "", "1.5", " 5", "5 ", "1_000", "0x10", "1e3"])
def test_parse_int_rejects_non_integers(raw):
    with pytest.raises(ValueError):
        PARSERS[FieldKind.INT64](raw)


def test_parse_int_enforces_declared_width():
    """Range follows the declared width, not Python's unbounded int."""
    assert PARSERS[FieldKind.INT8]("127") == 127
    assert PARSERS[FieldKind.INT8]("-128") == -128
    with pytest.raises(ValueError) as exc_info:
        PARSERS[FieldKind.INT8]("128")
    assert "out of range for int8" in str(exc_info.value)

    assert PARSERS[FieldKind.INT16]("32767") == 32767
    with pytest.raises(ValueError):
        PARSERS[FieldKind.INT16]("32768")

    assert PARSERS[FieldKind.INT32]("-2147483648") == -2147483648
    with pytest.raises(ValueError):
        PARSERS[FieldKind.INT32]("2147483648")

    assert PARSERS[FieldKind.INT64]("9223372036854775807") == 9223372036854775807
    with pytest.raises(ValueError):
        PARSERS[FieldKind.INT64]("9223372036854775808")


def test_format_int_full_precision():
    assert format_int(9223372036854775807) == "9223372036854775807"
    assert format_int(-5) == "-5"
    assert format_int(np.int16(12)) == "12"


# ============================================================================
# Floats
# ============================================================================

def test_parse_float64_notations():
    assert parse_float64("3.5") == 3.5
    assert parse_float64("-1e3") == -1000.0
    assert parse_float64("2.5E-1") == 0.25
    assert parse_float64(".5") == 0.5
    assert parse_float64("5.") == 5.0
    assert parse_float64("10") == 10.0


def test_parse_float64_non_finite_literals():
    assert parse_float64("inf") == math.inf
    assert parse_float64("-Infinity") == -math.inf
    assert math.isnan(parse_float64("NaN"))


@pytest.mark.parametrize("raw", ["abc", "", "1,5", " 1.5", "1.5 ", "1_0.0", "0x1p3", "e5"])
def test_parse_float_rejects_malformed_text(raw):
    with pytest.raises(ValueError):
        parse_float64(raw)


def test_parse_float64_rejects_overflow():
    with pytest.raises(ValueError) as exc_info:
        parse_float64("1e400")
    assert "out of range" in str(exc_info.value)


def test_parse_float32_rounds_to_single_precision():
    value = parse_float32("0.1")
    assert value == float(np.float32(0.1))
    assert value != 0.1


def test_parse_float32_rejects_overflow():
    with pytest.raises(ValueError) as exc_info:
        parse_float32("3.5e38")
    assert "float32" in str(exc_info.value)


def test_format_float_default_zero_decimals():
    """Default output has no fractional digits, rounding half to even."""
    assert format_float64(3.7) == "4"
    assert format_float64(3.2) == "3"
    assert format_float64(2.5) == "2"
    assert format_float64(3.5) == "4"
    assert format_float64(-1.6) == "-2"
    assert format_float64(1234567.0) == "1234567"
    assert format_float32(np.float32(3.7)) == "4"


def test_format_float_with_precision():
    assert format_float64(3.14159, 2) == "3.14"
    assert format_float64(1.0, 3) == "1.000"


def test_format_float_shortest_round_trip():
    assert format_float64(0.1, None) == "0.1"
    assert format_float64(4.0, None) == "4"
    assert format_float32(np.float32(0.1), None) == "0.1"
    assert parse_float64(format_float64(2.0 / 3.0, None)) == 2.0 / 3.0


def test_format_float_non_finite():
    assert format_float64(math.inf) == "inf"
    assert format_float64(-math.inf) == "-inf"
    assert format_float64(math.nan) == "nan"


# ============================================================================
# Strings
# ============================================================================

def test_string_is_verbatim():
    raw = "  spaced, \"quoted\"  "
    assert PARSERS[FieldKind.STRING](raw) == raw
    assert FORMATTERS[FieldKind.STRING](raw, 0) == raw
