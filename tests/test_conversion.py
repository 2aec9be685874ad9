import math

import pytest

from mariapp.conversion import checked_cast, string_cast
from mariapp.types import ValueType


@pytest.mark.parametrize(
    "text, kind, expected",
    [
        ("-128", ValueType.SIGNED8, -128),
        ("127", ValueType.SIGNED8, 127),
        ("-32768", ValueType.SIGNED16, -32768),
        ("65535", ValueType.UNSIGNED16, 65535),
        ("-2147483648", ValueType.SIGNED32, -2147483648),
        ("4294967295", ValueType.UNSIGNED32, 4294967295),
        ("-9223372036854775808", ValueType.SIGNED64, -9223372036854775808),
        ("18446744073709551615", ValueType.UNSIGNED64, 18446744073709551615),
        ("255", ValueType.UNSIGNED8, 255),
    ],
)
def test_integer_limits_parse(text, kind, expected):
    assert string_cast(text, kind) == expected


def test_trailing_characters_give_zero():
    assert string_cast("12abc", ValueType.SIGNED32) == 0
    assert string_cast("12abc", ValueType.BOOLEAN) is False


def test_leading_whitespace_accepted():
    assert string_cast(" 7", ValueType.SIGNED16) == 7


def test_narrow_overflow_gives_default():
    assert string_cast("128", ValueType.SIGNED8) == 0
    assert string_cast("256", ValueType.UNSIGNED8) == 0


def test_int_out_of_range_raises():
    with pytest.raises(OverflowError):
        string_cast("2147483648", ValueType.SIGNED32)
    with pytest.raises(OverflowError):
        string_cast("18446744073709551616", ValueType.UNSIGNED64)
    with pytest.raises(OverflowError):
        string_cast("9223372036854775808", ValueType.SIGNED64)


@pytest.mark.parametrize("kind", [ValueType.SIGNED32, ValueType.UNSIGNED64, ValueType.DOUBLE64])
def test_unparsable_raises(kind):
    with pytest.raises(ValueError):
        string_cast("abc", kind)


def test_negative_unsigned_wraps():
    assert string_cast("-1", ValueType.UNSIGNED64) == 18446744073709551615
    assert string_cast("-1", ValueType.UNSIGNED32) == 0


def test_boolean_parsing():
    assert string_cast("1", ValueType.BOOLEAN) is True
    assert string_cast("0", ValueType.BOOLEAN) is False
    assert string_cast("2", ValueType.BOOLEAN) is False


def test_float_values():
    assert string_cast("-3.40282e+38", ValueType.FLOAT32) == pytest.approx(-3.40282e38, rel=1e-6)
    assert string_cast("1.7976931348623157e+308", ValueType.DOUBLE64) == 1.7976931348623157e308
    assert string_cast("-2.2250738585072014e-308", ValueType.DOUBLE64) == -2.2250738585072014e-308
    assert string_cast("0.03", ValueType.DOUBLE64) == 0.03


@pytest.mark.parametrize(
    "text, kind",
    [
        ("1.17549e-38", ValueType.FLOAT32),
        ("1e39", ValueType.FLOAT32),
        ("1e309", ValueType.DOUBLE64),
    ],
)
def test_float_out_of_range_is_nan(text, kind):
    value = string_cast(text, kind)
    assert math.isnan(value) is True
    assert str(value) == "nan"


def test_float_is_rounded_to_single_precision():
    value = string_cast("0.1", ValueType.FLOAT32)
    assert value == pytest.approx(0.1, rel=1e-7)
    assert value != 0.1


def test_float_trailing_characters():
    assert string_cast("1.5x", ValueType.DOUBLE64) == string_cast("0", ValueType.DOUBLE64)


def test_checked_cast_within_and_outside_range():
    assert checked_cast(255, ValueType.UNSIGNED8) == 255
    assert checked_cast(300, ValueType.UNSIGNED8) == 0
    assert checked_cast(-128, ValueType.SIGNED8) == -128
    assert checked_cast(1, ValueType.BOOLEAN) is True
    assert checked_cast(2, ValueType.BOOLEAN) is False


def test_checked_cast_double():
    assert checked_cast(0.03, ValueType.DOUBLE64) == 0.03
    assert checked_cast(math.inf, ValueType.DOUBLE64) == checked_cast(-math.inf, ValueType.DOUBLE64)
    assert math.isnan(checked_cast(math.nan, ValueType.DOUBLE64))


def test_checked_cast_rejects_non_numeric_kind():
    with pytest.raises(TypeError):
        checked_cast(1, ValueType.STRING)
    with pytest.raises(TypeError):
        string_cast("1", ValueType.BLOB)