import pytest

from mariapp.types import (
    UNSIGNED_FLAG,
    FieldType,
    ValueType,
    column_value_type,
)


def test_null_column_maps_to_first_value_type():
    result = column_value_type(FieldType.NULL, UNSIGNED_FLAG)
    assert result is ValueType.NULL
    assert result == 0


def test_enum_column_maps_to_last_value_type():
    assert column_value_type(FieldType.ENUM) is list(ValueType)[-1]


@pytest.mark.parametrize(
    "field_type, unsigned, signed",
    [
        (FieldType.TINY, ValueType.UNSIGNED8, ValueType.SIGNED8),
        (FieldType.YEAR, ValueType.UNSIGNED16, ValueType.SIGNED16),
        (FieldType.SHORT, ValueType.UNSIGNED16, ValueType.SIGNED16),
        (FieldType.INT24, ValueType.UNSIGNED32, ValueType.SIGNED32),
        (FieldType.LONG, ValueType.UNSIGNED32, ValueType.SIGNED32),
        (FieldType.LONGLONG, ValueType.UNSIGNED64, ValueType.SIGNED64),
    ],
)
def test_integer_columns_follow_unsigned_flag(field_type, unsigned, signed):
    assert column_value_type(field_type, UNSIGNED_FLAG) is unsigned
    assert column_value_type(field_type, 0) is signed


@pytest.mark.parametrize(
    "field_type, expected",
    [
        (FieldType.NULL, ValueType.NULL),
        (FieldType.BIT, ValueType.BOOLEAN),
        (FieldType.FLOAT, ValueType.FLOAT32),
        (FieldType.DOUBLE, ValueType.DOUBLE64),
        (FieldType.DECIMAL, ValueType.DECIMAL),
        (FieldType.NEWDECIMAL, ValueType.DECIMAL),
        (FieldType.DATE, ValueType.DATE),
        (FieldType.NEWDATE, ValueType.DATE),
        (FieldType.TIME, ValueType.TIME),
        (FieldType.DATETIME, ValueType.DATE_TIME),
        (FieldType.TIMESTAMP, ValueType.DATE_TIME),
        (FieldType.BLOB, ValueType.BLOB),
        (FieldType.TINY_BLOB, ValueType.BLOB),
        (FieldType.MEDIUM_BLOB, ValueType.BLOB),
        (FieldType.LONG_BLOB, ValueType.BLOB),
        (FieldType.ENUM, ValueType.ENUMERATION),
        (FieldType.VARCHAR, ValueType.STRING),
        (FieldType.VAR_STRING, ValueType.STRING),
        (FieldType.STRING, ValueType.STRING),
        (FieldType.GEOMETRY, ValueType.STRING),
        (FieldType.SET, ValueType.STRING),
    ],
)
def test_fixed_mappings(field_type, expected):
    assert column_value_type(field_type) is expected


def test_unsigned_flag_ignored_for_non_integers():
    assert column_value_type(FieldType.DOUBLE, UNSIGNED_FLAG) is ValueType.DOUBLE64
    assert column_value_type(FieldType.FLOAT, UNSIGNED_FLAG) is ValueType.FLOAT32


def test_unknown_field_type_is_string():
    assert column_value_type(999) is ValueType.STRING


def test_raw_integer_field_type_accepted():
    assert column_value_type(int(FieldType.LONGLONG), UNSIGNED_FLAG) is ValueType.UNSIGNED64