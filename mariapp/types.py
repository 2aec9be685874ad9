"""Value types, isolation levels and server field types."""

from __future__ import annotations

import enum

UNSIGNED_FLAG = 32
"""Column flag marking an integer column as unsigned."""


class ValueType(enum.IntEnum):
    """Kind of value a column holds or a getter requests."""

    NULL = 0
    BLOB = 1
    DATA = 2
    DATE = 3
    DATE_TIME = 4
    TIME = 5
    STRING = 6
    BOOLEAN = 7
    DECIMAL = 8
    UNSIGNED8 = 9
    SIGNED8 = 10
    UNSIGNED16 = 11
    SIGNED16 = 12
    UNSIGNED32 = 13
    SIGNED32 = 14
    UNSIGNED64 = 15
    SIGNED64 = 16
    FLOAT32 = 17
    DOUBLE64 = 18
    ENUMERATION = 19


class IsolationLevel(enum.IntEnum):
    """Transaction isolation levels."""

    REPEATABLE_READ = 0
    READ_COMMITTED = 1
    READ_UNCOMMITTED = 2
    SERIALIZABLE = 3


class FieldType(enum.IntEnum):
    """Column types as reported by the server protocol."""

    DECIMAL = 0
    TINY = 1
    SHORT = 2
    LONG = 3
    FLOAT = 4
    DOUBLE = 5
    NULL = 6
    TIMESTAMP = 7
    LONGLONG = 8
    INT24 = 9
    DATE = 10
    TIME = 11
    DATETIME = 12
    YEAR = 13
    NEWDATE = 14
    VARCHAR = 15
    BIT = 16
    NEWDECIMAL = 246
    ENUM = 247
    SET = 248
    TINY_BLOB = 249
    MEDIUM_BLOB = 250
    LONG_BLOB = 251
    BLOB = 252
    VAR_STRING = 253
    STRING = 254
    GEOMETRY = 255


_FIXED = {
    FieldType.NULL: ValueType.NULL,
    FieldType.BIT: ValueType.BOOLEAN,
    FieldType.FLOAT: ValueType.FLOAT32,
    FieldType.DECIMAL: ValueType.DECIMAL,
    FieldType.NEWDECIMAL: ValueType.DECIMAL,
    FieldType.DOUBLE: ValueType.DOUBLE64,
    FieldType.NEWDATE: ValueType.DATE,
    FieldType.DATE: ValueType.DATE,
    FieldType.TIME: ValueType.TIME,
    FieldType.TIMESTAMP: ValueType.DATE_TIME,
    FieldType.DATETIME: ValueType.DATE_TIME,
    FieldType.TINY_BLOB: ValueType.BLOB,
    FieldType.MEDIUM_BLOB: ValueType.BLOB,
    FieldType.LONG_BLOB: ValueType.BLOB,
    FieldType.BLOB: ValueType.BLOB,
    FieldType.ENUM: ValueType.ENUMERATION,
}

# (unsigned, signed) value types for integer columns
_INTEGER = {
    FieldType.TINY: (ValueType.UNSIGNED8, ValueType.SIGNED8),
    FieldType.YEAR: (ValueType.UNSIGNED16, ValueType.SIGNED16),
    FieldType.SHORT: (ValueType.UNSIGNED16, ValueType.SIGNED16),
    FieldType.INT24: (ValueType.UNSIGNED32, ValueType.SIGNED32),
    FieldType.LONG: (ValueType.UNSIGNED32, ValueType.SIGNED32),
    FieldType.LONGLONG: (ValueType.UNSIGNED64, ValueType.SIGNED64),
}


def column_value_type(field_type, flags=0):
    """Map a server field type and its flags to the value type it is read as."""
    try:
        field_type = FieldType(field_type)
    except ValueError:
        return ValueType.STRING

    if field_type in _FIXED:
        return _FIXED[field_type]

    if field_type in _INTEGER:
        unsigned, signed = _INTEGER[field_type]
        return unsigned if flags & UNSIGNED_FLAG == UNSIGNED_FLAG else signed

    return ValueType.STRING