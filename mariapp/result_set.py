"""Rows returned by a query, with typed access to their columns."""

from __future__ import annotations

import io
from dataclasses import dataclass

from mariapp.conversion import checked_cast, string_cast
from mariapp.data import Data
from mariapp.exceptions import ConnectionFailure
from mariapp.numeric import Decimal
from mariapp.sqltime import Time
from mariapp.types import FieldType, ValueType, column_value_type

_TEXTUAL = (bytes, bytearray, memoryview, str)

_SAME_SIZE = {
    ValueType.UNSIGNED8: {ValueType.UNSIGNED8, ValueType.SIGNED8},
    ValueType.SIGNED8: {ValueType.UNSIGNED8, ValueType.SIGNED8},
    ValueType.UNSIGNED16: {ValueType.UNSIGNED16, ValueType.SIGNED16},
    ValueType.SIGNED16: {ValueType.UNSIGNED16, ValueType.SIGNED16},
    ValueType.UNSIGNED32: {ValueType.UNSIGNED32, ValueType.SIGNED32},
    ValueType.SIGNED32: {ValueType.UNSIGNED32, ValueType.SIGNED32},
    ValueType.UNSIGNED64: {ValueType.UNSIGNED64, ValueType.SIGNED64},
    ValueType.SIGNED64: {ValueType.UNSIGNED64, ValueType.SIGNED64},
}

_EXACT = frozenset(
    {
        ValueType.FLOAT32,
        ValueType.DOUBLE64,
        ValueType.DECIMAL,
        ValueType.TIME,
        ValueType.DATE_TIME,
        ValueType.DATE,
        ValueType.ENUMERATION,
    }
)

_BYTE_LIKE = frozenset({ValueType.STRING, ValueType.BLOB, ValueType.DATA, ValueType.NULL})


def _as_bytes(value):
    if value is None:
        return b""
    if isinstance(value, str):
        return value.encode("utf-8", errors="surrogateescape")
    if isinstance(value, (bytes, bytearray, memoryview, Data)):
        return bytes(value)
    return str(value).encode("utf-8", errors="surrogateescape")


def _as_text(value):
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview, Data)):
        return bytes(value).decode("utf-8", errors="surrogateescape")
    return str(value)


@dataclass(frozen=True)
class Field:
    """Description of one result column."""

    name: str
    type: FieldType = FieldType.VAR_STRING
    flags: int = 0

    @property
    def value_type(self):
        """The value type this column is read as."""
        return column_value_type(self.type, self.flags)


class ResultSet:
    """A cursor over result rows.

    Each row holds one value per field: text or bytes as sent by the server,
    ``None`` for NULL, or an already decoded Python value.  Passing ``rows=None``
    describes a statement that produced no result at all.
    """

    def __init__(self, fields=(), rows=None):
        self._fields = tuple(fields)
        self._indexes = {field.name: i for i, field in enumerate(self._fields)}
        if rows is None:
            self._rows = None
        else:
            self._rows = [tuple(row) for row in rows]
            for row in self._rows:
                if len(row) != len(self._fields):
                    raise ValueError(
                        f"row has {len(row)} values, expected {len(self._fields)}"
                    )
        self._cursor = 0
        self._row = None

    def __iter__(self):
        """Advance through the remaining rows, yielding each as a tuple."""
        while self.next():
            yield self._row

    def __len__(self):
        return self.row_count()

    # columns

    def column_count(self):
        return len(self._fields)

    def column_index(self, name):
        """Index of the column called ``name`` (case sensitive)."""
        try:
            return self._indexes[name]
        except KeyError:
            raise KeyError(f"no column named {name!r}") from None

    def _check_index(self, index):
        if not 0 <= index < len(self._fields):
            raise IndexError("Column index out of range")

    def column_type(self, index):
        self._check_index(index)
        return self._fields[index].value_type

    def column_name(self, index):
        self._check_index(index)
        return self._fields[index].name

    def column_size(self, index):
        """Byte length of the column's value in the current row."""
        self._check_index(index)
        self._check_row_fetched()
        return len(_as_bytes(self._row[index]))

    # rows

    def row_index(self):
        """Position of the row cursor: the index of the next row to be read."""
        return self._cursor

    def row_count(self):
        return 0 if self._rows is None else len(self._rows)

    def next(self):
        """Fetch the next row; return False when there is none."""
        if self._rows is None or self._cursor >= len(self._rows):
            self._row = None
            return False
        self._row = self._rows[self._cursor]
        self._cursor += 1
        return True

    def set_row_index(self, index):
        """Seek to row ``index`` and fetch it."""
        if index < 0:
            raise IndexError("Row index out of range")
        self._cursor = index
        return self.next()

    # typed access

    def _check_row_fetched(self):
        if self._row is None:
            raise IndexError("No row was fetched")

    def _check_type(self, index, requested):
        actual = self.column_type(index)
        if requested in _EXACT:
            error = actual != requested
        elif requested in _SAME_SIZE:
            error = actual not in _SAME_SIZE[requested]
        elif requested is ValueType.BOOLEAN:
            error = actual not in (ValueType.BOOLEAN, ValueType.SIGNED8)
        elif requested in (ValueType.STRING, ValueType.BLOB, ValueType.DATA):
            error = actual not in _BYTE_LIKE
        else:
            error = False

        if error:
            raise ConnectionFailure(
                f"type error: requested type {requested.name.lower()} "
                f"does not match actual type {actual.name.lower()}",
                12,
            )

    def _value(self, column, requested):
        index = self.column_index(column) if isinstance(column, str) else column
        self._check_row_fetched()
        self._check_type(index, requested)
        self._check_index(index)
        return self._row[index]

    def _number(self, column, kind):
        value = self._value(column, kind)
        if value is None or isinstance(value, _TEXTUAL):
            return string_cast(_as_text(value), kind)
        return checked_cast(value, kind)

    def get_blob(self, column):
        """The value as a binary stream, or None when empty."""
        content = _as_bytes(self._value(column, ValueType.BLOB))
        return io.BytesIO(content) if content else None

    def get_data(self, column):
        """The value as a :class:`Data` buffer, or None when empty."""
        content = _as_bytes(self._value(column, ValueType.DATA))
        return Data(content) if content else None

    def get_string(self, column):
        return _as_text(self._value(column, ValueType.STRING))

    def get_time(self, column):
        value = self._value(column, ValueType.TIME)
        if isinstance(value, Time):
            return Time(value.hour, value.minute, value.second, value.millisecond)
        return Time.from_string(_as_text(value))

    def get_decimal(self, column):
        value = self._value(column, ValueType.DECIMAL)
        if isinstance(value, Decimal):
            return value
        return Decimal(_as_text(value))

    def get_boolean(self, column):
        value = self._value(column, ValueType.BOOLEAN)
        if value is None or isinstance(value, _TEXTUAL):
            return string_cast(_as_text(value), ValueType.BOOLEAN)
        return bool(value)

    def get_unsigned8(self, column):
        return self._number(column, ValueType.UNSIGNED8)

    def get_signed8(self, column):
        return self._number(column, ValueType.SIGNED8)

    def get_unsigned16(self, column):
        return self._number(column, ValueType.UNSIGNED16)

    def get_signed16(self, column):
        return self._number(column, ValueType.SIGNED16)

    def get_unsigned32(self, column):
        return self._number(column, ValueType.UNSIGNED32)

    def get_signed32(self, column):
        return self._number(column, ValueType.SIGNED32)

    def get_unsigned64(self, column):
        return self._number(column, ValueType.UNSIGNED64)

    def get_signed64(self, column):
        return self._number(column, ValueType.SIGNED64)

    def get_float(self, column):
        return self._number(column, ValueType.FLOAT32)

    def get_double(self, column):
        return self._number(column, ValueType.DOUBLE64)

    def is_null(self, column):
        return self._value(column, ValueType.NULL) is None