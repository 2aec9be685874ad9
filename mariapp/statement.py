"""Prepared statements with typed parameter binding."""

from __future__ import annotations

import operator
import re
import struct
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from mariapp.exceptions import MariaDBError, StatementError
from mariapp.result_set import ResultSet
from mariapp.sqltime import Time
from mariapp.types import FieldType

_ER_EMPTY_QUERY = 1065

_QUOTED = re.compile(r"'(?:[^'\\]|\\.)*'|\"(?:[^\"\\]|\\.)*\"|`[^`]*`", re.DOTALL)


def _count_placeholders(query):
    """Count ``?`` placeholders that are not inside quoted strings or identifiers."""
    return _QUOTED.sub("", query).count("?")


def _integer(value, bits, unsigned):
    value = operator.index(value)
    if unsigned:
        low, high = 0, 2**bits - 1
    else:
        low, high = -(2 ** (bits - 1)), 2 ** (bits - 1) - 1
    if not low <= value <= high:
        kind = "unsigned" if unsigned else "signed"
        raise OverflowError(f"{value} does not fit in a {kind} {bits}-bit integer")
    return value


@dataclass(frozen=True)
class Parameter:
    """A value bound to one placeholder, with the wire type it is sent as."""

    type: FieldType = FieldType.NULL
    value: Any = None
    unsigned: bool = False


@dataclass(frozen=True)
class StatementExecutor:
    """Runs a prepared query through ``handler(query, parameters)``.

    The handler returns a :class:`ResultSet`, a mapping with the optional keys
    ``affected_rows``, ``insert_id`` and ``result_set``, or None.
    """

    handler: Callable[[str, tuple], Any]

    def run(self, query, parameters):
        """Run the query; return ``(affected_rows, insert_id, result_set)``."""
        try:
            outcome = self.handler(query, tuple(parameters))
        except MariaDBError:
            raise
        except Exception as exc:
            raise StatementError(str(exc), 0) from exc

        if outcome is None:
            return 0, 0, None
        if isinstance(outcome, ResultSet):
            return outcome.row_count(), 0, outcome
        if isinstance(outcome, Mapping):
            return (
                int(outcome.get("affected_rows", 0)),
                int(outcome.get("insert_id", 0)),
                outcome.get("result_set"),
            )
        raise TypeError(f"unexpected statement outcome {outcome!r}")


class Statement:
    """A query with ``?`` placeholders whose bindings persist between runs."""

    def __init__(self, executor, query, parameter_count=None):
        if not query.strip():
            raise StatementError("Query was empty", _ER_EMPTY_QUERY)
        if parameter_count is None:
            parameter_count = _count_placeholders(query)
        elif parameter_count < 0:
            raise ValueError("parameter count must not be negative")
        self._executor = executor
        self._sql = query
        self._parameters = [Parameter()] * parameter_count

    @property
    def sql(self):
        """The query text."""
        return self._sql

    def parameters(self):
        """The currently bound parameters, in placeholder order."""
        return tuple(self._parameters)

    def _bind(self, index, parameter):
        if not 0 <= index < len(self._parameters):
            raise IndexError("Field index out of range")
        self._parameters[index] = parameter

    def _check_index(self, index):
        if not 0 <= index < len(self._parameters):
            raise IndexError("Field index out of range")

    def set_blob(self, index, stream):
        """Bind the whole content of a binary stream; None leaves the binding as is."""
        self._check_index(index)
        if stream is None:
            return
        stream.seek(0)
        content = stream.read()
        if isinstance(content, str):
            content = content.encode("utf-8", errors="surrogateescape")
        self._bind(index, Parameter(FieldType.BLOB, bytes(content)))

    def set_data(self, index, data):
        """Bind a byte buffer; None leaves the binding as is."""
        self._check_index(index)
        if data is None:
            return
        self._bind(index, Parameter(FieldType.BLOB, bytes(data)))

    def set_time(self, index, value):
        self._bind(
            index,
            Parameter(FieldType.TIME, Time(value.hour, value.minute, value.second, value.millisecond)),
        )

    def set_decimal(self, index, value):
        self._bind(index, Parameter(FieldType.STRING, str(value)))

    def set_string(self, index, value):
        self._bind(index, Parameter(FieldType.STRING, str(value)))

    def set_boolean(self, index, value):
        self._bind(index, Parameter(FieldType.TINY, int(bool(value))))

    def set_unsigned8(self, index, value):
        self._bind(index, Parameter(FieldType.TINY, _integer(value, 8, True), True))

    def set_signed8(self, index, value):
        self._bind(index, Parameter(FieldType.TINY, _integer(value, 8, False)))

    def set_unsigned16(self, index, value):
        self._bind(index, Parameter(FieldType.SHORT, _integer(value, 16, True), True))

    def set_signed16(self, index, value):
        self._bind(index, Parameter(FieldType.SHORT, _integer(value, 16, False)))

    def set_unsigned32(self, index, value):
        self._bind(index, Parameter(FieldType.LONG, _integer(value, 32, True), True))

    def set_signed32(self, index, value):
        self._bind(index, Parameter(FieldType.LONG, _integer(value, 32, False)))

    def set_unsigned64(self, index, value):
        self._bind(index, Parameter(FieldType.LONGLONG, _integer(value, 64, True), True))

    def set_signed64(self, index, value):
        self._bind(index, Parameter(FieldType.LONGLONG, _integer(value, 64, False)))

    def set_float(self, index, value):
        single = struct.unpack("<f", struct.pack("<f", float(value)))[0]
        self._bind(index, Parameter(FieldType.FLOAT, single))

    def set_double(self, index, value):
        self._bind(index, Parameter(FieldType.DOUBLE, float(value)))

    def set_null(self, index):
        self._bind(index, Parameter())

    def execute(self):
        """Run the statement; return the number of affected rows."""
        affected, _, _ = self._executor.run(self._sql, self.parameters())
        return affected

    def insert(self):
        """Run the statement; return the id of the inserted row."""
        _, insert_id, _ = self._executor.run(self._sql, self.parameters())
        return insert_id

    def query(self):
        """Run the statement; return its rows as a :class:`ResultSet`."""
        _, _, result_set = self._executor.run(self._sql, self.parameters())
        return result_set if result_set is not None else ResultSet((), None)