"""Exceptions raised by the client."""

from __future__ import annotations


class MariaDBError(Exception):
    """Base error carrying a message and a numeric error id."""

    def __init__(self, error="Exception not defined", error_id=0):
        super().__init__(error)
        self.error = error
        self.error_id = error_id

    def __str__(self):
        return self.error


class DateTimeError(MariaDBError):
    """Raised for a date/time value outside its valid range."""

    def __init__(self, year, month, day, hour, minute, second, millisecond):
        self.year = year
        self.month = month
        self.day = day
        self.hour = hour
        self.minute = minute
        self.second = second
        self.millisecond = millisecond
        super().__init__(
            f"invalid date/time {year:04d}-{month:02d}-{day:02d} "
            f"{hour:02d}:{minute:02d}:{second:02d}.{millisecond:03d}"
        )


class TimeError(MariaDBError):
    """Raised for a time value outside its valid range."""

    def __init__(self, hour, minute, second, millisecond):
        self.hour = hour
        self.minute = minute
        self.second = second
        self.millisecond = millisecond
        super().__init__(f"invalid time {hour:02d}:{minute:02d}:{second:02d}.{millisecond:03d}")


class ConnectionFailure(MariaDBError):
    """Raised for errors reported on a connection."""


class StatementError(MariaDBError):
    """Raised for errors reported on a prepared statement."""