"""Time of day with millisecond precision, as stored in SQL TIME columns."""

from __future__ import annotations

import functools
import re
import time as _clock

from mariapp.exceptions import TimeError
from mariapp.time_span import TimeSpan

MS_PER_SEC = 1000
MS_PER_MIN = MS_PER_SEC * 60
MS_PER_HOUR = MS_PER_MIN * 60
MS_PER_DAY = MS_PER_HOUR * 24

_C_SPACE = " \t\n\v\f\r"
_NUMBER = re.compile(r"\+?[0-9]+")
_U16_MAX = 0xFFFF


def _skip_space(text, pos):
    while pos < len(text) and text[pos] in _C_SPACE:
        pos += 1
    return pos


def _read_number(text, pos):
    """Read an unsigned 16-bit number after optional whitespace."""
    match = _NUMBER.match(text, _skip_space(text, pos))
    if match is None:
        raise ValueError("invalid time format")
    value = int(match.group())
    if value > _U16_MAX:
        raise ValueError("invalid time format")
    return value, match.end()


def _read_delimiter(text, pos):
    """Skip whitespace and consume any single character."""
    pos = _skip_space(text, pos)
    if pos >= len(text):
        raise ValueError("invalid time format")
    return pos + 1


def _carry(amount, unit, current):
    """Split ``amount`` into a carry for the next unit and the new value of this one."""
    magnitude = abs(amount) // unit
    carry = -magnitude if amount < 0 else magnitude
    total = amount - carry * unit + current
    if total >= unit:
        carry += 1
    elif total < 0:
        carry -= 1
    return carry, total % unit


@functools.total_ordering
class Time:
    """A time of day; seconds may reach 61 to allow for leap seconds.

    The constructor stores the given parts unchecked (see :meth:`is_valid`);
    assigning a single part raises :class:`TimeError` when it is out of range.
    """

    __slots__ = ("_hour", "_minute", "_second", "_millisecond")

    def __init__(self, hour=0, minute=0, second=0, millisecond=0):
        self._hour = hour
        self._minute = minute
        self._second = second
        self._millisecond = millisecond

    @classmethod
    def from_string(cls, text):
        """Parse ``hh[:mm[:ss[.nnn]]]`` where each delimiter may be any character."""
        hours, pos = _read_number(text, 0)
        if hours >= 24:
            raise ValueError("invalid time format")
        if pos == len(text):
            return cls(hours)

        pos = _read_delimiter(text, pos)
        minutes, pos = _read_number(text, pos)
        if minutes >= 60:
            raise ValueError("invalid time format")
        if pos == len(text):
            return cls(hours, minutes)

        pos = _read_delimiter(text, pos)
        seconds, pos = _read_number(text, pos)
        if seconds >= 62:
            raise ValueError("invalid time format")
        if pos == len(text):
            return cls(hours, minutes, seconds)

        pos = _read_delimiter(text, pos)
        millis, _ = _read_number(text, pos)
        return cls(hours, minutes, seconds, millis)

    @classmethod
    def from_timestamp(cls, timestamp):
        """The local time of day of a POSIX timestamp, without milliseconds."""
        parts = _clock.localtime(int(timestamp))
        return cls(parts.tm_hour, parts.tm_min, parts.tm_sec)

    @property
    def hour(self):
        return self._hour

    @hour.setter
    def hour(self, value):
        if not 0 <= value <= 23:
            raise TimeError(value, self._minute, self._second, self._millisecond)
        self._hour = value

    @property
    def minute(self):
        return self._minute

    @minute.setter
    def minute(self, value):
        if not 0 <= value <= 59:
            raise TimeError(self._hour, value, self._second, self._millisecond)
        self._minute = value

    @property
    def second(self):
        return self._second

    @second.setter
    def second(self, value):
        if not 0 <= value <= 61:
            raise TimeError(self._hour, self._minute, value, self._millisecond)
        self._second = value

    @property
    def millisecond(self):
        return self._millisecond

    @millisecond.setter
    def millisecond(self, value):
        if not 0 <= value <= 999:
            raise TimeError(self._hour, self._minute, self._second, value)
        self._millisecond = value

    def _parts(self):
        return (self._hour, self._minute, self._second, self._millisecond)

    def _copy(self):
        return Time(*self._parts())

    def compare(self, other):
        """Return -1, 0 or 1 as this time is before, equal to or after ``other``."""
        mine, theirs = self._parts(), other._parts()
        if mine < theirs:
            return -1
        return 0 if mine == theirs else 1

    def __eq__(self, other):
        if not isinstance(other, Time):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other):
        if not isinstance(other, Time):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self):
        return hash(self._parts())

    def is_valid(self):
        """True if every part is within its limits."""
        return Time.valid_time(*self._parts())

    @staticmethod
    def valid_time(hour, minute, second, millisecond):
        """True if the parts form a valid time; seconds may go up to 61."""
        return (
            0 <= hour < 24 and 0 <= minute < 60 and 0 <= second <= 61 and 0 <= millisecond < 1000
        )

    def add_hours(self, hours):
        """A copy moved by ``hours``, wrapping around the day."""
        result = self._copy()
        if hours == 0:
            return result
        result.hour = (hours + self._hour) % 24
        return result

    def add_minutes(self, minutes):
        """A copy moved by ``minutes``, carrying into hours."""
        result = self._copy()
        if minutes == 0:
            return result
        hours, value = _carry(minutes, 60, self._minute)
        if hours:
            result = result.add_hours(hours)
        result.minute = value
        return result

    def add_seconds(self, seconds):
        """A copy moved by ``seconds``, carrying into minutes."""
        result = self._copy()
        if seconds == 0:
            return result
        minutes, value = _carry(seconds, 60, self._second)
        if minutes:
            result = result.add_minutes(minutes)
        result.second = value
        return result

    def add_milliseconds(self, milliseconds):
        """A copy moved by ``milliseconds``, carrying into seconds."""
        result = self._copy()
        if milliseconds == 0:
            return result
        seconds, value = _carry(milliseconds, 1000, self._millisecond)
        if seconds:
            result = result.add_seconds(seconds)
        result.millisecond = value
        return result

    def add(self, span):
        """A copy moved by the time-of-day parts of ``span``; days are ignored."""
        sign = -1 if span.negative else 1
        return (
            self.add_hours(sign * span.hours)
            .add_minutes(sign * span.minutes)
            .add_seconds(sign * span.seconds)
            .add_milliseconds(sign * span.milliseconds)
        )

    def subtract(self, span):
        """A copy moved back by ``span``."""
        negated = TimeSpan(
            span.days, span.hours, span.minutes, span.seconds, span.milliseconds, not span.negative
        )
        return self.add(negated)

    def time_between(self, other):
        """The span from ``other`` to this time; negative if ``other`` is later."""
        if other == self:
            return TimeSpan()

        if other > self:
            span = other.time_between(self)
            span.negative = True
            return span

        ms = self._hour * MS_PER_HOUR + self._minute * MS_PER_MIN
        ms += self._second * MS_PER_SEC + self._millisecond
        other_ms = other._hour * MS_PER_HOUR + other._minute * MS_PER_MIN
        other_ms += other._second * MS_PER_SEC + other._millisecond

        total = MS_PER_DAY - (other_ms - ms) if other_ms > ms else ms - other_ms

        hours, total = divmod(total, MS_PER_HOUR)
        minutes, total = divmod(total, MS_PER_MIN)
        seconds, total = divmod(total, MS_PER_SEC)
        return TimeSpan(0, hours, minutes, seconds, total, False)

    def mktime(self):
        """Local POSIX timestamp of this time on a fixed reference date (year 3800, Jan 1)."""
        return int(
            _clock.mktime((3800, 1, 1, self._hour, self._minute, self._second, 0, 0, -1))
        )

    def diff_time(self, other):
        """Seconds from ``other`` to this time, ignoring milliseconds."""
        return float(self.mktime() - other.mktime())

    def str_time(self, with_millisecond=False):
        """Format as ``hh:mm:ss`` with an optional ``.nnn`` suffix."""
        text = f"{self._hour:02d}:{self._minute:02d}:{self._second:02d}"
        if with_millisecond:
            text += f".{self._millisecond:03d}"
        return text

    @classmethod
    def _current(cls, convert):
        ns = _clock.time_ns()
        parts = convert(ns // 1_000_000_000)
        millis = (ns // 1_000_000) % 1000
        return cls(parts.tm_hour, parts.tm_min, parts.tm_sec).add_milliseconds(millis)

    @classmethod
    def now(cls):
        """The current local time of day."""
        return cls._current(_clock.localtime)

    @classmethod
    def now_utc(cls):
        """The current time of day in UTC."""
        return cls._current(_clock.gmtime)

    def __repr__(self):
        return (
            f"Time(hour={self._hour}, minute={self._minute}, "
            f"second={self._second}, millisecond={self._millisecond})"
        )

    def __str__(self):
        return self.str_time(True)