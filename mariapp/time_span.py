"""Durations with day, hour, minute, second and millisecond parts."""

from __future__ import annotations

import functools


def _check(value, limit, name):
    if not 0 <= value <= limit:
        raise ValueError(f"{name} must be < {limit + 1}")
    return value


@functools.total_ordering
class TimeSpan:
    """A signed duration; each part is bounded, the sign is held separately."""

    __slots__ = ("_days", "_hours", "_minutes", "_seconds", "_milliseconds", "negative")

    def __init__(self, days=0, hours=0, minutes=0, seconds=0, milliseconds=0, negative=False):
        self.negative = bool(negative)
        self.days = days
        self.hours = hours
        self.minutes = minutes
        self.seconds = seconds
        self.milliseconds = milliseconds

    @property
    def days(self):
        return self._days

    @days.setter
    def days(self, value):
        if value < 0:
            raise ValueError("Days must not be negative")
        self._days = value

    @property
    def hours(self):
        return self._hours

    @hours.setter
    def hours(self, value):
        self._hours = _check(value, 23, "Hours")

    @property
    def minutes(self):
        return self._minutes

    @minutes.setter
    def minutes(self, value):
        self._minutes = _check(value, 59, "Minutes")

    @property
    def seconds(self):
        return self._seconds

    @seconds.setter
    def seconds(self, value):
        self._seconds = _check(value, 60, "Seconds")

    @property
    def milliseconds(self):
        return self._milliseconds

    @milliseconds.setter
    def milliseconds(self, value):
        self._milliseconds = _check(value, 999, "Milliseconds")

    def _parts(self):
        return (self._days, self._hours, self._minutes, self._seconds, self._milliseconds)

    def compare(self, other):
        """Return -1, 0 or 1; negative spans order before positive ones."""
        if self.negative and not other.negative:
            return -1
        if not self.negative and other.negative:
            return 1
        if self.zero() and other.zero():
            return 0
        mine, theirs = self._parts(), other._parts()
        if mine < theirs:
            return -1
        return 0 if mine == theirs else 1

    def zero(self):
        """True if every part is zero."""
        return not any(self._parts())

    def total_hours(self):
        return self._days * 24 + self._hours

    def total_minutes(self):
        return self.total_hours() * 60 + self._minutes

    def total_seconds(self):
        return self.total_minutes() * 60 + self._seconds

    def total_milliseconds(self):
        return self.total_seconds() * 1000 + self._milliseconds

    def __eq__(self, other):
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other):
        if not isinstance(other, TimeSpan):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self):
        return hash((self.negative, *self._parts()))

    def __copy__(self):
        return TimeSpan(*self._parts(), negative=self.negative)

    def __repr__(self):
        days, hours, minutes, seconds, millis = self._parts()
        return (
            f"TimeSpan(days={days}, hours={hours}, minutes={minutes}, "
            f"seconds={seconds}, milliseconds={millis}, negative={self.negative})"
        )

    def __str__(self):
        prefix = "negative " if self.negative else ""
        return (
            f"{prefix}{self._days} days, {self._hours} hours, {self._minutes} minutes, "
            f"{self._seconds} seconds, {self._milliseconds} milliseconds"
        )