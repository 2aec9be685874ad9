import pytest

from mariapp.exceptions import (
    ConnectionFailure,
    DateTimeError,
    MariaDBError,
    StatementError,
    TimeError,
)


def test_base_defaults():
    err = MariaDBError()
    assert str(err) == "Exception not defined"
    assert err.error_id == 0


def test_base_with_message_and_id():
    err = MariaDBError("type error", 12)
    assert str(err) == "type error"
    assert err.error == "type error"
    assert err.error_id == 12


@pytest.mark.parametrize("cls", [ConnectionFailure, StatementError])
def test_subclasses_keep_message_and_id(cls):
    err = cls("broken", 2006)
    assert issubclass(cls, MariaDBError)
    assert err.error_id == 2006
    assert err.error == "broken"
    assert str(err) == "broken"


def test_time_error_keeps_fields():
    err = TimeError(24, 0, 0, 0)
    assert isinstance(err, MariaDBError)
    assert (err.hour, err.minute, err.second, err.millisecond) == (24, 0, 0, 0)
    assert "24" in str(err)


def test_date_time_error_keeps_fields():
    err = DateTimeError(2009, 2, 29, 13, 37, 42, 7)
    assert isinstance(err, MariaDBError)
    assert (err.year, err.month, err.day) == (2009, 2, 29)
    assert (err.hour, err.minute, err.second, err.millisecond) == (13, 37, 42, 7)
    assert "2009" in str(err)


def test_time_error_minute_field():
    err = TimeError(23, 60, 0, 0)
    assert err.hour == 23
    assert err.minute == 60