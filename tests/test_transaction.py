import re

import pytest

from mariapp.transaction import SavePoint, Transaction
from mariapp.types import IsolationLevel


class FakeConnection:
    """Rows in memory with transaction and save point semantics."""

    def __init__(self):
        self.rows = []
        self.log = []
        self._start = None
        self._marks = {}

    def execute(self, sql):
        self.log.append(sql)
        if sql.startswith("START TRANSACTION"):
            self._start = len(self.rows)
        elif sql.startswith("SAVEPOINT "):
            self._marks[sql.split()[-1]] = len(self.rows)
        elif sql.startswith("ROLLBACK TO SAVEPOINT "):
            del self.rows[self._marks.pop(sql.split()[-1]) :]
        elif sql.startswith("RELEASE SAVEPOINT "):
            self._marks.pop(sql.split()[-1])
        return 0

    def insert(self, value):
        self.rows.append(value)
        return len(self.rows)

    def commit(self):
        self.log.append("COMMIT")
        self._start = None
        self._marks.clear()

    def rollback(self):
        self.log.append("ROLLBACK")
        if self._start is not None:
            del self.rows[self._start :]
        self._start = None
        self._marks.clear()


def test_transaction_commit():
    con = FakeConnection()
    trx = Transaction(con)
    assert con.insert("test") != 0
    trx.commit()
    assert len(con.rows) == 1
    assert con.log[-1] == "COMMIT"
    assert trx.active is False


def test_transaction_rollback_on_exit():
    con = FakeConnection()
    with Transaction(con):
        con.insert("test2")
    assert len(con.rows) == 0
    assert con.log[-1] == "ROLLBACK"


def test_commit_inside_with_block_is_kept():
    con = FakeConnection()
    with Transaction(con) as trx:
        con.insert("test")
        trx.commit()
    assert len(con.rows) == 1
    assert "ROLLBACK" not in con.log


def test_save_point_commit():
    con = FakeConnection()
    trx = Transaction(con)
    with trx.create_save_point() as sp:
        assert con.insert("test") != 0
        sp.commit()
    trx.commit()
    assert len(con.rows) == 1
    assert f"RELEASE SAVEPOINT {sp.name}" in con.log


def test_save_point_no_commit():
    con = FakeConnection()
    trx = Transaction(con)
    with trx.create_save_point() as sp:
        assert con.insert("test") != 0
    trx.commit()
    assert len(con.rows) == 0
    assert f"ROLLBACK TO SAVEPOINT {sp.name}" in con.log


def test_default_start_statements():
    con = FakeConnection()
    Transaction(con)
    assert con.log == [
        "SET TRANSACTION ISOLATION LEVEL REPEATABLE READ;",
        "START TRANSACTION;",
    ]


@pytest.mark.parametrize(
    "level, sql",
    [
        (IsolationLevel.REPEATABLE_READ, "SET TRANSACTION ISOLATION LEVEL REPEATABLE READ;"),
        (IsolationLevel.READ_COMMITTED, "SET TRANSACTION ISOLATION LEVEL READ COMMITTED;"),
        (IsolationLevel.READ_UNCOMMITTED, "SET TRANSACTION ISOLATION LEVEL READ UNCOMMITTED;"),
        (IsolationLevel.SERIALIZABLE, "SET TRANSACTION ISOLATION LEVEL SERIALIZABLE;"),
    ],
)
def test_isolation_levels(level, sql):
    con = FakeConnection()
    Transaction(con, level, True)
    assert con.log == [sql, "START TRANSACTION WITH CONSISTENT SNAPSHOT;"]


def test_invalid_isolation_level():
    with pytest.raises(ValueError):
        Transaction(FakeConnection(), 9)


def test_save_point_names_are_unique():
    trx = Transaction(FakeConnection())
    first = trx.create_save_point()
    second = trx.create_save_point()
    assert re.fullmatch(r"SP\d+", first.name)
    assert re.fullmatch(r"SP\d+", second.name)
    assert first.name != second.name


def test_save_points_detached_after_commit():
    con = FakeConnection()
    trx = Transaction(con)
    sp = trx.create_save_point()
    trx.commit()
    logged = list(con.log)
    sp.commit()
    sp.rollback()
    assert sp.active is False
    assert con.log == logged


def test_no_save_point_after_end():
    trx = Transaction(FakeConnection())
    trx.rollback()
    assert trx.create_save_point() is None
    with pytest.raises(ValueError):
        SavePoint(trx)


def test_commit_twice_is_harmless():
    con = FakeConnection()
    trx = Transaction(con)
    trx.commit()
    trx.commit()
    trx.rollback()
    assert con.log.count("COMMIT") == 1
    assert "ROLLBACK" not in con.log


def test_nested_save_points_roll_back_independently():
    con = FakeConnection()
    trx = Transaction(con)
    outer = trx.create_save_point()
    con.insert("a")
    inner = trx.create_save_point()
    con.insert("b")
    inner.rollback()
    outer.commit()
    trx.commit()
    assert con.rows == ["a"]