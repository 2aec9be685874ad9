"""Transactions and save points on a connection."""

from __future__ import annotations

import itertools

from mariapp.types import IsolationLevel

_ISOLATION = {
    IsolationLevel.REPEATABLE_READ: "SET TRANSACTION ISOLATION LEVEL REPEATABLE READ;",
    IsolationLevel.READ_COMMITTED: "SET TRANSACTION ISOLATION LEVEL READ COMMITTED;",
    IsolationLevel.READ_UNCOMMITTED: "SET TRANSACTION ISOLATION LEVEL READ UNCOMMITTED;",
    IsolationLevel.SERIALIZABLE: "SET TRANSACTION ISOLATION LEVEL SERIALIZABLE;",
}

_START = ("START TRANSACTION;", "START TRANSACTION WITH CONSISTENT SNAPSHOT;")

_SAVE_POINT_CREATE = "SAVEPOINT "
_SAVE_POINT_ROLLBACK = "ROLLBACK TO SAVEPOINT "
_SAVE_POINT_RELEASE = "RELEASE SAVEPOINT "

_save_point_ids = itertools.count(1)


class Transaction:
    """A transaction started on ``connection``.

    The connection needs ``execute(sql)``, ``commit()`` and ``rollback()``.
    Leaving a ``with`` block without committing rolls the transaction back.
    """

    def __init__(self, connection, level=IsolationLevel.REPEATABLE_READ, consistent_snapshot=False):
        level = IsolationLevel(level)
        connection.execute(_ISOLATION[level])
        connection.execute(_START[bool(consistent_snapshot)])
        self._connection = connection
        self._save_points = []

    @property
    def active(self):
        """True until the transaction is committed or rolled back."""
        return self._connection is not None

    def _detach(self):
        for save_point in self._save_points:
            save_point._transaction = None
        self._save_points.clear()

    def commit(self):
        """Commit; does nothing if the transaction has already ended."""
        if self._connection is None:
            return
        self._connection.commit()
        self._detach()
        self._connection = None

    def rollback(self):
        """Roll back; does nothing if the transaction has already ended."""
        if self._connection is None:
            return
        self._connection.rollback()
        self._detach()
        self._connection = None

    def create_save_point(self):
        """A new save point, or None if the transaction has already ended."""
        if self._connection is None:
            return None
        return SavePoint(self)

    def _remove(self, save_point):
        self._save_points.remove(save_point)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.rollback()
        return False


class SavePoint:
    """A named save point inside a transaction.

    Leaving a ``with`` block without committing rolls back to the save point.
    """

    def __init__(self, transaction):
        if not transaction.active:
            raise ValueError("transaction is no longer active")
        self.name = f"SP{next(_save_point_ids)}"
        transaction._connection.execute(_SAVE_POINT_CREATE + self.name)
        self._transaction = transaction
        transaction._save_points.append(self)

    @property
    def active(self):
        """True until the save point is released, rolled back or its transaction ends."""
        return self._transaction is not None

    def _finish(self, command):
        transaction = self._transaction
        if transaction is None:
            return
        transaction._remove(self)
        self._transaction = None
        transaction._connection.execute(command + self.name)

    def commit(self):
        """Release the save point, keeping its changes."""
        self._finish(_SAVE_POINT_RELEASE)

    def rollback(self):
        """Undo the changes made since the save point."""
        self._finish(_SAVE_POINT_ROLLBACK)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.rollback()
        return False