"""Background job that runs one query or statement on its own connection."""

from __future__ import annotations

import enum
import logging

_log = logging.getLogger(__name__)


class Status(enum.IntEnum):
    """Lifecycle of a worker."""

    WAITING = 0
    EXECUTING = 1
    SUCCEED = 2
    FAILED = 3
    REMOVED = 4


class Command(enum.IntEnum):
    """What a worker does with its query."""

    EXECUTE = 0
    INSERT = 1
    QUERY = 2


class Worker:
    """Runs a query through a fresh connection, or a prepared statement.

    ``connect`` is called to obtain a connection offering ``set_auto_commit``,
    ``connect``, ``execute``, ``insert`` and ``query``.  A worker with a
    statement runs the statement instead and needs no connection.
    """

    def __init__(
        self,
        connect=None,
        handle=0,
        keep_handle=False,
        command=Command.QUERY,
        query="",
        statement=None,
    ):
        self.keep_handle = keep_handle
        self.handle = handle
        self.status = Status.WAITING if handle > 0 else Status.REMOVED
        self.command = Command(command)
        self.query = query
        self.statement = statement
        self.result = 0
        self.result_set = None
        self.error = None
        self._connect = connect

    def _run_statement(self):
        if self.command is Command.EXECUTE:
            self.result = self.statement.execute()
        elif self.command is Command.INSERT:
            self.result = self.statement.insert()
        else:
            self.result_set = self.statement.query()

    def _run_query(self):
        if self._connect is None:
            raise ValueError("worker has neither a statement nor a way to connect")
        connection = self._connect()
        connection.set_auto_commit(True)
        connection.connect()
        if self.command is Command.EXECUTE:
            self.result = connection.execute(self.query)
        elif self.command is Command.INSERT:
            self.result = connection.insert(self.query)
        else:
            self.result_set = connection.query(self.query)

    def execute(self):
        """Do the job; any error is recorded in ``error`` and marks the worker failed."""
        self.status = Status.EXECUTING
        try:
            if self.statement is not None:
                self._run_statement()
            else:
                self._run_query()
        except Exception as exc:
            _log.error("worker %s failed: %s", self.handle, exc)
            self.error = exc
            self.status = Status.FAILED
        else:
            self.status = Status.SUCCEED