# mariapp

Building blocks for a MariaDB or MySQL client in Python: typed result sets,
prepared statements with typed parameters, transactions with save points, a
worker that runs one queued query, and value types for SQL `TIME` columns,
durations, decimals and binary data.

The package has no dependencies of its own.

## Installation

```
pip install mariapp
```

## Modules

| Module | Contents |
| --- | --- |
| `mariapp.types` | `ValueType`, `IsolationLevel`, `FieldType`, `UNSIGNED_FLAG`, `column_value_type()` |
| `mariapp.exceptions` | `MariaDBError`, `DateTimeError`, `TimeError`, `ConnectionFailure`, `StatementError` |
| `mariapp.conversion` | `checked_cast()`, `string_cast()` |
| `mariapp.numeric` | `Decimal` |
| `mariapp.data` | `Data` |
| `mariapp.time_span` | `TimeSpan` |
| `mariapp.sqltime` | `Time` |
| `mariapp.result_set` | `Field`, `ResultSet` |
| `mariapp.statement` | `Parameter`, `StatementExecutor`, `Statement` |
| `mariapp.transaction` | `Transaction`, `SavePoint` |
| `mariapp.worker` | `Status`, `Command`, `Worker` |

## Time values

```python
from mariapp.sqltime import Time
from mariapp.time_span import TimeSpan

t = Time.from_string("03:04:05.666")
later = t.add_hours(5)
print(later.str_time(True))        # 08:04:05.666

span = Time(13, 37, 42, 7).time_between(Time(12, 37, 42, 7))
print(span.hours, span.negative)   # 1 False

print(TimeSpan(1, 3, 37, 42, 7, False).total_hours())   # 27
```

`Time.from_string` accepts `hh[:mm[:ss[.nnn]]]`, where each delimiter may be
any character, and raises `ValueError` for text it cannot read. The `Time`
constructor stores its parts unchecked (`is_valid()` tells whether they are in
range); assigning a single part such as `t.hour = 24` raises `TimeError`.
`add_hours`, `add_minutes`, `add_seconds` and `add_milliseconds` return a new
time and wrap around midnight. `Time.now()` and `Time.now_utc()` give the
current time of day.

`TimeSpan` holds days, hours, minutes, seconds and milliseconds with a separate
`negative` flag; a part out of range raises `ValueError`.

## Decimals and binary data

`Decimal` keeps the exact text the server sent and converts on request:

```python
from mariapp.numeric import Decimal

d = Decimal("24.1234")
print(str(d), d.double64())        # 24.1234 24.1234
```

`Data` is a fixed-size byte buffer with `read`, `write`, `seek` and `resize`.
Writes never grow it.

## Result sets

A `ResultSet` is built from column descriptions (`Field`) and rows. Each row
value is the text or bytes the server sent, `None` for NULL, or an already
decoded Python value.

```python
from mariapp.result_set import Field, ResultSet
from mariapp.types import FieldType, UNSIGNED_FLAG

rs = ResultSet(
    [Field("id", FieldType.LONG, UNSIGNED_FLAG), Field("str")],
    [("1", "a"), ("2", None)],
)
while rs.next():
    print(rs.get_unsigned32("id"), rs.get_string(1), rs.is_null("str"))
# 1 a False
# 2  True
```

Columns may be named by index or by name. Iterating over a result set
advances through the remaining rows and yields each as a tuple;
`set_row_index()` seeks to a row and fetches it. A getter whose type does not
fit the column raises `ConnectionFailure` (error id 12); reading before a row
has been fetched raises `IndexError`; an unknown column name raises `KeyError`.

## Statements

A `Statement` holds a query with `?` placeholders and their typed values
(`set_unsigned32`, `set_string`, `set_time`, `set_null`, ...). Bindings persist
between runs. `execute()`, `insert()` and `query()` hand the query and its
parameters to a `StatementExecutor`, which wraps a handler you supply:

```python
from mariapp.statement import Statement, StatementExecutor

def handler(query, parameters):
    return {"affected_rows": 1, "insert_id": 7}

stmt = Statement(StatementExecutor(handler), "INSERT INTO t (preis) VALUES (?)")
stmt.set_unsigned32(0, 299)
print(stmt.insert())               # 7
```

The handler may return a `ResultSet`, a mapping with `affected_rows`,
`insert_id` and `result_set`, or `None`. Exceptions it raises that are not
`MariaDBError` are re-raised as `StatementError`. An empty query raises
`StatementError`; a parameter index out of range raises `IndexError`; an
integer that does not fit its setter raises `OverflowError`.

## Transactions

```python
from mariapp.transaction import Transaction

with Transaction(connection) as trx:
    with trx.create_save_point() as sp:
        connection.execute("INSERT INTO t (str) VALUES ('x')")
        sp.commit()
    trx.commit()
```

The connection object needs `execute(sql)`, `commit()` and `rollback()`. A
transaction or save point left without a commit is rolled back.

## Worker

`Worker` runs one job when its `execute()` is called: a prepared statement, or
a query on a connection obtained from the `connect` callable. The outcome is
kept in `status` (`Status`), `result`, `result_set` and `error`; a failure is
logged and recorded rather than raised.

## What it does not do

The package opens no network connections and speaks no wire protocol: it has
no connection or account classes, so statements run through the executor you
supply and transactions and workers through the connection objects you pass
in. There is no thread pool or handle registry for queued queries; a `Worker`
runs only when you call it. There is no date or date-time value type.

## Errors

All errors defined by the package derive from `mariapp.exceptions.MariaDBError`,
which carries a message and a numeric `error_id`.

## Running the tests

```
pip install mariapp[test]
pytest
```