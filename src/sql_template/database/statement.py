"""Prepared statements and result sets over DB-API 2.0 connections.

``PreparedStatement`` collects positional parameters through typed setters
and executes once; ``ResultSet`` walks the returned rows forward-only and
reads columns by name. Values reach the driver in forms the standard
``sqlite3`` module stores natively: temporal values and decimals as text,
booleans and integers as integers.
"""

from __future__ import annotations

import logging
import math
import struct
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from .. import global_config as g
from .sql_types import INT_MAX, INT_MIN, Byte, Date, Long, Short, Time, Timestamp, check_range

logger = logging.getLogger(__name__)

_BOOLEAN_WORDS = {"": False, "false": False, "true": True}


class PreparedStatement:
    """SQL text bound to one connection, with 1-based positional parameters."""

    def __init__(self, connection: Any, sql: str) -> None:
        if not sql or not sql.strip():
            raise ValueError("Cannot prepare an empty SQL statement")
        self._connection = connection
        self.sql = sql
        self._parameters: dict[int, Any] = {}
        self._cursor: Any = None
        self._closed = False

    def _set(self, index: int, value: Any) -> None:
        if self._closed:
            raise RuntimeError("PreparedStatement is closed")
        if index < 1:
            raise IndexError(f"Parameter index must be >= 1, got {index}")
        self._parameters[index] = value

    def set_int(self, index: int, value: int) -> None:
        self._set(index, check_range(value, INT_MIN, INT_MAX, "Int"))

    def set_long(self, index: int, value: int) -> None:
        self._set(index, check_range(value, Long.MIN_VALUE, Long.MAX_VALUE, "Long"))

    def set_short(self, index: int, value: int) -> None:
        self._set(index, check_range(value, Short.MIN_VALUE, Short.MAX_VALUE, "Short"))

    def set_byte(self, index: int, value: int) -> None:
        self._set(index, check_range(value, Byte.MIN_VALUE, Byte.MAX_VALUE, "Byte"))

    def set_float(self, index: int, value: float) -> None:
        # Round-trip through IEEE 754 single precision.
        single = struct.unpack("f", struct.pack("f", value))[0]
        if math.isinf(single) and math.isfinite(value):
            raise OverflowError(f"{value} is out of range for Float")
        self._set(index, single)

    def set_double(self, index: int, value: float) -> None:
        self._set(index, float(value))

    def set_boolean(self, index: int, value: bool) -> None:
        self._set(index, bool(value))

    def set_char(self, index: int, value: str) -> None:
        if len(value) != 1:
            raise ValueError(f"Char requires exactly one character, got {value!r}")
        self._set(index, value)

    def set_string(self, index: int, value: str) -> None:
        self._set(index, value)

    def set_timestamp(self, index: int, value: Timestamp) -> None:
        self._set(index, str(value))

    def set_date(self, index: int, value: Date) -> None:
        self._set(index, str(value))

    def set_time(self, index: int, value: Time) -> None:
        self._set(index, str(value))

    def set_bytes(self, index: int, value: bytes | bytearray) -> None:
        self._set(index, bytes(value))

    def set_big_decimal(self, index: int, value: Decimal) -> None:
        if not value.is_finite():
            raise ValueError(f"Cannot bind non-finite decimal {value}")
        self._set(index, str(value))

    def set_null(self, index: int, sql_type: Any = None) -> None:
        self._set(index, None)

    def clear_parameters(self) -> None:
        self._parameters.clear()

    @property
    def parameters(self) -> tuple[Any, ...]:
        """Bound parameters in placeholder order.

        Raises:
            ValueError: If a parameter between 1 and the highest bound index is unset.
        """
        if not self._parameters:
            return ()
        highest = max(self._parameters)
        missing = [i for i in range(1, highest + 1) if i not in self._parameters]
        if missing:
            raise ValueError(f"No value specified for parameter(s) {missing}")
        return tuple(self._parameters[i] for i in range(1, highest + 1))

    def _execute(self) -> Any:
        if self._closed:
            raise RuntimeError("PreparedStatement is closed")
        parameters = self.parameters
        if self._cursor is not None:
            self._cursor.close()
        self._cursor = self._connection.cursor()
        self._cursor.execute(self.sql, parameters)
        logger.debug("Executed statement: %s", self.sql[: g.SQL_LOG_PREVIEW])
        return self._cursor

    def execute_query(self) -> ResultSet:
        """Execute a statement that returns rows.

        Raises:
            ValueError: If the statement produced no result set.
        """
        cursor = self._execute()
        if cursor.description is None:
            raise ValueError("Statement did not return a result set")
        return ResultSet(cursor)

    def execute_update(self) -> int:
        """Execute INSERT/UPDATE/DELETE (or DDL) and return the affected-row count.

        DDL statements report 0.

        Raises:
            ValueError: If the statement produced a result set.
        """
        cursor = self._execute()
        if cursor.description is not None:
            # Reset the statement so the caller can still roll back its changes.
            cursor.close()
            self._cursor = None
            raise ValueError("Statement returned a result set; use a query instead")
        rowcount = max(cursor.rowcount, 0)
        logger.debug("Update affected %s rows", rowcount)
        return rowcount

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> PreparedStatement:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class ResultSet:
    """Forward-only view over the rows of an executed query.

    Getters address columns by name, case-insensitively, and read the row
    most recently reached with :meth:`next`. SQL NULL reads as ``None``.
    """

    def __init__(self, cursor: Any) -> None:
        self._cursor = cursor
        self._columns = {
            column[0].lower(): position for position, column in enumerate(cursor.description)
        }
        self._row: Any = None
        self._closed = False
        self._locked = False
        self._last_was_null = False

    @property
    def column_names(self) -> list[str]:
        return [column[0] for column in self._cursor.description]

    def next(self) -> bool:
        """Advance to the next row; return False once the rows are exhausted."""
        if self._closed:
            raise RuntimeError("ResultSet is closed")
        if self._locked:
            raise RuntimeError("Row mappers must not advance the result set")
        self._row = self._cursor.fetchone()
        return self._row is not None

    def lock(self) -> None:
        self._locked = True

    def unlock(self) -> None:
        self._locked = False

    def get_object(self, column: str) -> Any:
        if self._row is None:
            raise LookupError("ResultSet is not positioned on a row")
        try:
            position = self._columns[column.lower()]
        except KeyError:
            raise KeyError(f"Unknown column: {column!r}") from None
        value = self._row[position]
        self._last_was_null = value is None
        return value

    def was_null(self) -> bool:
        return self._last_was_null

    def get_string(self, column: str) -> str | None:
        value = self.get_object(column)
        return None if value is None else str(value)

    def get_int(self, column: str) -> int | None:
        value = self.get_object(column)
        return None if value is None else int(value)

    get_long = get_int
    get_short = get_int
    get_byte = get_int

    def get_double(self, column: str) -> float | None:
        value = self.get_object(column)
        return None if value is None else float(value)

    get_float = get_double

    def get_boolean(self, column: str) -> bool | None:
        """Read a boolean; text columns hold '0'/'1', 'false'/'true' or a number.

        Raises:
            ValueError: If a text value is not a boolean word or a number.
        """
        value = self.get_object(column)
        if value is None:
            return None
        if isinstance(value, str):
            text = value.strip().lower()
            if text in _BOOLEAN_WORDS:
                return _BOOLEAN_WORDS[text]
            return float(text) != 0
        return bool(value)

    def get_big_decimal(self, column: str) -> Decimal | None:
        value = self.get_object(column)
        return None if value is None else Decimal(str(value))

    def get_bytes(self, column: str) -> bytes | None:
        value = self.get_object(column)
        return None if value is None else bytes(value)

    def get_timestamp(self, column: str) -> Timestamp | None:
        value = self.get_object(column)
        if value is None:
            return None
        if not isinstance(value, datetime):
            value = datetime.fromisoformat(str(value))
        return Timestamp.value_of(value)

    def get_date(self, column: str) -> Date | None:
        value = self.get_object(column)
        if value is None:
            return None
        if isinstance(value, datetime):
            value = value.date()
        elif not isinstance(value, date):
            value = date.fromisoformat(str(value)[:10])
        return Date.value_of(value)

    def get_time(self, column: str) -> Time | None:
        value = self.get_object(column)
        if value is None:
            return None
        if not isinstance(value, time):
            value = time.fromisoformat(str(value))
        return Time.value_of(value)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._cursor.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> ResultSet:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
