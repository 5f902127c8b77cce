"""Wire-level SQL value types.

Two families live here:

- ``Timestamp``, ``Date`` and ``Time``: zone-less SQL temporal values. They
  subclass the matching :mod:`datetime` classes, so they compare equal to the
  local values they were built from, and their ``str()`` is the SQL literal
  form (``YYYY-MM-DD HH:MM:SS[.ffffff]``, ``YYYY-MM-DD``, ``HH:MM:SS``).
- ``Long``, ``Short``, ``Byte``, ``Float`` and ``Char``: fixed-width markers
  for callers that need a column type other than the default one picked for
  plain ``int``, ``float`` or ``str`` values. Construction validates the
  width.
"""

from __future__ import annotations

from datetime import date, datetime, time

INT_MIN, INT_MAX = -(2**31), 2**31 - 1


def check_range(value: int, low: int, high: int, type_name: str) -> int:
    """Return value if it lies within [low, high].

    Raises:
        OverflowError: If value is out of range for type_name.
    """
    if not low <= value <= high:
        raise OverflowError(f"{value} is out of range for {type_name} [{low}, {high}]")
    return value


class Timestamp(datetime):
    """SQL TIMESTAMP value without time zone."""

    @classmethod
    def value_of(cls, local: datetime) -> Timestamp:
        """Build a Timestamp carrying the same fields as a naive datetime.

        Raises:
            ValueError: If local is timezone-aware.
        """
        if local.tzinfo is not None:
            raise ValueError(f"Cannot convert timezone-aware datetime {local} to Timestamp")
        return cls(
            local.year,
            local.month,
            local.day,
            local.hour,
            local.minute,
            local.second,
            local.microsecond,
        )

    def to_local(self) -> datetime:
        return datetime(
            self.year, self.month, self.day, self.hour, self.minute, self.second, self.microsecond
        )


class Date(date):
    """SQL DATE value."""

    @classmethod
    def value_of(cls, local: date) -> Date:
        return cls(local.year, local.month, local.day)

    def to_local(self) -> date:
        return date(self.year, self.month, self.day)


class Time(time):
    """SQL TIME value without time zone."""

    @classmethod
    def value_of(cls, local: time) -> Time:
        """Build a Time carrying the same fields as a naive time.

        Raises:
            ValueError: If local is timezone-aware.
        """
        if local.tzinfo is not None:
            raise ValueError(f"Cannot convert timezone-aware time {local} to Time")
        return cls(local.hour, local.minute, local.second, local.microsecond)

    def to_local(self) -> time:
        return time(self.hour, self.minute, self.second, self.microsecond)


class _BoundedInt(int):
    MIN_VALUE: int
    MAX_VALUE: int

    def __new__(cls, value: int = 0) -> _BoundedInt:
        instance = super().__new__(cls, value)
        check_range(int(instance), cls.MIN_VALUE, cls.MAX_VALUE, cls.__name__)
        return instance

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


class Long(_BoundedInt):
    """64-bit signed integer."""

    MIN_VALUE = -(2**63)
    MAX_VALUE = 2**63 - 1


class Short(_BoundedInt):
    """16-bit signed integer."""

    MIN_VALUE = -(2**15)
    MAX_VALUE = 2**15 - 1


class Byte(_BoundedInt):
    """8-bit signed integer."""

    MIN_VALUE = -(2**7)
    MAX_VALUE = 2**7 - 1


class Float(float):
    """Single-precision floating point value."""

    def __repr__(self) -> str:
        return f"Float({float(self)!r})"


class Char(str):
    """A single character."""

    def __new__(cls, value: str) -> Char:
        if len(value) != 1:
            raise ValueError(f"Char requires exactly one character, got {value!r}")
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"Char({str(self)!r})"
