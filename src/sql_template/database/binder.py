"""Parameter binding for prepared statements.

Each caller argument is bound in three steps:

1. Coercion: ``datetime``, ``date`` and ``time`` values (matched by exact
   type) become the wire-level :class:`Timestamp`, :class:`Date` and
   :class:`Time`. Other values pass through unchanged.
2. Setter selection: the *original* argument type picks a setter through a
   closed dispatch table (``int`` -> ``set_int``, ``datetime`` ->
   ``set_timestamp``, ``Decimal`` -> ``set_big_decimal`` ...). Types outside
   the table are rejected.
3. Invocation: ``setter(index, value)`` with a 1-based index. Values of the
   eight primitive wrapper types are first unboxed to the plain builtin.

Any failure in these steps raises :class:`BindingError` carrying the
parameter index and its original type.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from .errors import BindingError
from .sql_types import Byte, Char, Date, Float, Long, Short, Time, Timestamp

SETTER_PREFIX = "set_"

# Closed set of bindable types, keyed by exact type.
_SETTER_SUFFIXES: dict[type, str] = {
    int: "Int",
    Long: "Long",
    Short: "Short",
    Byte: "Byte",
    Float: "Float",
    float: "Double",
    bool: "Boolean",
    Char: "Char",
    str: "String",
    datetime: "Timestamp",
    Timestamp: "Timestamp",
    date: "Date",
    Date: "Date",
    time: "Time",
    Time: "Time",
    bytes: "Bytes",
    bytearray: "Bytes",
    Decimal: "BigDecimal",
    type(None): "Null",
}

_COERCIONS = {
    datetime: Timestamp.value_of,
    date: Date.value_of,
    time: Time.value_of,
}

# Primitive wrapper -> the builtin its setter expects.
_PRIMITIVES: dict[type, type] = {
    bool: bool,
    Char: str,
    Byte: int,
    Short: int,
    int: int,
    Long: int,
    Float: float,
    float: float,
}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def coerce_parameter(parameter: Any) -> Any:
    """Rewrite a local date/time value to its SQL wire-level equivalent.

    Args:
        parameter: Caller-supplied value.

    Returns:
        Timestamp, Date or Time for exact ``datetime``, ``date`` or ``time``
        values; the parameter itself otherwise.

    Raises:
        ValueError: If a datetime or time is timezone-aware.
    """
    coerce = _COERCIONS.get(type(parameter))
    return parameter if coerce is None else coerce(parameter)


def setter_suffix(value_type: type) -> str:
    """Return the setter suffix for an argument type, e.g. ``int`` -> ``"Int"``.

    Types outside the dispatch table keep their own name.
    """
    return _SETTER_SUFFIXES.get(value_type, value_type.__name__)


def setter_name(value_type: type) -> str:
    """Return the statement method that binds values of value_type, e.g. ``set_big_decimal``."""
    return SETTER_PREFIX + _CAMEL_BOUNDARY.sub("_", setter_suffix(value_type)).lower()


def is_primitive_wrapper(value_type: type) -> bool:
    return value_type in _PRIMITIVES


def is_supported(value_type: type) -> bool:
    return value_type in _SETTER_SUFFIXES


def _unbox(value: Any) -> Any:
    builtin = _PRIMITIVES[type(value)]
    return value if type(value) is builtin else builtin(value)


def bind_parameter(statement: Any, index: int, parameter: Any) -> None:
    """Bind one argument to the statement at a 1-based index.

    Args:
        statement: Prepared statement exposing ``set_*`` setters.
        index: 1-based placeholder position.
        parameter: Caller-supplied value.

    Raises:
        BindingError: If the type is unsupported, cannot be coerced, the
            statement lacks the setter, or the setter rejects the value.
    """
    original_type = type(parameter)
    if not is_supported(original_type):
        raise BindingError(index, original_type, "unsupported parameter type")

    try:
        value = coerce_parameter(parameter)
    except ValueError as exc:
        raise BindingError(index, original_type, str(exc)) from exc

    name = setter_name(original_type)
    setter = getattr(statement, name, None)
    if setter is None:
        raise BindingError(
            index, original_type, f"{type(statement).__name__} has no setter {name}()"
        )

    if is_primitive_wrapper(original_type):
        value = _unbox(value)

    try:
        setter(index, value)
    except (TypeError, ValueError, OverflowError, IndexError) as exc:
        raise BindingError(index, original_type, f"{name}() rejected the value: {exc}") from exc


def inject_parameters(statement: Any, parameters: Sequence[Any]) -> None:
    """Bind every argument to the statement in order, starting at index 1.

    Raises:
        BindingError: For the first argument that cannot be bound.
    """
    for index, parameter in enumerate(parameters, start=1):
        bind_parameter(statement, index, parameter)
