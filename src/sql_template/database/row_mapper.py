"""Row mapper contract and generic mappers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, TypeVar

from .errors import ContractError
from .statement import ResultSet

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class RowMapper(Protocol[T_co]):
    """Turns the current row of a result set into a value.

    Implementations read the current row only and must not call
    ``result_set.next()``.
    """

    def map_row(self, result_set: ResultSet) -> T_co: ...


class ColumnMapRowMapper:
    """Maps a row to a ``{column_name: value}`` dict in column order."""

    def map_row(self, result_set: ResultSet) -> dict[str, Any]:
        return {name: result_set.get_object(name) for name in result_set.column_names}


class SingleColumnRowMapper:
    """Maps a row to the value of its first column."""

    def map_row(self, result_set: ResultSet) -> Any:
        return result_set.get_object(result_set.column_names[0])


def resolve_mapper(
    row_mapper: RowMapper[T] | Callable[[ResultSet], T] | None,
) -> Callable[[ResultSet], T]:
    """Return a callable for a RowMapper object or a plain function.

    Raises:
        ContractError: If row_mapper is None or neither a RowMapper nor callable.
    """
    if row_mapper is None:
        raise ContractError("row_mapper must not be None")
    map_row = getattr(row_mapper, "map_row", None)
    if callable(map_row):
        return map_row
    if callable(row_mapper):
        return row_mapper
    raise ContractError(
        f"row_mapper must be a RowMapper or callable, got {type(row_mapper).__name__}"
    )


def map_all(result_set: ResultSet, mapper: Callable[[ResultSet], T]) -> list[T]:
    """Map every remaining row, in the order the driver returns them."""
    rows: list[T] = []
    while result_set.next():
        rows.append(_map_current(result_set, mapper))
    return rows


def map_first(result_set: ResultSet, mapper: Callable[[ResultSet], T]) -> tuple[bool, T | None]:
    """Map the first row only.

    Returns:
        ``(True, value)`` when a row exists, ``(False, None)`` otherwise.
    """
    if not result_set.next():
        return False, None
    return True, _map_current(result_set, mapper)


def _map_current(result_set: ResultSet, mapper: Callable[[ResultSet], T]) -> T:
    result_set.lock()
    try:
        return mapper(result_set)
    finally:
        result_set.unlock()
