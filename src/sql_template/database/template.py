"""SqlTemplate: run parameterized SQL without managing connections.

Each operation acquires a connection from the data source, prepares the
statement, binds the arguments, executes, maps the rows and releases the
result set, statement and connection in reverse order, on success and on
every failure path. Operations on one instance are serialized by default.

Example usage:
    from sql_template import SqlTemplate, SqliteDataSource

    template = SqlTemplate(SqliteDataSource("db/shop.sqlite"))
    products = template.query("SELECT id, name FROM products", ProductRowMapper())
    product = template.query_for_object(
        "SELECT id, name FROM products WHERE id = ?", ProductRowMapper(), 1
    )
    template.update("DELETE FROM products WHERE id = ?", 4)
"""

from __future__ import annotations

import contextlib
import logging
import threading
from collections.abc import Callable, Iterator
from typing import Any, TypeVar

from .. import global_config as g
from .binder import inject_parameters
from .connection import DataSource, transaction
from .errors import BindingError, ContractError, DatabaseError, NotFoundError, from_driver_error
from .row_mapper import RowMapper, map_all, map_first, resolve_mapper
from .statement import PreparedStatement, ResultSet

logger = logging.getLogger(__name__)

T = TypeVar("T")

Mapper = RowMapper[T] | Callable[[ResultSet], T]


class SqlTemplate:
    """Facade for list queries, single-row queries and updates.

    Args:
        data_source: Connection provider. May be assigned later through the
            ``data_source`` attribute, but must be set before any operation.
        serialize: Run operations on this instance one at a time. Disable for
            thread-safe pooled data sources.
    """

    def __init__(
        self,
        data_source: DataSource | None = None,
        *,
        serialize: bool = g.SERIALIZE_OPERATIONS,
    ) -> None:
        self.data_source = data_source
        self._serialize = serialize
        self._lock: contextlib.AbstractContextManager[Any] = (
            threading.RLock() if serialize else contextlib.nullcontext()
        )

    @property
    def serialize(self) -> bool:
        """Whether operations on this instance run one at a time (fixed at construction)."""
        return self._serialize

    def query(self, sql: str, row_mapper: Mapper[T]) -> list[T]:
        """Execute a query without parameters and map every row.

        Args:
            sql: SELECT statement without placeholders.
            row_mapper: RowMapper or callable applied once per row.

        Returns:
            Mapped rows in the order the driver returns them; empty if none.

        Raises:
            ContractError: If the data source or row mapper is missing.
            ExecutionError: If preparation, execution or mapping fails.
        """
        mapper = resolve_mapper(row_mapper)
        with self._operation("query", sql, ()):
            with self._statement(sql) as (_, statement), statement.execute_query() as rows:
                return map_all(rows, mapper)

    def query_for_object(self, sql: str, row_mapper: Mapper[T], *parameters: Any) -> T | None:
        """Execute a parameterized query and map its first row.

        Rows after the first are ignored.

        Returns:
            The mapped first row, or None when the query yields no rows.

        Raises:
            ContractError: If the data source or row mapper is missing.
            BindingError: If a parameter cannot be bound.
            ExecutionError: If preparation, execution or mapping fails.
        """
        mapper = resolve_mapper(row_mapper)
        with self._operation("query_for_object", sql, parameters):
            _, value = self._query_first(sql, mapper, parameters)
            return value

    def query_for_single_row_or_fail(
        self, sql: str, row_mapper: Mapper[T], *parameters: Any
    ) -> T:
        """Like :meth:`query_for_object`, but a missing row is an error.

        Raises:
            NotFoundError: If the query yields no rows.
        """
        mapper = resolve_mapper(row_mapper)
        with self._operation("query_for_single_row_or_fail", sql, parameters):
            found, value = self._query_first(sql, mapper, parameters)
            if not found:
                raise NotFoundError("Query returned no rows", sql=sql)
            return value

    def update(self, sql: str, *parameters: Any) -> int:
        """Execute INSERT/UPDATE/DELETE in its own transaction and commit it.

        On any failure the transaction is rolled back, so a failed update
        leaves the database unchanged.

        Returns:
            Number of rows affected, as reported by the driver.

        Raises:
            ContractError: If the data source is missing.
            BindingError: If a parameter cannot be bound.
            ExecutionError: If preparation or execution fails.
        """
        with self._operation("update", sql, parameters):
            with self._statement(sql) as (connection, statement), transaction(connection):
                inject_parameters(statement, parameters)
                return statement.execute_update()

    def _query_first(
        self, sql: str, mapper: Callable[[ResultSet], T], parameters: tuple[Any, ...]
    ) -> tuple[bool, T | None]:
        with self._statement(sql) as (_, statement):
            inject_parameters(statement, parameters)
            with statement.execute_query() as rows:
                return map_first(rows, mapper)

    @contextlib.contextmanager
    def _operation(
        self, operation: str, sql: str, parameters: tuple[Any, ...]
    ) -> Iterator[None]:
        """Serialize the operation and turn every failure into one DatabaseError.

        Logs:
            - ERROR: "Cannot bind parameter {i} ({type}) in {operation}" for
                binding errors.
            - ERROR: "Cannot execute {operation}: {sql}" with the traceback for
                everything else.
        """
        if self.data_source is None:
            raise ContractError("SqlTemplate has no data source")

        context = {
            "operation": operation,
            "sql": sql,
            "parameters": repr(list(parameters)),
        }
        with self._lock:
            try:
                yield
            except BindingError as exc:
                logger.error(
                    "Cannot bind parameter %d (%s) in %s: %s parameters=%s",
                    exc.index,
                    exc.type_name,
                    operation,
                    sql,
                    context["parameters"],
                    extra={
                        **context,
                        "parameter_index": exc.index,
                        "parameter_type": exc.type_name,
                    },
                )
                raise
            except Exception as exc:
                logger.exception(
                    "Cannot execute %s: %s parameters=%s",
                    operation,
                    sql,
                    context["parameters"],
                    extra=context,
                )
                if isinstance(exc, DatabaseError):
                    raise
                raise from_driver_error(exc, sql=sql) from exc

    @contextlib.contextmanager
    def _statement(self, sql: str) -> Iterator[tuple[Any, PreparedStatement]]:
        connection = self.data_source.get_connection()
        try:
            with PreparedStatement(connection, sql) as statement:
                yield connection, statement
        finally:
            connection.close()
            logger.debug("Connection closed")
