"""Public interface for the database package.

This module exposes the main primitives needed by the rest of the
project: data sources, the SqlTemplate facade, the parameter binder,
wire-level SQL types, row mappers, initialization and errors.
"""

from .binder import (
    bind_parameter,
    coerce_parameter,
    inject_parameters,
    is_primitive_wrapper,
    setter_name,
    setter_suffix,
)
from .connection import CallableDataSource, DataSource, SqliteDataSource, get_connection
from .errors import (
    BindingError,
    ContractError,
    DatabaseError,
    ExecutionError,
    IntegrityError,
    NotFoundError,
)
from .init import initialize_database
from .row_mapper import ColumnMapRowMapper, RowMapper, SingleColumnRowMapper
from .sql_types import Byte, Char, Date, Float, Long, Short, Time, Timestamp
from .statement import PreparedStatement, ResultSet
from .template import SqlTemplate

__all__ = [
    "SqlTemplate",
    "DataSource",
    "SqliteDataSource",
    "CallableDataSource",
    "get_connection",
    "initialize_database",
    "PreparedStatement",
    "ResultSet",
    "RowMapper",
    "ColumnMapRowMapper",
    "SingleColumnRowMapper",
    "bind_parameter",
    "inject_parameters",
    "coerce_parameter",
    "setter_suffix",
    "setter_name",
    "is_primitive_wrapper",
    "Timestamp",
    "Date",
    "Time",
    "Long",
    "Short",
    "Byte",
    "Float",
    "Char",
    "DatabaseError",
    "ContractError",
    "ExecutionError",
    "IntegrityError",
    "NotFoundError",
    "BindingError",
]
