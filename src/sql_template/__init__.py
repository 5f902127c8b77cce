"""
sql-template core package.

A small helper layer over DB-API 2.0 drivers:
- `SqlTemplate` runs list queries, single-row queries and updates without
  the caller touching connections, statements or cursors (`sql_template.database`)
- A parameter binder maps Python values to typed statement setters
- A minimal Typer-based CLI for poking at a SQLite file (`sql_template.cli`)

Configuration:
- Shared, project-wide anchors and defaults live in `sql_template.global_config`.
"""

from .database import (
    BindingError,
    CallableDataSource,
    ContractError,
    DatabaseError,
    ExecutionError,
    IntegrityError,
    NotFoundError,
    ResultSet,
    RowMapper,
    SqliteDataSource,
    SqlTemplate,
)

__all__ = [
    "SqlTemplate",
    "SqliteDataSource",
    "CallableDataSource",
    "ResultSet",
    "RowMapper",
    "DatabaseError",
    "ContractError",
    "ExecutionError",
    "IntegrityError",
    "NotFoundError",
    "BindingError",
]
