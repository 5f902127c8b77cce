"""Database connection providers.

A data source hands out a fresh DB-API connection on every
``get_connection()`` call and never caches it; whoever asks for a connection
closes it. ``SqliteDataSource`` covers on-disk and in-memory SQLite
databases; ``CallableDataSource`` adapts any connect function (for example
``functools.partial(psycopg.connect, dsn)``).
"""

from __future__ import annotations

import contextlib
import logging
import sqlite3
import uuid
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any, Protocol

from .. import global_config as g

logger = logging.getLogger(__name__)

MEMORY = ":memory:"


class DataSource(Protocol):
    """Anything that yields new DB-API connections on demand."""

    def get_connection(self) -> Any: ...


def _ensure_parent_dir(db_path: Path) -> None:
    """Ensure the parent directory for a database file exists."""
    db_path.parent.mkdir(parents=True, exist_ok=True)


def _configure_connection(conn: sqlite3.Connection) -> None:
    """Apply standard pragmas to a new connection.

    Connections run in autocommit mode, so every statement executed outside
    an explicit ``BEGIN`` is committed immediately.

    Args:
        conn: SQLite connection to configure.

    Side Effects:
        - Modifies connection settings (isolation level, pragmas).
    """
    conn.isolation_level = None
    conn.execute("PRAGMA foreign_keys = ON")


def get_connection(
    db_path: Path | str | None = None,
    *,
    timeout: float = g.SQLITE_TIMEOUT_S,
) -> sqlite3.Connection:
    """Return a configured SQLite connection.

    Creates a new SQLite connection with standard configuration (autocommit,
    foreign keys enabled). Ensures parent directory exists before creating
    the database file.

    Args:
        db_path: Path to SQLite database file. Defaults to
            global_config.DEFAULT_DB_PATH.
        timeout: Seconds to wait on a locked database.

    Returns:
        Configured SQLite connection ready for use.

    Logs:
        - DEBUG: "Opening SQLite database at {path}" when creating connection.

    Side Effects:
        - Creates parent directory if it doesn't exist.
        - Creates database file if it doesn't exist.
    """
    resolved = Path(db_path) if db_path is not None else g.DEFAULT_DB_PATH

    _ensure_parent_dir(resolved)
    logger.debug("Opening SQLite database at %s", resolved)
    conn = sqlite3.connect(str(resolved), timeout=timeout)
    _configure_connection(conn)
    return conn


class SqliteDataSource:
    """Data source for one SQLite database.

    ``SqliteDataSource(":memory:")`` creates a private shared-cache in-memory
    database. An anchor connection keeps it alive until :meth:`close`, so the
    data survives between operations that each open their own connection.
    """

    def __init__(
        self,
        db_path: Path | str | None = None,
        *,
        timeout: float = g.SQLITE_TIMEOUT_S,
    ) -> None:
        self.timeout = timeout
        self._anchor: sqlite3.Connection | None = None
        if db_path == MEMORY:
            self.db_path: Path | None = None
            self._uri = f"file:{g.PACKAGE_NAME}-{uuid.uuid4().hex}?mode=memory&cache=shared"
            self._anchor = self._connect_memory()
        else:
            self.db_path = Path(db_path) if db_path is not None else g.DEFAULT_DB_PATH
            self._uri = None

    def _connect_memory(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._uri, uri=True, timeout=self.timeout)
        _configure_connection(conn)
        return conn

    def get_connection(self) -> sqlite3.Connection:
        if self._uri is not None:
            if self._anchor is None:
                raise RuntimeError("In-memory data source has been closed")
            logger.debug("Opening in-memory SQLite database %s", self._uri)
            return self._connect_memory()
        return get_connection(self.db_path, timeout=self.timeout)

    def close(self) -> None:
        """Release the in-memory database; a no-op for file databases."""
        if self._anchor is not None:
            self._anchor.close()
            self._anchor = None

    def __repr__(self) -> str:
        return f"SqliteDataSource({str(self.db_path) if self.db_path else MEMORY!r})"


class CallableDataSource:
    """Data source backed by a zero-argument connect function."""

    def __init__(self, connect: Callable[[], Any]) -> None:
        if not callable(connect):
            raise TypeError("connect must be callable")
        self._connect = connect

    def get_connection(self) -> Any:
        return self._connect()


@contextlib.contextmanager
def transaction(conn: Any) -> Iterator[Any]:
    """Context manager for a transactional block on an open connection.

    Commits on success and rolls back on error. Autocommit SQLite connections
    get an explicit ``BEGIN`` first; other DB-API connections open their
    transaction implicitly on the first statement. The connection is not
    closed.

    Args:
        conn: DB-API connection owned by the caller.

    Yields:
        The same connection.

    Logs:
        - DEBUG: "Beginning transaction" at start.
        - DEBUG: "Transaction committed" on success.
        - DEBUG: "Transaction rolled back" on failure (the caller reports the error).
    """
    if isinstance(conn, sqlite3.Connection) and conn.isolation_level is None:
        if not conn.in_transaction:
            conn.execute("BEGIN")
    logger.debug("Beginning transaction")
    try:
        yield conn
        conn.commit()
        logger.debug("Transaction committed")
    except BaseException:
        conn.rollback()
        logger.debug("Transaction rolled back")
        raise


def execute_script(conn: sqlite3.Connection, sql: str, *, description: str) -> None:
    """Execute a multi-statement SQL script with logging.

    Executes SQL that may contain multiple statements separated by semicolons.
    Primarily intended for schema initialization and seed data scripts.

    Args:
        conn: Database connection to execute script on.
        sql: Multi-statement SQL script to execute.
        description: Human-readable description for logging purposes.

    Raises:
        sqlite3.Error: If script execution fails.

    Logs:
        - INFO: "Executing SQL script: {description}" before execution.
        - ERROR: "Failed while executing SQL script: {description}" with
            exception details on failure.
    """
    logger.info("Executing SQL script: %s", description)
    try:
        conn.executescript(sql)
    except sqlite3.Error:
        logger.exception("Failed while executing SQL script: %s", description)
        raise
