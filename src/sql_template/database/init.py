"""Database initialization from SQL script files.

Runs schema and seed scripts (``CREATE TABLE ...; INSERT ...;``) through a
SQLite data source so that a fresh database is ready for the template
operations.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .connection import SqliteDataSource, execute_script
from .errors import from_driver_error

logger = logging.getLogger(__name__)


def initialize_database(data_source: SqliteDataSource, *scripts: Path | str) -> None:
    """Run one or more SQL script files against the data source.

    All scripts run on a single connection inside one transaction, in the
    given order. If any script fails, none of them is applied.

    Args:
        data_source: SQLite data source to run the scripts on.
        *scripts: Paths to SQL script files.

    Raises:
        FileNotFoundError: If a script file doesn't exist.
        DatabaseError: If SQL execution fails.

    Logs:
        - INFO: "Initializing database with {n} script(s)" at start.
        - INFO: "Database initialization complete" on success.
    """
    paths = [Path(script) for script in scripts]
    for path in paths:
        if not path.exists():
            msg = f"SQL script not found: {path}"
            raise FileNotFoundError(msg)

    body = "\n".join(path.read_text(encoding="utf-8") for path in paths)
    description = ", ".join(path.name for path in paths)

    logger.info("Initializing database with %d script(s)", len(paths))
    conn = data_source.get_connection()
    try:
        # executescript() commits any pending transaction first, so the
        # transaction boundaries live inside the script itself.
        execute_script(conn, f"BEGIN;\n{body}\n;\nCOMMIT;", description=description)
    except Exception as exc:
        if conn.in_transaction:
            conn.rollback()
        raise from_driver_error(exc) from exc
    finally:
        conn.close()
    logger.info("Database initialization complete")
