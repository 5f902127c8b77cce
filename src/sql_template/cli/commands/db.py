"""CLI commands for running SQL against a SQLite database."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, time
from decimal import Decimal
from pathlib import Path
from typing import Annotated, Any

import typer

from ..base import BaseCLI
from ...database import (
    Byte,
    Char,
    ColumnMapRowMapper,
    Float,
    Long,
    Short,
    SqliteDataSource,
    SqlTemplate,
    initialize_database,
)

app = typer.Typer(help="Database commands.")

_BOOL_WORDS = {"true": True, "1": True, "yes": True, "false": False, "0": False, "no": False}


def _parse_bool(text: str) -> bool:
    try:
        return _BOOL_WORDS[text.lower()]
    except KeyError:
        raise ValueError(f"Not a boolean: {text!r}") from None


PARAMETER_PARSERS: dict[str, Callable[[str], Any]] = {
    "int": int,
    "long": lambda text: Long(int(text)),
    "short": lambda text: Short(int(text)),
    "byte": lambda text: Byte(int(text)),
    "float": lambda text: Float(float(text)),
    "double": float,
    "bool": _parse_bool,
    "char": Char,
    "str": str,
    "datetime": datetime.fromisoformat,
    "date": date.fromisoformat,
    "time": time.fromisoformat,
    "decimal": Decimal,
}


def parse_parameter(spec: str) -> Any:
    """Parse a ``TYPE:VALUE`` command-line parameter into a typed value.

    ``null`` (no value) binds SQL NULL. A spec without a known type prefix is
    bound as a string.

    Examples:
        ``int:1`` -> 1, ``datetime:2022-02-24T04:00:00`` -> datetime,
        ``decimal:4499.00`` -> Decimal("4499.00"), ``Nokia G11`` -> "Nokia G11".

    Raises:
        typer.BadParameter: If the value does not parse as its declared type.
    """
    if spec == "null":
        return None
    kind, sep, text = spec.partition(":")
    parser = PARAMETER_PARSERS.get(kind) if sep else None
    if parser is None:
        return spec
    try:
        return parser(text)
    except (ValueError, ArithmeticError) as exc:
        raise typer.BadParameter(f"{spec!r}: {exc}") from exc


class DatabaseCLI(BaseCLI):
    """CLI helpers for database commands."""

    def __init__(self) -> None:
        super().__init__("db")

    def init_db(self, *, scripts: list[Path], db_path: Path | None) -> dict[str, Any]:
        return self.handle_cli_operation(
            operation="db init",
            op_callable=lambda: self._init_operation(scripts=scripts, db_path=db_path),
            pre_message="Initializing database...",
        )

    def query(self, *, sql: str, db_path: Path | None) -> dict[str, Any]:
        return self.handle_cli_operation(
            operation="db query",
            op_callable=lambda: self._query_operation(sql=sql, db_path=db_path),
        )

    def update(self, *, sql: str, parameters: list[Any], db_path: Path | None) -> dict[str, Any]:
        return self.handle_cli_operation(
            operation="db update",
            op_callable=lambda: self._update_operation(
                sql=sql, parameters=parameters, db_path=db_path
            ),
        )

    def _init_operation(self, *, scripts: list[Path], db_path: Path | None) -> dict[str, Any]:
        initialize_database(SqliteDataSource(db_path), *scripts)
        return {"success": True, "message": f"Applied {len(scripts)} script(s)"}

    def _query_operation(self, *, sql: str, db_path: Path | None) -> dict[str, Any]:
        rows = SqlTemplate(SqliteDataSource(db_path)).query(sql, ColumnMapRowMapper())
        return {"success": True, "rows": rows}

    def _update_operation(
        self, *, sql: str, parameters: list[Any], db_path: Path | None
    ) -> dict[str, Any]:
        count = SqlTemplate(SqliteDataSource(db_path)).update(sql, *parameters)
        return {"success": True, "rows_affected": count}


cli = DatabaseCLI()

DbPathOption = Annotated[
    Path | None,
    typer.Option(
        "--db-path",
        help="Path to SQLite database file (defaults to global config)",
    ),
]


@app.command("init")
def init_command(
    scripts: Annotated[
        list[Path],
        typer.Option("--script", "-s", help="SQL script to run (repeatable, applied in order)"),
    ],
    db_path: DbPathOption = None,
) -> None:
    """Run schema and seed scripts against the database in one transaction."""
    cli.init_db(scripts=scripts, db_path=db_path)


@app.command("query")
def query_command(
    sql: Annotated[str, typer.Argument(help="SELECT statement without placeholders")],
    db_path: DbPathOption = None,
) -> None:
    """Run a query and print every row as column=value pairs."""
    cli.query(sql=sql, db_path=db_path)


@app.command("update")
def update_command(
    sql: Annotated[str, typer.Argument(help="INSERT/UPDATE/DELETE statement with ? placeholders")],
    params: Annotated[
        list[str] | None,
        typer.Option(
            "--param",
            "-p",
            help="Positional parameter as TYPE:VALUE (int, long, short, byte, float, "
            "double, bool, char, str, datetime, date, time, decimal) or 'null'",
        ),
    ] = None,
    db_path: DbPathOption = None,
) -> None:
    """Run a modifying statement and print the affected-row count."""
    parameters = [parse_parameter(spec) for spec in params or []]
    cli.update(sql=sql, parameters=parameters, db_path=db_path)
