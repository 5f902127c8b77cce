"""Shared plumbing for the CLI command groups.

Library modules only create loggers; handlers are installed here, once per
process, by :func:`configure_logging`. Commands run through
:meth:`BaseCLI.handle_cli_operation`, which turns any exception into a red
one-line summary (plus the failing SQL or parameter, when known) and exit
code 1, and prints the result payload.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator, Sequence
from contextlib import contextmanager
from typing import Any

import typer

from ..database import BindingError, ExecutionError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LOGGING_CONFIGURED = False


def configure_logging(level: int = logging.WARNING) -> None:
    """Install the CLI log handler on first call; adjust the level on later calls.

    Args:
        level: Root logging level. ``logging.DEBUG`` shows every executed
            statement and affected-row count.

    Side Effects:
        - Configures the root logger.
    """
    global _LOGGING_CONFIGURED
    if not _LOGGING_CONFIGURED:
        logging.basicConfig(level=level, format=LOG_FORMAT)
        _LOGGING_CONFIGURED = True
    logging.getLogger().setLevel(level)


def describe_error(exc: BaseException) -> list[str]:
    """Return detail lines for a failed database operation."""
    if isinstance(exc, BindingError):
        return [f"parameter: #{exc.index} ({exc.type_name})"]
    if isinstance(exc, ExecutionError) and exc.sql:
        return [f"sql: {exc.sql}"]
    return []


@contextmanager
def handle_errors(operation: str, *, logger: logging.Logger) -> Generator[None, None, None]:
    """Report a failing operation and exit with code 1.

    Raises:
        typer.Exit: With code 1 on any exception other than typer.Exit.

    Logs:
        - ERROR: "Error during {operation}" with the traceback.

    User Output:
        - "✗ {operation} failed: {exc}" in red, then detail lines from
          :func:`describe_error`.
    """
    try:
        yield
    except typer.Exit:
        raise
    except Exception as exc:  # noqa: BLE001
        logger.exception("Error during %s", operation)
        typer.secho(f"✗ {operation} failed: {exc}", fg=typer.colors.RED)
        for line in describe_error(exc):
            typer.secho(f"  {line}", fg=typer.colors.RED)
        raise typer.Exit(1) from exc


def _cell(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bytes):
        return f"x'{value.hex()}'"
    return str(value)


def format_rows(rows: Sequence[dict[str, Any]]) -> list[str]:
    """Render column-map rows as an aligned text table."""
    if not rows:
        return ["(0 rows)"]
    columns = list(rows[0])
    cells = [[_cell(row.get(column)) for column in columns] for row in rows]
    widths = [
        max(len(column), *(len(line[i]) for line in cells)) for i, column in enumerate(columns)
    ]

    def render(values: Sequence[str]) -> str:
        return " | ".join(value.ljust(width) for value, width in zip(values, widths)).rstrip()

    lines = [render(columns), "-+-".join("-" * width for width in widths)]
    lines.extend(render(line) for line in cells)
    lines.append(f"({len(rows)} row{'' if len(rows) == 1 else 's'})")
    return lines


def format_result(result: dict[str, Any], *, operation: str) -> str:
    """Format a command result payload.

    Args:
        result: Payload with optional keys ``message``, ``rows_affected`` and
            ``rows`` (a list of column maps).
        operation: Operation label for the header line.
    """
    lines = [f"✓ {operation}"]
    if "rows_affected" in result:
        lines.append(f"  rows affected: {result['rows_affected']}")
    if result.get("message"):
        lines.append(f"  ℹ {result['message']}")
    if "rows" in result:
        lines.extend(f"  {line}" for line in format_rows(result["rows"]))
    return "\n".join(lines)


class BaseCLI:
    """Base class for a CLI command group."""

    def __init__(self, domain: str) -> None:
        self.domain = domain
        self.logger = logging.getLogger(__name__)

    def handle_cli_operation(
        self,
        *,
        operation: str,
        op_callable: Callable[[], dict[str, Any]],
        pre_message: str | None = None,
    ) -> dict[str, Any]:
        """Run an operation, print its formatted result and return it.

        Args:
            operation: Human-readable operation name, e.g. ``"db query"``.
            op_callable: Performs the operation and returns a result payload.
            pre_message: Optional line printed before the operation starts.

        Returns:
            The payload returned by op_callable.
        """
        if pre_message:
            typer.echo(pre_message)

        with handle_errors(operation, logger=self.logger):
            result = op_callable()

        typer.echo(format_result(result, operation=operation))
        return result
