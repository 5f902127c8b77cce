from __future__ import annotations

import logging
from typing import Annotated

import typer

from .base import configure_logging
from .commands.db import app as db_app

app = typer.Typer(
    help="Run parameterized SQL against a SQLite database.",
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(db_app, name="db")


@app.callback()
def root(
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Log executed statements and row counts"),
    ] = False,
) -> None:
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


def main() -> None:
    """Entry point for the ``sql-template`` console script."""
    app()


if __name__ == "__main__":
    main()
