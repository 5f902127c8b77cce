"""Database-specific exception types for the project."""

from __future__ import annotations


class DatabaseError(Exception):
    """Base exception for database-related errors."""


class ContractError(DatabaseError):
    """Raised when a caller breaks the API contract (missing data source or mapper)."""


class ExecutionError(DatabaseError):
    """Raised when preparing, executing or mapping a statement fails.

    Attributes:
        sql: SQL text of the failing statement, if known.
    """

    def __init__(self, message: str, *, sql: str | None = None) -> None:
        super().__init__(message)
        self.sql = sql


class IntegrityError(ExecutionError):
    """Raised when a constraint violation occurs."""


class NotFoundError(ExecutionError):
    """Raised when a requested row cannot be found."""


class BindingError(DatabaseError):
    """Raised when a parameter cannot be bound to a prepared statement.

    Attributes:
        index: 1-based position of the offending parameter.
        value_type: Runtime type of the parameter as supplied by the caller.
    """

    def __init__(self, index: int, value_type: type, reason: str) -> None:
        super().__init__(
            f"Cannot bind parameter {index} of type {value_type.__name__}: {reason}"
        )
        self.index = index
        self.value_type = value_type

    @property
    def type_name(self) -> str:
        return self.value_type.__name__


def from_driver_error(error: BaseException, *, sql: str | None = None) -> DatabaseError:
    """Map a raw driver (or statement) error to a project-level DatabaseError.

    Project errors are returned unchanged. DB-API 2.0 names its constraint
    violation class ``IntegrityError`` in every driver module, so the match is
    made on the class name rather than on one driver's class. Everything else
    becomes an ExecutionError.

    Args:
        error: Exception raised while talking to the database.
        sql: SQL text of the failing statement.

    Returns:
        DatabaseError subclass instance describing the failure.
    """
    if isinstance(error, DatabaseError):
        return error
    if any(cls.__name__ == "IntegrityError" for cls in type(error).__mro__):
        return IntegrityError(str(error), sql=sql)
    return ExecutionError(f"{type(error).__name__}: {error}", sql=sql)
