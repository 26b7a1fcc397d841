"""Exception hierarchy raised by the DAO layer."""

from __future__ import annotations


class DataAccessError(Exception):
    """Base class for errors raised by mini_dao itself.

    Driver errors (connectivity, syntax, constraint violations) are never
    wrapped; they propagate with their original type.
    """


class IncorrectResultSizeError(DataAccessError):
    """A single-row query matched a different number of rows."""

    def __init__(self, expected: int, actual: int, sql: str | None = None):
        self.expected = expected
        self.actual = actual
        self.sql = sql
        message = f"Incorrect result size: expected {expected}, actual {actual}"
        if sql:
            message += f" for SQL [{sql}]"
        super().__init__(message)


class EmptyResultError(IncorrectResultSizeError):
    """A query expected exactly one row but matched none."""

    def __init__(self, sql: str | None = None):
        super().__init__(1, 0, sql)


class ParameterBindingError(DataAccessError, ValueError):
    """A placeholder in a query template has no bound value."""


class EntityMappingError(DataAccessError, TypeError):
    """An entity class does not carry usable identifier metadata."""


class DaoConfigurationError(DataAccessError):
    """A DAO was built without a usable database collaborator."""
