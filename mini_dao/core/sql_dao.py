"""Named-parameter SQL executor.

`NamedParameterDao` runs SQL templates with `:name` placeholders against a
`DatabasePort`. Every operation goes through `compile()`, which binds each
parameter as a scalar or an expanded IN-list, so callers can write::

    dao.find_list(
        "SELECT * FROM book WHERE author_id IN (:ids) AND price < :price",
        {"ids": [1, 2, 3], "price": 20},
    )
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, List, Mapping, Optional

from .contracts import DatabasePort
from .errors import DaoConfigurationError, EmptyResultError, IncorrectResultSizeError
from .mappers import dict_row
from .named_sql import CompiledQuery, append_limit_offset, compile_named
from .types import RowMapper, T

logger = logging.getLogger(__name__)

EMPTY_PARAMS: Mapping[str, Any] = MappingProxyType({})

_DATABASE_SURFACE = ("dialect", "execute", "fetchall")


def require_database(db: Any, owner: str) -> DatabasePort:
    """Fail fast when a DAO is built without a usable database adapter."""

    if db is None:
        raise DaoConfigurationError(f"{owner} requires a database adapter, got None.")
    missing = [name for name in _DATABASE_SURFACE if not hasattr(db, name)]
    if missing:
        raise DaoConfigurationError(
            f"{owner} database adapter {type(db).__name__} is missing: {', '.join(missing)}."
        )
    return db


class NamedParameterDao:
    """Executes named-parameter SQL and normalizes empty results."""

    def __init__(self, db: DatabasePort):
        self.db = require_database(db, type(self).__name__)

    def compile(
        self, sql: str, params: Optional[Mapping[str, Any]] = None
    ) -> CompiledQuery:
        """Bind `params` into `sql` for the adapter's dialect."""

        return compile_named(sql, params, self.db.dialect)

    def find_object(
        self,
        sql: str,
        params: Optional[Mapping[str, Any]] = None,
        mapper: RowMapper[T] = dict_row,  # type: ignore[assignment]
    ) -> Optional[T]:
        """Return the single matching row mapped by `mapper`, or None.

        Raises:
            IncorrectResultSizeError: More than one row matched.
        """

        results = self.find_list(sql, params, mapper)
        if not results:
            logger.debug("No row matched single-row query: %s", sql)
            return None
        return _single_result(results, sql)

    def query_for_object(
        self,
        sql: str,
        params: Optional[Mapping[str, Any]] = None,
        mapper: RowMapper[T] = dict_row,  # type: ignore[assignment]
    ) -> T:
        """Like `find_object`, but zero rows raise `EmptyResultError`."""

        results = self.find_list(sql, params, mapper)
        if not results:
            raise EmptyResultError(sql)
        return _single_result(results, sql)

    def find_list(
        self,
        sql: str,
        params: Optional[Mapping[str, Any]] = None,
        mapper: RowMapper[T] = dict_row,  # type: ignore[assignment]
    ) -> List[T]:
        """Return every matching row mapped by `mapper`."""

        compiled = self.compile(sql, params)
        rows = self.db.fetchall(compiled.sql, compiled.params)
        return [mapper(row) for row in rows]

    def find_paged(
        self,
        sql: str,
        params: Optional[Mapping[str, Any]],
        offset: int,
        page_size: int,
        mapper: RowMapper[T] = dict_row,  # type: ignore[assignment]
    ) -> List[T]:
        """Return at most `page_size` rows after skipping `offset` rows.

        The template should carry an `ORDER BY`; pages of an unordered query
        are not stable.
        """

        if offset < 0:
            raise ValueError("offset must be >= 0.")
        if page_size < 0:
            raise ValueError("page_size must be >= 0.")

        compiled = append_limit_offset(
            self.compile(sql, params),
            limit=page_size,
            offset=offset,
            dialect=self.db.dialect,
        )
        rows = self.db.fetchall(compiled.sql, compiled.params)
        return [mapper(row) for row in rows]

    def update(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> int:
        """Execute an INSERT/UPDATE/DELETE and return the affected-row count."""

        compiled = self.compile(sql, params)
        cursor = self.db.execute(compiled.sql, compiled.params)
        return affected_rows(cursor)


def affected_rows(cursor: Any) -> int:
    """Return `cursor.rowcount`, mapping the DB-API "unknown" value -1 to 0."""

    rowcount = getattr(cursor, "rowcount", -1)
    if rowcount is None or rowcount < 0:
        return 0
    return int(rowcount)


def _single_result(results: List[T], sql: str) -> T:
    if len(results) > 1:
        raise IncorrectResultSizeError(1, len(results), sql)
    return results[0]
