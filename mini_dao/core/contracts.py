"""Core port contracts used by adapters and DAOs."""

from __future__ import annotations

from typing import Any, List, Optional, Protocol

from .types import QueryParams, RowMapping


class DialectPort(Protocol):
    """Dialect behavior required by query compilation and entity statements."""

    name: str
    paramstyle: str
    supports_returning: bool

    def q(self, ident: str) -> str: ...

    def placeholder(self, key: str) -> str: ...

    def returning_clause(self, pk_name: str) -> str: ...

    def empty_insert_clause(self) -> str: ...

    def get_lastrowid(self, cursor: Any) -> Optional[int]: ...


class DatabasePort(Protocol):
    """Database adapter behavior required by the DAOs.

    `Database` also offers `fetchone` and `transaction()` for callers; the
    DAOs only need the members below.
    """

    dialect: DialectPort

    def execute(self, sql: str, params: QueryParams = None) -> Any: ...

    def fetchall(self, sql: str, params: QueryParams = None) -> List[RowMapping]: ...
