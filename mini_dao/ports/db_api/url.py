"""Build `Database` adapters from connection URLs."""

from __future__ import annotations

import importlib
from typing import Any, Callable, Sequence
from urllib.parse import unquote, urlparse

from ...core.errors import DaoConfigurationError
from .database import Database
from .dialects import MySQLDialect, PostgresDialect, SQLiteDialect

_POSTGRES_DRIVERS = ("psycopg", "psycopg2")
_MYSQL_DRIVERS = ("pymysql", "MySQLdb")


def connect(url: str, **connect_kwargs: Any) -> Database:
    """Open a DB-API connection for `url` and wrap it in a `Database`.

    Supported schemes:
        `sqlite://` (in-memory), `sqlite:///relative.db`,
        `sqlite:////absolute.db`, `postgresql://user:pw@host:port/db` and
        `mysql://user:pw@host:port/db`. A `+driver` suffix on the scheme
        (`mysql+pymysql://`) pins the driver module.

    Extra keyword arguments are passed to the driver's `connect()`.

    Raises:
        DaoConfigurationError: Unknown scheme or no importable driver.
    """

    parsed = urlparse(url)
    scheme, _, driver = parsed.scheme.partition("+")
    scheme = scheme.lower()

    if scheme == "sqlite":
        sqlite_connect = _load_connect((driver or "sqlite3",))
        database = parsed.path[1:] if parsed.path.startswith("/") else parsed.path
        conn = sqlite_connect(database or ":memory:", **connect_kwargs)
        return Database(conn, SQLiteDialect())

    if scheme in ("postgresql", "postgres"):
        pg_connect = _load_connect((driver,) if driver else _POSTGRES_DRIVERS)
        dsn = parsed._replace(scheme="postgresql").geturl()
        return Database(pg_connect(dsn, **connect_kwargs), PostgresDialect())

    if scheme == "mysql":
        mysql_connect = _load_connect((driver,) if driver else _MYSQL_DRIVERS)
        params: dict[str, Any] = {
            "host": parsed.hostname or "localhost",
            "port": parsed.port or 3306,
            "database": parsed.path.lstrip("/"),
        }
        if parsed.username:
            params["user"] = unquote(parsed.username)
        if parsed.password:
            params["password"] = unquote(parsed.password)
        params.update(connect_kwargs)
        return Database(mysql_connect(**params), MySQLDialect())

    raise DaoConfigurationError(f"Unsupported database URL scheme: {parsed.scheme!r}")


def _load_connect(module_names: Sequence[str]) -> Callable[..., Any]:
    for module_name in module_names:
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            continue
        connect_fn = getattr(module, "connect", None)
        if connect_fn is not None:
            return connect_fn
    raise DaoConfigurationError(
        f"No database driver available; install one of: {', '.join(module_names)}."
    )
