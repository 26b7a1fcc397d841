"""Named-parameter SQL and dataclass entity DAOs over DB-API connections."""

import logging

from .core import (
    EMPTY_PARAMS,
    CompiledQuery,
    DaoConfigurationError,
    DataAccessError,
    EmptyResultError,
    EntityDao,
    EntityMappingError,
    IncorrectResultSizeError,
    ListParam,
    NamedParameterDao,
    ParameterBindingError,
    QueryCache,
    ScalarParam,
    bind_param,
    build_entity_metadata,
    compile_named,
    dict_row,
    entity_row,
    resolve_id_column,
    scalar_row,
)
from .ports import Database, Dialect, MySQLDialect, PostgresDialect, SQLiteDialect, connect

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "EMPTY_PARAMS",
    "CompiledQuery",
    "DaoConfigurationError",
    "DataAccessError",
    "EmptyResultError",
    "EntityDao",
    "EntityMappingError",
    "IncorrectResultSizeError",
    "ListParam",
    "NamedParameterDao",
    "ParameterBindingError",
    "QueryCache",
    "ScalarParam",
    "bind_param",
    "build_entity_metadata",
    "compile_named",
    "dict_row",
    "entity_row",
    "resolve_id_column",
    "scalar_row",
    "Database",
    "Dialect",
    "SQLiteDialect",
    "PostgresDialect",
    "MySQLDialect",
    "connect",
]
