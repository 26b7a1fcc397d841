"""Public core API for named-parameter queries and entity DAOs."""

from .entity_dao import EntityDao
from .errors import (
    DaoConfigurationError,
    DataAccessError,
    EmptyResultError,
    EntityMappingError,
    IncorrectResultSizeError,
    ParameterBindingError,
)
from .mappers import dict_row, entity_row, scalar_row
from .metadata import EntityMetadata, build_entity_metadata, resolve_id_column
from .models import DataclassModel, column_name, id_field, table_name
from .named_sql import CompiledQuery, append_limit_offset, compile_named, parse_placeholders
from .params import BoundParam, ListParam, ScalarParam, bind_param, bind_params
from .query_cache import QueryCache
from .sql_dao import EMPTY_PARAMS, NamedParameterDao

__all__ = [
    "EMPTY_PARAMS",
    "BoundParam",
    "CompiledQuery",
    "DaoConfigurationError",
    "DataAccessError",
    "DataclassModel",
    "EmptyResultError",
    "EntityDao",
    "EntityMappingError",
    "EntityMetadata",
    "IncorrectResultSizeError",
    "ListParam",
    "NamedParameterDao",
    "ParameterBindingError",
    "QueryCache",
    "ScalarParam",
    "append_limit_offset",
    "bind_param",
    "bind_params",
    "build_entity_metadata",
    "column_name",
    "compile_named",
    "dict_row",
    "entity_row",
    "id_field",
    "parse_placeholders",
    "resolve_id_column",
    "scalar_row",
    "table_name",
]
