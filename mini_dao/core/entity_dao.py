"""Entity-oriented DAO for dataclass models.

Entities are dataclasses whose identifier field is declared with
`field(metadata={"pk": True})`. A field can be mapped to a differently named
column with `metadata={"column": "..."}`::

    @dataclass
    class Account:
        __table__ = "accounts"
        id: Optional[int] = field(default=None, metadata={"pk": True, "auto": True, "column": "uid"})
        email: str = ""

Generated statements and caller-supplied SQL both run through
`NamedParameterDao`, so parameter binding is the same everywhere. Entity
attribute values are always bound as scalars.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from .contracts import DatabasePort, DialectPort
from .mappers import dict_row, scalar_row
from .metadata import EntityMetadata, build_entity_metadata
from .models import DataclassModel
from .params import ScalarParam
from .query_cache import QueryCache
from .sql_dao import NamedParameterDao, require_database

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=DataclassModel)


class EntityDao:
    """Save, update, delete and query dataclass entities."""

    def __init__(self, db: DatabasePort, *, query_cache: Optional[QueryCache] = None):
        """Create an entity DAO.

        Args:
            db: Database adapter shared by every operation.
            query_cache: Cache for queries marked cacheable (`find_all`).
                Without one, those queries always hit the database.
        """

        self.db = require_database(db, type(self).__name__)
        self.sql = NamedParameterDao(self.db)
        self.query_cache = query_cache

    @property
    def d(self) -> DialectPort:
        return self.db.dialect

    def save(self, entity: E) -> E:
        """Insert `entity` and populate a generated identifier."""

        meta = self._meta(type(entity))
        needs_id = meta.auto_id and meta.id_value(entity) is None
        attrs = [
            attr
            for attr in meta.columns
            if not (needs_id and attr == meta.id_attr)
        ]
        table_sql = self.d.q(meta.table)

        if attrs:
            column_sql = ", ".join(self.d.q(meta.columns[attr]) for attr in attrs)
            placeholders = ", ".join(f":{attr}" for attr in attrs)
            sql = f"INSERT INTO {table_sql} ({column_sql}) VALUES ({placeholders})"
        else:
            sql = f"INSERT INTO {table_sql} {self.d.empty_insert_clause()}"
        params = _scalar_params(entity, attrs)

        if needs_id and self.d.supports_returning:
            sql += self.d.returning_clause(meta.id_column)
            new_id = self.sql.query_for_object(sql, params, scalar_row)
            setattr(entity, meta.id_attr, new_id)
        else:
            compiled = self.sql.compile(sql, params)
            cursor = self.db.execute(compiled.sql, compiled.params)
            if needs_id:
                new_id = self.d.get_lastrowid(cursor)
                if new_id is not None:
                    setattr(entity, meta.id_attr, new_id)

        self._invalidate(meta.table)
        return entity

    def update(self, entity: E) -> int:
        """Update the row identified by the entity's identifier."""

        meta = self._meta(type(entity))
        if meta.id_value(entity) is None:
            raise ValueError("Cannot UPDATE without PK set on object.")
        writable = meta.writable_attrs
        if not writable:
            raise ValueError(
                "Cannot UPDATE model with no writable columns besides primary key."
            )

        set_clause = ", ".join(f"{self.d.q(meta.columns[attr])} = :{attr}" for attr in writable)
        sql = (
            f"UPDATE {self.d.q(meta.table)} SET {set_clause} "
            f"WHERE {self.d.q(meta.id_column)} = :{meta.id_attr}"
        )
        count = self.sql.update(sql, _scalar_params(entity, [*writable, meta.id_attr]))
        self._invalidate(meta.table)
        return count

    def save_or_update(self, entity: E) -> E:
        """Insert entities without an identifier, update the others.

        An entity with an assigned identifier that matches no row is inserted.
        Row existence is checked with a keyed SELECT, since some drivers report
        zero affected rows for an UPDATE that changes no value.
        """

        meta = self._meta(type(entity))
        id_value = meta.id_value(entity)
        if id_value is None or not self.exists_by_id(type(entity), id_value):
            return self.save(entity)
        self.update(entity)
        return entity

    def delete(self, entity: E) -> int:
        """Delete the row identified by the entity's identifier."""

        meta = self._meta(type(entity))
        id_value = meta.id_value(entity)
        if id_value is None:
            raise ValueError("Cannot DELETE without PK set on object.")
        return self.delete_by_id(type(entity), id_value)

    def delete_by_id(self, model: Type[E], id_value: Any) -> int:
        """Delete one row by identifier and return the affected-row count.

        The WHERE column is the identifier field's mapped column name.

        Raises:
            EntityMappingError: `model` declares no identifier field.
        """

        meta = self._meta(model)
        sql = f"DELETE FROM {self.d.q(meta.table)} WHERE {self.d.q(meta.id_column)} = :id"
        count = self.sql.update(sql, {"id": ScalarParam(id_value)})
        logger.debug("Deleted %d %s row(s) with id %r", count, meta.table, id_value)
        self._invalidate(meta.table)
        return count

    def find_by_id(self, model: Type[E], id_value: Any) -> Optional[E]:
        meta = self._meta(model)
        sql = f"SELECT * FROM {self.d.q(meta.table)} WHERE {self.d.q(meta.id_column)} = :id"
        return self.sql.find_object(sql, {"id": ScalarParam(id_value)}, meta.from_row)

    def exists_by_id(self, model: Type[E], id_value: Any) -> bool:
        meta = self._meta(model)
        sql = f"SELECT 1 FROM {self.d.q(meta.table)} WHERE {self.d.q(meta.id_column)} = :id"
        return self.sql.find_object(sql, {"id": ScalarParam(id_value)}, scalar_row) is not None

    def find_all(self, model: Type[E]) -> List[E]:
        """Return every entity of `model`; the query is cacheable."""

        meta = self._meta(model)
        sql = f"SELECT * FROM {self.d.q(meta.table)}"

        rows = self.query_cache.get(meta.table, sql) if self.query_cache is not None else None
        if rows is None:
            rows = self.sql.find_list(sql, None, dict_row)
            if self.query_cache is not None:
                self.query_cache.put(meta.table, sql, rows)
        return [meta.from_row(row) for row in rows]

    def find_object(
        self,
        model: Type[E],
        sql: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Optional[E]:
        """Return the single entity matched by `sql`, or None."""

        return self.sql.find_object(sql, params, self._meta(model).from_row)

    def find_by(
        self,
        model: Type[E],
        sql: str,
        params: Optional[Mapping[str, Any]] = None,
    ) -> List[E]:
        return self.sql.find_list(sql, params, self._meta(model).from_row)

    def find_by_sql(
        self, sql: str, params: Optional[Mapping[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """Run `sql` and return untyped rows."""

        return self.sql.find_list(sql, params, dict_row)

    def find_paged(
        self,
        model: Type[E],
        sql: str,
        params: Optional[Mapping[str, Any]],
        offset: int,
        page_size: int,
    ) -> List[E]:
        return self.sql.find_paged(sql, params, offset, page_size, self._meta(model).from_row)

    def update_by(self, sql: str, params: Optional[Mapping[str, Any]] = None) -> int:
        """Run a bulk statement; clears the whole query cache."""

        count = self.sql.update(sql, params)
        self._invalidate(None)
        return count

    def _meta(self, model: Type[E]) -> EntityMetadata[E]:
        return build_entity_metadata(model)

    def _invalidate(self, table: Optional[str]) -> None:
        if self.query_cache is not None:
            self.query_cache.invalidate(table)


def _scalar_params(entity: Any, attrs: List[str]) -> Dict[str, ScalarParam]:
    return {attr: ScalarParam(getattr(entity, attr)) for attr in attrs}
