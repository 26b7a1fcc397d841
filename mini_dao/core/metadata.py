"""Entity metadata extraction used by `EntityDao` statement generation."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Generic, List, Mapping, Type, TypeVar

from .models import (
    DataclassModel,
    auto_id_field,
    column_name,
    id_field,
    model_fields,
    table_name,
)
from .types import RowMapping

T = TypeVar("T", bound=DataclassModel)


@dataclass(frozen=True)
class EntityMetadata(Generic[T]):
    """Normalized entity description.

    Attributes:
        model: Entity dataclass.
        table: Table name.
        id_attr: Identifier attribute name.
        id_column: Column the identifier attribute maps to.
        auto_id: Whether the database generates identifier values.
        columns: Attribute name to column name, in field order.
    """

    model: Type[T]
    table: str
    id_attr: str
    id_column: str
    auto_id: bool
    columns: Mapping[str, str]

    @property
    def writable_attrs(self) -> List[str]:
        return [attr for attr in self.columns if attr != self.id_attr]

    def id_value(self, entity: T) -> Any:
        return getattr(entity, self.id_attr)

    def from_row(self, row: RowMapping) -> T:
        """Build an entity from a row; unmapped columns are ignored."""

        kwargs = {
            attr: row[column] for attr, column in self.columns.items() if column in row
        }
        return self.model(**kwargs)  # type: ignore[call-arg]


@lru_cache(maxsize=None)
def build_entity_metadata(model: Type[T]) -> EntityMetadata[T]:
    """Build entity metadata from dataclass field metadata.

    Results are cached per class.

    Raises:
        EntityMappingError: If `model` is not a dataclass or does not declare
            exactly one identifier field.
    """

    pk = id_field(model)
    auto = auto_id_field(model)
    columns = {field.name: column_name(field) for field in model_fields(model)}

    return EntityMetadata(
        model=model,
        table=table_name(model),
        id_attr=pk.name,
        id_column=column_name(pk),
        auto_id=auto is not None,
        columns=MappingProxyType(columns),
    )


def resolve_id_column(model: Type[DataclassModel]) -> str:
    """Return the column name the entity's identifier maps to."""

    return build_entity_metadata(model).id_column
