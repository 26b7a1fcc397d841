"""Dataclass entity helpers: identifier lookup and column mapping."""

from __future__ import annotations

from dataclasses import Field, fields, is_dataclass
from typing import Any, ClassVar, List, Optional, Protocol, Type

from .errors import EntityMappingError


class DataclassModel(Protocol):
    """Protocol for supported dataclass entity types."""

    __dataclass_fields__: ClassVar[dict[str, Any]]


def require_dataclass_model(cls: Type[Any]) -> None:
    """Validate that a class is a dataclass entity."""

    if not isinstance(cls, type) or not is_dataclass(cls):
        name = getattr(cls, "__name__", type(cls).__name__)
        raise EntityMappingError(f"{name} must be a dataclass.")


def table_name(model_or_cls: Any) -> str:
    """Resolve table name from entity class or instance.

    Uses `__table__` override when present, otherwise lowercased class name.
    """

    cls = model_or_cls if isinstance(model_or_cls, type) else type(model_or_cls)
    name = getattr(cls, "__table__", None)
    return name if isinstance(name, str) and name else cls.__name__.lower()


def model_fields(cls: Type[DataclassModel]) -> List[Field[Any]]:
    """Return dataclass fields for an entity type."""

    require_dataclass_model(cls)
    return list(fields(cls))


def pk_fields(cls: Type[DataclassModel]) -> List[Field[Any]]:
    """Return identifier fields defined with `metadata={'pk': True}`."""

    pks = [f for f in model_fields(cls) if f.metadata.get("pk")]
    if not pks:
        raise EntityMappingError(
            f"{cls.__name__} has no PK field. Use field(metadata={{'pk': True}})."
        )
    return pks


def id_field(cls: Type[DataclassModel]) -> Field[Any]:
    """Return the single identifier field of an entity type."""

    pks = pk_fields(cls)
    if len(pks) != 1:
        raise EntityMappingError(
            f"{cls.__name__} declares {len(pks)} PK fields; exactly 1 is supported."
        )
    return pks[0]


def column_name(field: Field[Any]) -> str:
    """Return the mapped column of a field.

    `metadata={'column': 'uid'}` maps the field to `uid`; a missing or empty
    name falls back to the attribute name.
    """

    mapped = field.metadata.get("column")
    if mapped is None or mapped == "":
        return field.name
    if not isinstance(mapped, str):
        raise EntityMappingError(
            f"Field {field.name!r} metadata 'column' must be a string."
        )
    return mapped


def auto_id_field(cls: Type[DataclassModel]) -> Optional[Field[Any]]:
    """Return the identifier field when the database generates its value."""

    pk = id_field(cls)
    return pk if pk.metadata.get("auto") else None
