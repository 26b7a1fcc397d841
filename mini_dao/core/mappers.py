"""Row mappers: caller-supplied transformations from one row to one object."""

from __future__ import annotations

from typing import Any, Callable, Dict, Type, TypeVar

from .metadata import build_entity_metadata
from .models import DataclassModel
from .types import RowMapping

E = TypeVar("E", bound=DataclassModel)


def dict_row(row: RowMapping) -> Dict[str, Any]:
    """Return the row as a plain dict."""

    return dict(row)


def scalar_row(row: RowMapping) -> Any:
    """Return the first column value, e.g. for `COUNT(*)` queries."""

    for value in row.values():
        return value
    raise ValueError("Row has no columns.")


def entity_row(model: Type[E]) -> Callable[[RowMapping], E]:
    """Build a mapper that turns rows into `model` instances."""

    meta = build_entity_metadata(model)
    return meta.from_row
