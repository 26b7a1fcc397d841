"""Bound parameter values for named SQL templates.

A parameter value is bound either as one scalar or as a list of values that
expands into an IN-list. Callers can tag a value explicitly with
`ScalarParam`/`ListParam`; untagged values are classified by `bind_param`
from their runtime shape.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union


@dataclass(frozen=True)
class ScalarParam:
    """Value bound to exactly one placeholder."""

    value: Any


@dataclass(frozen=True)
class ListParam:
    """Values bound as a comma-separated placeholder list."""

    values: Tuple[Any, ...]

    def __init__(self, values: Any):
        object.__setattr__(self, "values", tuple(values))

    def __len__(self) -> int:
        return len(self.values)


BoundParam = Union[ScalarParam, ListParam]

# Collections that are bound as one value rather than expanded.
_SCALAR_COLLECTIONS = (str, bytes, bytearray, memoryview, Mapping)


def is_multi_valued(value: Any) -> bool:
    """Return True when `value` should expand into an IN-list."""

    if isinstance(value, _SCALAR_COLLECTIONS):
        return False
    return isinstance(value, Collection)


def bind_param(value: Any) -> BoundParam:
    """Tag one parameter value with its binding strategy.

    Explicit `ScalarParam`/`ListParam` values are returned unchanged.
    """

    if isinstance(value, (ScalarParam, ListParam)):
        return value
    if is_multi_valued(value):
        return ListParam(value)
    return ScalarParam(value)


def bind_params(params: Optional[Mapping[str, Any]]) -> Dict[str, BoundParam]:
    """Tag every entry of a parameter mapping."""

    if not params:
        return {}
    return {name: bind_param(value) for name, value in params.items()}
