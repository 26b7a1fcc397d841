"""Compilation of `:name` SQL templates into driver-ready statements.

A template is scanned once for named placeholders. Each placeholder is then
rendered in the dialect's paramstyle, with list bindings expanded into one
placeholder per value, so `WHERE id IN (:ids)` becomes
`WHERE id IN (:ids__1, :ids__2)` for `named` drivers and
`WHERE id IN (%s, %s)` for `format` drivers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Set

from .contracts import DialectPort
from .errors import ParameterBindingError
from .params import BoundParam, ListParam, bind_params
from .types import NamedParams, PositionalParams, QueryParams

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_QUOTES = ("'", '"', "`")


@dataclass(frozen=True)
class Placeholder:
    """One `:name` occurrence and its character span in the template."""

    name: str
    start: int
    end: int


@dataclass(frozen=True)
class CompiledQuery:
    """SQL rewritten for a paramstyle together with its bound parameters."""

    sql: str
    params: QueryParams


def parse_placeholders(sql: str) -> List[Placeholder]:
    """Return the named placeholders of a template in order of appearance.

    Quoted literals and identifiers, `--` and `/* */` comments, and `::`
    casts are skipped.
    """

    found: List[Placeholder] = []
    length = len(sql)
    i = 0
    while i < length:
        ch = sql[i]
        if ch in _QUOTES:
            i = _skip_quoted(sql, i, ch)
            continue
        if sql.startswith("--", i):
            newline = sql.find("\n", i)
            i = length if newline < 0 else newline + 1
            continue
        if sql.startswith("/*", i):
            close = sql.find("*/", i + 2)
            i = length if close < 0 else close + 2
            continue
        if ch == ":":
            if sql.startswith("::", i):
                i += 2
                continue
            match = _NAME_RE.match(sql, i + 1)
            if match:
                found.append(Placeholder(match.group(0), i, match.end()))
                i = match.end()
                continue
        i += 1
    return found


def compile_named(
    sql: str,
    params: Optional[Mapping[str, Any]],
    dialect: DialectPort,
) -> CompiledQuery:
    """Bind a parameter mapping into a template for the given dialect.

    Args:
        sql: Template with `:name` placeholders.
        params: Placeholder name to value. Keys not referenced by the
            template are ignored.
        dialect: Target dialect; its `paramstyle` picks the output style.

    Returns:
        The rewritten SQL and a dict (`named`) or list (positional) of values.

    Raises:
        ParameterBindingError: A placeholder has no entry in `params`.
    """

    bound = bind_params(params)
    named = dialect.paramstyle == "named"
    escape_percent = dialect.paramstyle == "format"
    out: QueryParams = {} if named else []
    taken = set(bound)

    pieces: List[str] = []
    cursor = 0
    for placeholder in parse_placeholders(sql):
        pieces.append(_literal(sql[cursor : placeholder.start], escape_percent))
        binding = bound.get(placeholder.name)
        if binding is None:
            raise ParameterBindingError(
                f"No value supplied for parameter {placeholder.name!r}."
            )
        pieces.append(_render(placeholder.name, binding, dialect, out, taken))
        cursor = placeholder.end
    pieces.append(_literal(sql[cursor:], escape_percent))

    return CompiledQuery("".join(pieces), out)


def append_limit_offset(
    compiled: CompiledQuery,
    *,
    limit: Optional[int],
    offset: Optional[int],
    dialect: DialectPort,
) -> CompiledQuery:
    """Append pagination clauses and their values to a compiled query.

    A trailing `;` is removed first so the clauses land inside the statement.
    For `named` drivers the value keys are renamed if the query already uses
    `__limit` or `__offset`.
    """

    sql = compiled.sql.rstrip().rstrip(";").rstrip()

    if dialect.paramstyle == "named":
        named_params: NamedParams = {}
        if isinstance(compiled.params, dict):
            named_params.update(compiled.params)
        taken = set(named_params)
        if limit is not None:
            key = _fresh_key("__limit", taken)
            named_params[key] = limit
            sql += f" LIMIT :{key}"
        if offset is not None:
            key = _fresh_key("__offset", taken)
            named_params[key] = offset
            sql += f" OFFSET :{key}"
        return CompiledQuery(sql, named_params)

    positional_params: PositionalParams = []
    if isinstance(compiled.params, list):
        positional_params.extend(compiled.params)
    if limit is not None:
        sql += f" LIMIT {dialect.placeholder('limit')}"
        positional_params.append(limit)
    if offset is not None:
        sql += f" OFFSET {dialect.placeholder('offset')}"
        positional_params.append(offset)
    return CompiledQuery(sql, positional_params)


def _render(
    name: str,
    binding: BoundParam,
    dialect: DialectPort,
    out: QueryParams,
    taken: Set[str],
) -> str:
    if isinstance(binding, ListParam):
        if not binding.values:
            # `x IN (NULL)` is valid SQL that matches no row.
            return "NULL"
        if isinstance(out, dict):
            keys = [
                _fresh_key(f"{name}__{index}", taken)
                for index in range(1, len(binding.values) + 1)
            ]
            out.update(zip(keys, binding.values))
            return ", ".join(f":{key}" for key in keys)
        out.extend(binding.values)
        return ", ".join(dialect.placeholder(name) for _ in binding.values)

    if isinstance(out, dict):
        out[name] = binding.value
        return f":{name}"
    out.append(binding.value)
    return dialect.placeholder(name)


def _fresh_key(base: str, taken: Set[str]) -> str:
    """Return `base`, suffixed with `_` until it is not in `taken`, and reserve it."""

    key = base
    while key in taken:
        key += "_"
    taken.add(key)
    return key


def _literal(text: str, escape_percent: bool) -> str:
    return text.replace("%", "%%") if escape_percent else text


def _skip_quoted(sql: str, start: int, quote: str) -> int:
    """Return the index just past the quoted section opened at `start`."""

    i = start + 1
    length = len(sql)
    while i < length:
        if sql[i] == quote:
            if i + 1 < length and sql[i + 1] == quote:
                i += 2
                continue
            return i + 1
        i += 1
    return length
