from __future__ import annotations

import unittest

from mini_dao.core.errors import ParameterBindingError
from mini_dao.core.named_sql import (
    CompiledQuery,
    append_limit_offset,
    compile_named,
    parse_placeholders,
)
from mini_dao.core.params import ListParam, ScalarParam, bind_param, bind_params
from mini_dao.ports.db_api.dialects import Dialect, MySQLDialect, PostgresDialect, SQLiteDialect


class _QmarkDialect(Dialect):
    paramstyle = "qmark"


class BindParamTests(unittest.TestCase):
    def test_scalars_are_bound_as_single_values(self) -> None:
        for value in (42, 3.5, None, "abc", b"raw", {"k": "v"}, True):
            with self.subTest(value=value):
                self.assertEqual(bind_param(value), ScalarParam(value))

    def test_collections_are_multi_valued(self) -> None:
        self.assertEqual(bind_param([1, 2, 3]), ListParam([1, 2, 3]))
        self.assertEqual(bind_param((1, 2)), ListParam((1, 2)))
        self.assertEqual(bind_param(frozenset({7})), ListParam([7]))
        self.assertEqual(bind_param(range(3)), ListParam((0, 1, 2)))
        self.assertEqual(len(bind_param({4, 5})), 2)

    def test_explicit_tags_bypass_inference(self) -> None:
        pinned = ScalarParam((1, 2))
        self.assertIs(bind_param(pinned), pinned)
        explicit = ListParam(["a"])
        self.assertIs(bind_param(explicit), explicit)

    def test_bind_params_handles_none_and_mappings(self) -> None:
        self.assertEqual(bind_params(None), {})
        self.assertEqual(
            bind_params({"id": 1, "ids": [1, 2]}),
            {"id": ScalarParam(1), "ids": ListParam([1, 2])},
        )


class ParsePlaceholderTests(unittest.TestCase):
    def test_finds_names_in_order(self) -> None:
        names = [p.name for p in parse_placeholders("SELECT * FROM t WHERE a = :a AND b IN (:b_list)")]
        self.assertEqual(names, ["a", "b_list"])

    def test_skips_literals_comments_and_casts(self) -> None:
        sql = (
            "-- :commented\n"
            "SELECT ':quoted', \"col:x\", `odd:y`, :v::int /* :block */ "
            "FROM t WHERE name = 'it''s :not' AND id = :id"
        )
        names = [p.name for p in parse_placeholders(sql)]
        self.assertEqual(names, ["v", "id"])

    def test_spans_cover_the_placeholder_text(self) -> None:
        sql = "x = :name"
        (placeholder,) = parse_placeholders(sql)
        self.assertEqual(sql[placeholder.start : placeholder.end], ":name")

    def test_colon_without_name_is_not_a_placeholder(self) -> None:
        self.assertEqual(parse_placeholders("SELECT 1 WHERE a := 2 AND b = ':'"), [])


class CompileNamedTests(unittest.TestCase):
    def test_scalar_only_mapping_is_not_expanded(self) -> None:
        compiled = compile_named(
            "SELECT * FROM t WHERE a = :a AND b = :b", {"a": 1, "b": "x"}, SQLiteDialect()
        )
        self.assertEqual(compiled.sql, "SELECT * FROM t WHERE a = :a AND b = :b")
        self.assertEqual(compiled.params, {"a": 1, "b": "x"})

    def test_list_expands_for_named_style(self) -> None:
        compiled = compile_named(
            "SELECT * FROM t WHERE x IN (:ids)", {"ids": [1, 2, 3]}, SQLiteDialect()
        )
        self.assertEqual(
            compiled.sql, "SELECT * FROM t WHERE x IN (:ids__1, :ids__2, :ids__3)"
        )
        self.assertEqual(compiled.params, {"ids__1": 1, "ids__2": 2, "ids__3": 3})

    def test_list_expands_for_format_style(self) -> None:
        compiled = compile_named(
            "SELECT * FROM t WHERE x IN (:ids) AND y = :y",
            {"ids": (4, 5), "y": "z"},
            PostgresDialect(),
        )
        self.assertEqual(compiled.sql, "SELECT * FROM t WHERE x IN (%s, %s) AND y = %s")
        self.assertEqual(compiled.params, [4, 5, "z"])

    def test_qmark_style(self) -> None:
        compiled = compile_named("a = :a AND b IN (:b)", {"a": 1, "b": [2, 3]}, _QmarkDialect())
        self.assertEqual(compiled.sql, "a = ? AND b IN (?, ?)")
        self.assertEqual(compiled.params, [1, 2, 3])

    def test_expanded_keys_avoid_caller_names(self) -> None:
        compiled = compile_named(
            "x IN (:ids) AND y <> :ids__1", {"ids": [1, 2], "ids__1": 9}, SQLiteDialect()
        )
        self.assertEqual(compiled.sql, "x IN (:ids__1_, :ids__2) AND y <> :ids__1")
        self.assertEqual(compiled.params, {"ids__1_": 1, "ids__2": 2, "ids__1": 9})

    def test_repeated_list_gets_distinct_keys(self) -> None:
        compiled = compile_named("a IN (:ids) OR b IN (:ids)", {"ids": [1, 2]}, SQLiteDialect())
        self.assertEqual(compiled.sql, "a IN (:ids__1, :ids__2) OR b IN (:ids__1_, :ids__2_)")
        self.assertEqual(
            compiled.params, {"ids__1": 1, "ids__2": 2, "ids__1_": 1, "ids__2_": 2}
        )

    def test_empty_list_renders_null(self) -> None:
        compiled = compile_named("x IN (:ids)", {"ids": []}, SQLiteDialect())
        self.assertEqual(compiled.sql, "x IN (NULL)")
        self.assertEqual(compiled.params, {})

    def test_pinned_scalar_tuple_is_not_expanded(self) -> None:
        compiled = compile_named("tags = :tags", {"tags": ScalarParam(("a", "b"))}, MySQLDialect())
        self.assertEqual(compiled.sql, "tags = %s")
        self.assertEqual(compiled.params, [("a", "b")])

    def test_repeated_name(self) -> None:
        named = compile_named("a = :x OR b = :x", {"x": 1}, SQLiteDialect())
        self.assertEqual(named.sql, "a = :x OR b = :x")
        self.assertEqual(named.params, {"x": 1})

        positional = compile_named("a = :x OR b = :x", {"x": 1}, PostgresDialect())
        self.assertEqual(positional.sql, "a = %s OR b = %s")
        self.assertEqual(positional.params, [1, 1])

    def test_percent_is_escaped_for_format_style_only(self) -> None:
        sql = "SELECT * FROM t WHERE name LIKE 'a%' AND id = :id"
        pg = compile_named(sql, {"id": 1}, PostgresDialect())
        self.assertEqual(pg.sql, "SELECT * FROM t WHERE name LIKE 'a%%' AND id = %s")

        sqlite = compile_named(sql, {"id": 1}, SQLiteDialect())
        self.assertEqual(sqlite.sql, sql)

    def test_cast_survives_compilation(self) -> None:
        compiled = compile_named("SELECT :v::int", {"v": "3"}, PostgresDialect())
        self.assertEqual(compiled.sql, "SELECT %s::int")

    def test_extra_keys_are_ignored(self) -> None:
        compiled = compile_named("a = :a", {"a": 1, "unused": 2}, SQLiteDialect())
        self.assertEqual(compiled.params, {"a": 1})

    def test_missing_parameter_raises(self) -> None:
        with self.assertRaises(ParameterBindingError) as ctx:
            compile_named("a = :a AND b = :b", {"a": 1}, PostgresDialect())
        self.assertIn("'b'", str(ctx.exception))
        self.assertIsInstance(ctx.exception, ValueError)

    def test_no_params(self) -> None:
        self.assertEqual(
            compile_named("SELECT 1", None, SQLiteDialect()), CompiledQuery("SELECT 1", {})
        )
        self.assertEqual(
            compile_named("SELECT 1", None, PostgresDialect()), CompiledQuery("SELECT 1", [])
        )


class AppendLimitOffsetTests(unittest.TestCase):
    def test_named_style(self) -> None:
        compiled = append_limit_offset(
            CompiledQuery("SELECT * FROM t WHERE a = :a ;", {"a": 1}),
            limit=5,
            offset=10,
            dialect=SQLiteDialect(),
        )
        self.assertEqual(
            compiled.sql, "SELECT * FROM t WHERE a = :a LIMIT :__limit OFFSET :__offset"
        )
        self.assertEqual(compiled.params, {"a": 1, "__limit": 5, "__offset": 10})

    def test_named_keys_avoid_existing_params(self) -> None:
        compiled = append_limit_offset(
            CompiledQuery("SELECT * FROM t WHERE x > :__limit", {"__limit": 0}),
            limit=2,
            offset=0,
            dialect=SQLiteDialect(),
        )
        self.assertEqual(
            compiled.sql, "SELECT * FROM t WHERE x > :__limit LIMIT :__limit_ OFFSET :__offset"
        )
        self.assertEqual(compiled.params, {"__limit": 0, "__limit_": 2, "__offset": 0})

    def test_positional_style(self) -> None:
        compiled = append_limit_offset(
            CompiledQuery("SELECT * FROM t WHERE a = %s", [1]),
            limit=5,
            offset=None,
            dialect=MySQLDialect(),
        )
        self.assertEqual(compiled.sql, "SELECT * FROM t WHERE a = %s LIMIT %s")
        self.assertEqual(compiled.params, [1, 5])


if __name__ == "__main__":
    unittest.main()
