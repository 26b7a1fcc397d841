from __future__ import annotations

import unittest
from dataclasses import dataclass, field
from typing import Optional

from mini_dao import EntityMappingError, build_entity_metadata, entity_row, resolve_id_column
from mini_dao.core.models import column_name, id_field, table_name


@dataclass
class Account:
    __table__ = "accounts"

    id: Optional[int] = field(default=None, metadata={"pk": True, "auto": True, "column": "uid"})
    email: str = field(default="", metadata={"column": "email_address"})
    nickname: Optional[str] = None


@dataclass
class Widget:
    code: str = field(default="", metadata={"pk": True})
    label: str = ""


@dataclass
class BlankColumn:
    key: int = field(default=0, metadata={"pk": True, "column": ""})


@dataclass
class NoPk:
    name: str = ""


@dataclass
class TwoPks:
    a: int = field(default=0, metadata={"pk": True})
    b: int = field(default=0, metadata={"pk": True})


@dataclass
class BadColumn:
    id: int = field(default=0, metadata={"pk": True, "column": 5})


class PlainClass:
    pass


class EntityMetadataTests(unittest.TestCase):
    def test_mapped_identifier_column(self) -> None:
        meta = build_entity_metadata(Account)
        self.assertEqual(meta.table, "accounts")
        self.assertEqual(meta.id_attr, "id")
        self.assertEqual(meta.id_column, "uid")
        self.assertTrue(meta.auto_id)
        self.assertEqual(
            dict(meta.columns), {"id": "uid", "email": "email_address", "nickname": "nickname"}
        )
        self.assertEqual(meta.writable_attrs, ["email", "nickname"])

    def test_unmapped_identifier_uses_attribute_name(self) -> None:
        meta = build_entity_metadata(Widget)
        self.assertEqual(meta.table, "widget")
        self.assertEqual(meta.id_column, "code")
        self.assertFalse(meta.auto_id)
        self.assertEqual(resolve_id_column(Widget), "code")

    def test_empty_column_name_falls_back_to_attribute(self) -> None:
        self.assertEqual(resolve_id_column(BlankColumn), "key")
        self.assertEqual(column_name(id_field(BlankColumn)), "key")

    def test_metadata_is_cached_per_class(self) -> None:
        self.assertIs(build_entity_metadata(Account), build_entity_metadata(Account))

    def test_missing_identifier_is_a_mapping_error(self) -> None:
        with self.assertRaises(EntityMappingError) as ctx:
            build_entity_metadata(NoPk)
        self.assertIn("NoPk has no PK field", str(ctx.exception))

    def test_multiple_identifiers_are_rejected(self) -> None:
        with self.assertRaises(EntityMappingError):
            build_entity_metadata(TwoPks)

    def test_non_dataclass_is_rejected(self) -> None:
        with self.assertRaises(EntityMappingError):
            build_entity_metadata(PlainClass)  # type: ignore[type-var]

    def test_non_string_column_is_rejected(self) -> None:
        with self.assertRaises(EntityMappingError):
            build_entity_metadata(BadColumn)

    def test_table_name_from_instance(self) -> None:
        self.assertEqual(table_name(Widget(code="w")), "widget")
        self.assertEqual(table_name(Account()), "accounts")

    def test_from_row_maps_columns_and_ignores_extras(self) -> None:
        mapper = entity_row(Account)
        account = mapper({"uid": 3, "email_address": "a@example.com", "extra": 1})
        self.assertEqual(account, Account(id=3, email="a@example.com", nickname=None))


if __name__ == "__main__":
    unittest.main()
