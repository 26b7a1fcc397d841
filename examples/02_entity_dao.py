"""Dataclass entities with EntityDao."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "mini_dao").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mini_dao import EntityDao, QueryCache, connect


@dataclass
class Account:
    __table__ = "accounts"

    # Identifier mapped to the "uid" column; the database generates it.
    id: Optional[int] = field(default=None, metadata={"pk": True, "auto": True, "column": "uid"})
    email: str = ""


def main() -> None:
    with connect("sqlite://") as db:
        db.execute('CREATE TABLE "accounts" ("uid" INTEGER PRIMARY KEY, "email" TEXT);')
        dao = EntityDao(db, query_cache=QueryCache())

        alice = dao.save(Account(email="alice@example.com"))
        dao.save(Account(email="bob@example.com"))
        print("Saved:", alice)

        # find_all is cacheable; entity writes through the DAO invalidate it.
        print("All:", dao.find_all(Account))

        alice.email = "alice@example.org"
        dao.save_or_update(alice)
        print("By id:", dao.find_by_id(Account, alice.id))

        # DELETE ... WHERE "uid" = :id
        print("Deleted:", dao.delete_by_id(Account, alice.id))
        print("Remaining:", dao.find_all(Account))


if __name__ == "__main__":
    main()
