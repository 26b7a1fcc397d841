"""Named-parameter queries with NamedParameterDao."""

from __future__ import annotations

import sys
from pathlib import Path

# Allow running this script directly from repository root.
PROJECT_ROOT = next(
    (parent for parent in Path(__file__).resolve().parents if (parent / "mini_dao").exists()),
    None,
)
if PROJECT_ROOT and str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from mini_dao import NamedParameterDao, ScalarParam, connect, scalar_row


def main() -> None:
    # 1) Open an in-memory SQLite database and wrap it in a DAO.
    with connect("sqlite://") as db:
        dao = NamedParameterDao(db)
        dao.update("CREATE TABLE book (id INTEGER PRIMARY KEY, title TEXT, price REAL)")

        # 2) Writes return the affected-row count.
        for book_id, title, price in [(1, "Dune", 9.5), (2, "Emma", 4.0), (3, "Ulysses", 12.0)]:
            dao.update(
                "INSERT INTO book (id, title, price) VALUES (:id, :title, :price)",
                {"id": book_id, "title": title, "price": price},
            )

        # 3) Lists expand into IN-lists; scalars bind as single values.
        cheap = dao.find_list(
            "SELECT title FROM book WHERE id IN (:ids) AND price < :max ORDER BY id",
            {"ids": [1, 2, 3], "max": 10},
            scalar_row,
        )
        print("Cheap books:", cheap)

        # 4) Zero rows is None for find_object, not an error.
        print("Book 42:", dao.find_object("SELECT * FROM book WHERE id = :id", {"id": 42}))

        # 5) Pagination over an ordered query.
        print("Page 2:", dao.find_paged("SELECT * FROM book ORDER BY id", None, 2, 2))

        # 6) Pin a tuple as one value instead of an IN-list.
        print("Bound:", dao.compile("x = :pair", {"pair": ScalarParam((1, 2))}))


if __name__ == "__main__":
    main()
