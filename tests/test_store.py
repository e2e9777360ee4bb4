from datetime import datetime

import pytest

from skateroom.database import SessionLocal
from skateroom.db.store import SqlTableStore, StoreError
from skateroom.models.user import User


@pytest.fixture()
def sql_store(client):
    # The client fixture has reset the schema.
    db = SessionLocal()
    db.add(User(id="u1", email="u1@example.com", password="x"))
    db.commit()
    try:
        yield SqlTableStore(db)
    finally:
        db.close()


def test_insert_returns_generated_columns(sql_store) -> None:
    rows = sql_store.insert("skate_gear", [{"user_id": "u1", "category": "deck", "name": "Deck"}])
    assert len(rows) == 1
    assert rows[0]["id"]
    assert rows[0]["created_at"] is not None


def test_select_filters_and_orders(sql_store) -> None:
    for place, day in [("b", 2), ("a", 1), ("c", 3)]:
        sql_store.insert(
            "skate_sessions", [{"user_id": "u1", "place_name": place, "session_date": datetime(2024, 1, day)}]
        )

    rows = sql_store.select("skate_sessions", {"user_id": "u1"}, order_by="session_date", descending=True)
    assert [r["place_name"] for r in rows] == ["c", "b", "a"]
    assert sql_store.select("skate_sessions", {"user_id": "nobody"}) == []


def test_maybe_single_tolerates_zero_rows(sql_store) -> None:
    assert sql_store.maybe_single("deck_details", {"gear_id": "missing"}) is None


def test_update_and_delete(sql_store) -> None:
    gear = sql_store.insert("skate_gear", [{"user_id": "u1", "category": "wheel", "name": "Old"}])[0]

    updated = sql_store.update("skate_gear", {"name": "New"}, {"id": gear["id"]})
    assert [r["name"] for r in updated] == ["New"]
    assert sql_store.update("skate_gear", {"name": "x"}, {"id": "missing"}) == []

    assert sql_store.delete("skate_gear", {"id": gear["id"]}) == 1
    assert sql_store.select("skate_gear") == []


def test_deleting_gear_cascades_to_details(sql_store) -> None:
    gear = sql_store.insert("skate_gear", [{"user_id": "u1", "category": "deck", "name": "Deck"}])[0]
    sql_store.insert("deck_details", [{"gear_id": gear["id"], "size": "8"}])

    sql_store.delete("skate_gear", {"id": gear["id"]})

    assert sql_store.select("deck_details") == []


def test_errors_are_structured(sql_store) -> None:
    with pytest.raises(StoreError) as info:
        sql_store.select("no_such_table")
    assert info.value.collection == "no_such_table"
    assert info.value.operation == "select"

    with pytest.raises(StoreError) as info:
        sql_store.insert("skate_gear", [{"user_id": "u1", "category": "skis", "name": "nope"}])
    assert info.value.operation == "insert"

    with pytest.raises(StoreError):
        sql_store.delete("skate_gear", {})
