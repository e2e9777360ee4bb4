from __future__ import annotations

import copy
import os
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient


def pytest_configure() -> None:
    # Point the ORM and blob storage at throwaway locations before skateroom is imported.
    os.environ["ORM_DB_URL"] = "sqlite:///./test.db"
    os.environ["ENVIRONMENT"] = "test"
    os.environ["STORAGE_DIR"] = "./test-storage"
    os.environ["PUBLIC_BASE_URL"] = "http://testserver"
    os.environ["JWT_SECRET"] = "test-secret-for-skateroom"


class RecordingStore:
    """In-memory TableStore that records every call and can fail on demand.

    `fail_on` holds (operation, collection) pairs; maybe_single counts as "select".
    """

    # Detail collections are keyed by gear_id and get no generated id.
    KEYED_BY_GEAR = {
        "deck_details",
        "truck_details",
        "wheel_details",
        "bearing_details",
        "griptape_details",
        "tool_details",
    }

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_on: set[tuple[str, str]] = set()
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)

    def _enter(self, operation: str, collection: str) -> None:
        from skateroom.db.store import StoreError

        self.calls.append((operation, collection))
        if (operation, collection) in self.fail_on:
            raise StoreError(collection, operation, "injected failure")

    @staticmethod
    def _matches(row: dict[str, Any], filters: dict[str, Any] | None) -> bool:
        return all(row.get(key) == value for key, value in (filters or {}).items())

    def select(self, collection, filters=None, *, order_by=None, descending=False):
        self._enter("select", collection)
        rows = [copy.deepcopy(r) for r in self.tables.get(collection, []) if self._matches(r, filters)]
        if order_by is not None:
            rows.sort(key=lambda r: r.get(order_by), reverse=descending)
        return rows

    def maybe_single(self, collection, filters):
        rows = self.select(collection, filters)
        return rows[0] if rows else None

    def insert(self, collection, rows):
        self._enter("insert", collection)
        inserted = []
        for row in rows:
            stored = dict(row)
            if collection not in self.KEYED_BY_GEAR:
                stored.setdefault("id", str(uuid.uuid4()))
                self._clock += timedelta(seconds=1)
                stored.setdefault("created_at", self._clock)
                stored.setdefault("updated_at", self._clock)
            self.tables.setdefault(collection, []).append(stored)
            inserted.append(copy.deepcopy(stored))
        return inserted

    def update(self, collection, patch, filters):
        self._enter("update", collection)
        updated = []
        for row in self.tables.get(collection, []):
            if self._matches(row, filters):
                row.update(patch)
                updated.append(copy.deepcopy(row))
        return updated

    def delete(self, collection, filters):
        self._enter("delete", collection)
        rows = self.tables.get(collection, [])
        kept = [r for r in rows if not self._matches(r, filters)]
        self.tables[collection] = kept
        return len(rows) - len(kept)


@pytest.fixture()
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture()
def client() -> Any:
    from skateroom.database import Base, engine
    from skateroom.main import create_app

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    app = create_app()
    with TestClient(app) as c:
        yield c


def sign_up(client: TestClient, email: str = "skater@example.com", password: str = "SecretPass123") -> dict[str, str]:
    r = client.post("/auth/sign-up", json={"email": email, "password": password})
    assert r.status_code == 201, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture()
def auth_headers(client: TestClient) -> dict[str, str]:
    return sign_up(client)
