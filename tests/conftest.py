"""
Shared fixtures: an in-memory stand-in for the Supabase client and an app
wired to it, so route tests never touch the network.
"""

import itertools
from datetime import datetime, timedelta

import pytest

from ariatech import create_app
from ariatech.core.database import StoreResult

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "test-password"


class InMemoryStore:
    """Implements the SupabaseClient interface over dicts"""

    def __init__(self):
        self.tables = {}
        self.objects = {}
        self.fail = False
        self._ids = itertools.count(1)
        self._clock = datetime(2024, 1, 1)

    def seed(self, table, row):
        """Insert a row directly, filling id/created_at like the store does"""
        return self.insert(table, row).data

    def _failure(self):
        return StoreResult.failure("store unavailable", status=503)

    def select(self, table, filters=None, order=None, descending=False, single=False, limit=None):
        if self.fail:
            return self._failure()

        rows = [
            dict(row) for row in self.tables.get(table, [])
            if all(str(row.get(col)) == str(val) for col, val in (filters or {}).items())
        ]
        if order:
            rows.sort(key=lambda r: r.get(order), reverse=descending)
        if limit is not None:
            rows = rows[:limit]

        if single:
            if len(rows) != 1:
                return StoreResult.failure("JSON object requested, multiple (or no) rows returned", status=406)
            return StoreResult(rows[0])
        return StoreResult(rows)

    def insert(self, table, row):
        if self.fail:
            return self._failure()

        self._clock += timedelta(seconds=1)
        stored = dict(row)
        stored.setdefault("id", str(next(self._ids)))
        stored.setdefault("created_at", self._clock.isoformat())
        self.tables.setdefault(table, []).append(stored)
        return StoreResult(dict(stored))

    def delete(self, table, filters):
        if self.fail:
            return self._failure()

        self.tables[table] = [
            row for row in self.tables.get(table, [])
            if not all(str(row.get(col)) == str(val) for col, val in filters.items())
        ]
        return StoreResult(None)

    def upload(self, bucket, path, content, content_type):
        if self.fail:
            return self._failure()
        self.objects[(bucket, path)] = (content, content_type)
        return StoreResult({"Key": f"{bucket}/{path}"})

    def get_public_url(self, bucket, path):
        return f"https://example.supabase.co/storage/v1/object/public/{bucket}/{path}"


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def app(store):
    """App wired to the in-memory store"""
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "ADMIN_USERNAME": ADMIN_USERNAME,
        "ADMIN_PASSWORD": ADMIN_PASSWORD,
        "STORAGE_TYPE": "supabase",
        "STORAGE_BUCKET": "product-images",
    }, store=store)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    """Test client holding a valid admin session"""
    response = client.post("/admin/login", data={
        "username": ADMIN_USERNAME,
        "password": ADMIN_PASSWORD,
    })
    assert response.status_code == 302
    return client


@pytest.fixture
def seeded(store):
    """The three-product example: two computers (one special) and a network product"""
    rows = [
        {"id": "1", "name": "Gaming PC", "price": 1200, "category": "computer", "is_special": True},
        {"id": "2", "name": "Office PC", "price": 600, "category": "computer", "is_special": False},
        {"id": "3", "name": "Router", "price": 80, "category": "network", "is_special": False},
    ]
    for row in rows:
        store.seed("products", row)
    return rows
