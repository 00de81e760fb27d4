"""
Restaurants API — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Tests run without a MongoDB server: the store is given an in-memory
       collection that implements the handful of async methods it calls.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── fake_collection:  in-memory async collection, insertion-ordered
    ├── store:            RestaurantStore over fake_collection
    ├── sample_restaurant_data: a realistic restaurant document
    └── test_client:      HTTPX AsyncClient wired to an app using `store`
"""

import copy
import os
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

# Override settings for testing BEFORE any app imports
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["MONGODB_DATABASE"] = "restaurants_test"
os.environ["LOG_LEVEL"] = "WARNING"


# ══════════════════════════════════════════════════════════════════════════
# In-memory collection
# ══════════════════════════════════════════════════════════════════════════


def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    return all(document.get(key) == value for key, value in query.items())


class FakeCursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents
        self._skip = 0
        self._limit = 0
        self.skipped: Optional[int] = None
        self.limited: Optional[int] = None

    def skip(self, count: int) -> "FakeCursor":
        self._skip = count
        self.skipped = count
        return self

    def limit(self, count: int) -> "FakeCursor":
        self._limit = count
        self.limited = count
        return self

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        window = self._documents[self._skip:]
        if self._limit:
            window = window[: self._limit]
        if length is not None:
            window = window[:length]
        return [copy.deepcopy(doc) for doc in window]


class FakeDatabase:
    def __init__(self):
        self.reachable = True

    async def command(self, name: str) -> Dict[str, Any]:
        if not self.reachable:
            raise PyMongoError("server selection timeout")
        return {"ok": 1.0}


class FakeCollection:
    """
    Async stand-in for the restaurants collection.

    Set `error` to a PyMongoError instance to make every call fail with it.
    `calls` records method names in call order.
    """

    def __init__(self):
        self._documents: Dict[ObjectId, Dict[str, Any]] = {}
        self.database = FakeDatabase()
        self.error: Optional[Exception] = None
        self.calls: List[str] = []
        self.last_cursor: Optional[FakeCursor] = None

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.error is not None:
            raise self.error

    async def insert_one(self, document: Dict[str, Any]):
        self._record("insert_one")
        document.setdefault("_id", ObjectId())
        self._documents[document["_id"]] = copy.deepcopy(document)
        return SimpleNamespace(inserted_id=document["_id"])

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        self._record("find")
        matching = [doc for doc in self._documents.values() if _matches(doc, query)]
        self.last_cursor = FakeCursor(matching)
        return self.last_cursor

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._record("find_one")
        for doc in self._documents.values():
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def find_one_and_update(self, query, update, return_document=ReturnDocument.BEFORE):
        self._record("find_one_and_update")
        for doc in self._documents.values():
            if _matches(doc, query):
                before = copy.deepcopy(doc)
                doc.update(copy.deepcopy(update["$set"]))
                return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before
        return None

    async def delete_one(self, query: Dict[str, Any]):
        self._record("delete_one")
        for key, doc in list(self._documents.items()):
            if _matches(doc, query):
                del self._documents[key]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════


@pytest.fixture
def fake_collection():
    return FakeCollection()


@pytest.fixture
def store(fake_collection):
    from app.services.restaurant_store import RestaurantStore
    return RestaurantStore(fake_collection)


@pytest.fixture
def sample_restaurant_data():
    """A restaurant document shaped like the NYC sample dataset."""
    return {
        "name": "Morris Park Bake Shop",
        "borough": "Bronx",
        "cuisine": "Bakery",
        "restaurant_id": "30075445",
        "address": {
            "building": "1007",
            "coord": [-73.856077, 40.848447],
            "street": "Morris Park Ave",
            "zipcode": "10462",
        },
        "grades": [{"grade": "A", "score": 2}],
    }


@pytest_asyncio.fixture
async def test_client(store):
    """
    HTTPX AsyncClient talking to a fresh app instance.

    ASGITransport does not run the lifespan, and the store is injected
    directly, so no MongoDB connection is attempted.
    """
    from app.main import create_app
    app = create_app(store=store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
