from __future__ import annotations

import copy
from types import SimpleNamespace
from typing import Any

import pytest
from bson import ObjectId
from starlette.testclient import TestClient

from staffdb.core.dependencies import get_profile_store
from staffdb.main import app
from staffdb.services.profile_store import ProfileStore


def _matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    return all(doc.get(key) == value for key, value in query.items())


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]) -> None:
        self._docs = docs
        self.closed = False

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for doc in self._docs:
            yield doc

    async def close(self) -> None:
        self.closed = True


class FakeCollection:
    """Just enough of an async PyMongo collection for the store."""

    def __init__(self, database: FakeDatabase, name: str) -> None:
        self.database = database
        self.name = name
        self.docs: list[dict[str, Any]] = []

    async def insert_one(self, document: dict[str, Any]):
        doc = copy.deepcopy(document)
        doc.setdefault("_id", ObjectId())
        self.docs.append(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    async def insert_many(self, documents: list[dict[str, Any]]):
        ids = [(await self.insert_one(d)).inserted_id for d in documents]
        return SimpleNamespace(inserted_ids=ids)

    async def update_one(self, query: dict[str, Any], update: dict[str, Any]):
        for doc in self.docs:
            if _matches(doc, query):
                changes = update["$set"]
                modified = any(doc.get(k) != v for k, v in changes.items())
                doc.update(changes)
                return SimpleNamespace(matched_count=1, modified_count=int(modified))
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_many(self, query: dict[str, Any]):
        keep = [d for d in self.docs if not _matches(d, query)]
        deleted = len(self.docs) - len(keep)
        self.docs = keep
        return SimpleNamespace(deleted_count=deleted)

    async def drop(self) -> None:
        self.docs = []

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, query or {})])

    async def aggregate(self, pipeline: list[dict[str, Any]]) -> FakeCursor:
        results = [copy.deepcopy(d) for d in self.docs]
        for stage in pipeline:
            lookup = stage["$lookup"]
            foreign = self.database[lookup["from"]]
            for doc in results:
                doc[lookup["as"]] = [
                    copy.deepcopy(f)
                    for f in foreign.docs
                    if f.get(lookup["foreignField"]) == doc.get(lookup["localField"])
                ]
        cursor = FakeCursor(results)
        self.database.cursors.append(cursor)
        return cursor


class FakeDatabase:
    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}
        self.cursors: list[FakeCursor] = []

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(self, name)
        return self.collections[name]

    def snapshot(self) -> dict[str, list[dict[str, Any]]]:
        return {name: copy.deepcopy(c.docs) for name, c in self.collections.items()}


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def store(fake_db):
    return ProfileStore(fake_db)


@pytest.fixture(autouse=True)
def _mongo_settings():
    from staffdb.core.config import settings

    original_uri = settings.MONGO_URI
    original_username = settings.MONGO_USERNAME
    settings.MONGO_URI = ""
    settings.MONGO_USERNAME = ""
    yield
    settings.MONGO_URI = original_uri
    settings.MONGO_USERNAME = original_username


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def store_client(store):
    app.dependency_overrides[get_profile_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
