"""Pytest configuration and shared fixtures."""

import copy
from typing import Any, AsyncGenerator, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pymongo import ReturnDocument
from pymongo.results import InsertOneResult

from app.application import create_app
from app.config import Settings
from app.services.subject_service import SubjectService
from app.utils.db import MongoManager


class FakeCursor:
    """Result of FakeCollection.find()."""

    def __init__(self, docs: list[dict]) -> None:
        self._docs = docs

    async def to_list(self, length: Optional[int] = None) -> list[dict]:
        docs = [copy.deepcopy(d) for d in self._docs]
        return docs if length is None else docs[:length]


class FakeCollection:
    """In-memory collection supporting the calls the services make."""

    def __init__(self) -> None:
        self.docs: dict[ObjectId, dict] = {}

    @staticmethod
    def _matches(doc: dict, query: dict) -> bool:
        for key, cond in query.items():
            value = doc.get(key)
            if isinstance(cond, dict) and "$in" in cond:
                if value not in cond["$in"]:
                    return False
            elif value != cond:
                return False
        return True

    def _first(self, query: dict) -> Optional[dict]:
        return next((d for d in self.docs.values() if self._matches(d, query)), None)

    async def insert_one(self, doc: dict) -> InsertOneResult:
        doc.setdefault("_id", ObjectId())
        self.docs[doc["_id"]] = copy.deepcopy(doc)
        return InsertOneResult(doc["_id"], True)

    def find(self, query: Optional[dict] = None) -> FakeCursor:
        return FakeCursor([d for d in self.docs.values() if self._matches(d, query or {})])

    async def find_one(self, query: dict) -> Optional[dict]:
        return copy.deepcopy(self._first(query))

    async def find_one_and_replace(
        self,
        query: dict,
        replacement: dict,
        return_document: bool = ReturnDocument.BEFORE,
    ) -> Optional[dict]:
        current = self._first(query)
        if current is None:
            return None
        new = {"_id": current["_id"], **copy.deepcopy(replacement)}
        self.docs[current["_id"]] = new
        result = new if return_document == ReturnDocument.AFTER else current
        return copy.deepcopy(result)

    async def find_one_and_delete(self, query: dict) -> Optional[dict]:
        current = self._first(query)
        if current is None:
            return None
        return self.docs.pop(current["_id"])


class FakeDatabase:
    """In-memory database creating collections on first access."""

    def __init__(self) -> None:
        self.collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture
def settings(monkeypatch) -> Settings:
    """Create test settings instance with default behaviour."""
    monkeypatch.setenv("API_TITLE", "Subjects API Test")
    monkeypatch.setenv("API_VERSION", "0.1.0-test")
    monkeypatch.setenv("MONGO_DB", "test_subjects")
    monkeypatch.delenv("STRICT_ERRORS", raising=False)
    monkeypatch.delenv("UNRESOLVED_USERS", raising=False)
    monkeypatch.delenv("SUBJECTS_COLLECTION", raising=False)
    monkeypatch.delenv("USERS_COLLECTION", raising=False)
    return Settings()


@pytest.fixture
def strict_settings(settings: Settings, monkeypatch) -> Settings:
    """Settings with STRICT_ERRORS enabled."""
    monkeypatch.setenv("STRICT_ERRORS", "true")
    return Settings()


@pytest.fixture
def fake_db() -> FakeDatabase:
    """Empty in-memory database."""
    return FakeDatabase()


@pytest.fixture
def subject_service(fake_db: FakeDatabase, settings: Settings) -> SubjectService:
    """SubjectService bound to the in-memory database."""
    return SubjectService(fake_db, settings)


def make_mongo(database: Any) -> MagicMock:
    """MongoManager double serving the given database."""
    mongo = MagicMock(spec=MongoManager)
    mongo.database = database
    mongo.verify_connection = AsyncMock(return_value=True)
    mongo.ensure_validator = AsyncMock()
    mongo.close = AsyncMock()
    return mongo


@pytest.fixture
def app(settings: Settings, fake_db: FakeDatabase) -> FastAPI:
    """Create FastAPI application backed by the in-memory database."""
    return create_app(settings, mongo=make_mongo(fake_db))


@pytest.fixture
def strict_app(strict_settings: Settings, fake_db: FakeDatabase) -> FastAPI:
    """Application with STRICT_ERRORS enabled."""
    return create_app(strict_settings, mongo=make_mongo(fake_db))


@pytest.fixture
async def api_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client for API testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def strict_client(strict_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async test client for the strict application."""
    transport = ASGITransport(app=strict_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
