"""Tests for the MongoDB connection manager."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pymongo.errors import (
    CollectionInvalid,
    OperationFailure,
    ServerSelectionTimeoutError,
)

from app.exceptions import DatabaseConnectionError
from app.utils.db import MongoManager


@pytest.fixture
def client_mock():
    """AsyncMongoClient double."""
    with patch("app.utils.db.AsyncMongoClient") as client_class:
        client = MagicMock()
        client.admin.command = AsyncMock(return_value={"ok": 1})
        client.close = AsyncMock()
        client_class.return_value = client
        yield client_class, client


def test_init_client_is_lazy_and_reused(settings, client_mock):
    """Test that the client is created once with the configured URL."""
    client_class, client = client_mock
    manager = MongoManager(settings)

    assert manager.init_client() is client
    assert manager.init_client() is client
    client_class.assert_called_once_with(
        settings.mongo_url, serverSelectionTimeoutMS=settings.mongo_timeout_ms
    )


def test_database_uses_configured_name(settings, client_mock):
    """Test that database returns the configured database."""
    _, client = client_mock

    MongoManager(settings).database

    client.__getitem__.assert_called_once_with("test_subjects")


@pytest.mark.asyncio
async def test_verify_connection_pings(settings, client_mock):
    _, client = client_mock

    assert await MongoManager(settings).verify_connection() is True
    client.admin.command.assert_awaited_once_with("ping")


@pytest.mark.asyncio
async def test_verify_connection_raises_on_failure(settings, client_mock):
    """Test that verify_connection raises DatabaseConnectionError."""
    _, client = client_mock
    client.admin.command.side_effect = ServerSelectionTimeoutError("no servers")

    with pytest.raises(DatabaseConnectionError):
        await MongoManager(settings).verify_connection()


@pytest.mark.asyncio
async def test_ensure_validator_creates_missing_collection(settings, client_mock):
    _, client = client_mock
    db = client.__getitem__.return_value
    db.list_collection_names = AsyncMock(return_value=[])
    db.create_collection = AsyncMock()
    validator = {"$jsonSchema": {"bsonType": "object"}}

    await MongoManager(settings).ensure_validator("subjects", validator)

    db.create_collection.assert_awaited_once_with("subjects", validator=validator)


@pytest.mark.asyncio
async def test_ensure_validator_updates_existing_collection(settings, client_mock):
    _, client = client_mock
    db = client.__getitem__.return_value
    db.list_collection_names = AsyncMock(return_value=["subjects"])
    db.command = AsyncMock()
    validator = {"$jsonSchema": {"bsonType": "object"}}

    await MongoManager(settings).ensure_validator("subjects", validator)

    db.command.assert_awaited_once_with("collMod", "subjects", validator=validator)


@pytest.mark.asyncio
async def test_ensure_validator_tolerates_missing_privileges(settings, client_mock):
    """Test that an unauthorized collMod only logs a warning."""
    _, client = client_mock
    db = client.__getitem__.return_value
    db.list_collection_names = AsyncMock(return_value=["subjects"])
    db.command = AsyncMock(side_effect=OperationFailure("not authorized", code=13))

    await MongoManager(settings).ensure_validator("subjects", {})


@pytest.mark.asyncio
async def test_close_releases_client(settings, client_mock):
    client_class, client = client_mock
    manager = MongoManager(settings)
    manager.init_client()

    await manager.close()
    await manager.close()

    client.close.assert_awaited_once()
    manager.init_client()
    assert client_class.call_count == 2


@pytest.mark.asyncio
async def test_ensure_validator_tolerates_concurrent_create(settings, client_mock):
    """Test that another instance creating the collection first is not fatal."""
    _, client = client_mock
    db = client.__getitem__.return_value
    db.list_collection_names = AsyncMock(return_value=[])
    db.create_collection = AsyncMock(
        side_effect=CollectionInvalid("collection subjects already exists")
    )

    await MongoManager(settings).ensure_validator("subjects", {})

    db.create_collection.assert_awaited_once()
