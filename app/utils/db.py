"""MongoDB connection manager with proper lifecycle management."""

import logging
from typing import Any, Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import CollectionInvalid, OperationFailure, PyMongoError

from app.config import Settings
from app.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)


class MongoManager:
    """MongoDB manager handling client lifecycle.

    One instance is created per application and stored on ``app.state``.
    The client is created lazily and reused until ``close()``.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize manager with None client.

        Args:
            settings: Settings holding the connection URL and database name.
        """
        self._settings = settings
        self._client: Optional[AsyncMongoClient] = None

    def init_client(self) -> AsyncMongoClient:
        """Initialize and return the MongoDB client.

        Creates client only once and reuses it for subsequent calls.

        Returns:
            Initialized AsyncMongoClient instance.
        """
        if self._client is not None:
            return self._client

        self._client = AsyncMongoClient(
            self._settings.mongo_url,
            serverSelectionTimeoutMS=self._settings.mongo_timeout_ms,
        )
        logger.info(
            "MongoDB client initialized",
            extra={"database": self._settings.mongo_db},
        )
        return self._client

    @property
    def database(self) -> AsyncDatabase:
        """Database handle for the configured database name."""
        return self.init_client()[self._settings.mongo_db]

    async def verify_connection(self) -> bool:
        """Verify MongoDB connection is working.

        Returns:
            True if connection is successful.

        Raises:
            DatabaseConnectionError: If connection fails.
        """
        try:
            await self.init_client().admin.command("ping")
            logger.info("MongoDB connection verified successfully")
            return True
        except PyMongoError as e:
            logger.error(f"MongoDB connection verification failed: {e}")
            raise DatabaseConnectionError(f"Failed to connect to MongoDB: {e}") from e

    async def ensure_validator(self, collection: str, validator: dict[str, Any]) -> None:
        """Install a ``$jsonSchema`` validator on a collection.

        Creates the collection with the validator when it does not exist yet,
        otherwise updates the existing collection with ``collMod``.

        Args:
            collection: Collection name.
            validator: Validator document, e.g. ``{"$jsonSchema": {...}}``.
        """
        db = self.database
        try:
            if collection in await db.list_collection_names():
                await db.command("collMod", collection, validator=validator)
            else:
                await db.create_collection(collection, validator=validator)
            logger.info("Collection validator installed", extra={"collection": collection})
        except (OperationFailure, CollectionInvalid) as e:
            # collMod needs privileges; create_collection races other instances
            logger.warning(
                f"Could not install validator on '{collection}': {e}",
                extra={"collection": collection},
            )

    async def close(self) -> None:
        """Close MongoDB client and clean up.

        Should be called during application shutdown.
        """
        if self._client is not None:
            await self._client.close()
            self._client = None
            logger.info("MongoDB client closed")
