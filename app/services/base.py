"""Base service class wrapping a MongoDB collection."""

import logging
from typing import Any, Dict, Generic, List, Optional, TypeVar

from bson.errors import BSONError
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from app.exceptions import DatabaseConnectionError, DocumentValidationError
from app.models.base import (
    DocumentModel,
    ReferenceJoin,
    UnresolvedReferencePolicy,
    parse_object_id,
)

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=DocumentModel)

Document = Dict[str, Any]


class BaseService(Generic[T]):
    """Base service class exposing one collection through named operations.

    Every method is a single driver call (``populate`` is a lookup followed
    by one join query). Input documents are validated against ``model``
    before they are written; driver failures are logged and re-raised as
    DatabaseConnectionError.

    Usage:
        class UserService(BaseService[User]):
            model = User
            collection_name = "users"

        service = UserService(database)
        user = await service.create({"name": "John", "email": "john@example.com"})

    Attributes:
        db: Database handle the service operates on
        collection: Collection holding ``model`` documents
        model: Document model class this service manages
    """

    model: type[T]
    collection_name: str

    def __init__(self, db: AsyncDatabase, collection_name: Optional[str] = None) -> None:
        """Initialize service with a database handle.

        Args:
            db: Database handle for operations
            collection_name: Overrides the class level collection name
        """
        self.db = db
        self.collection = db[collection_name or self.collection_name]

    @property
    def _name(self) -> str:
        return self.model.__name__

    def _unencodable(self, e: Exception) -> DocumentValidationError:
        """Wrap a document the driver could not encode as BSON."""
        return DocumentValidationError(
            self._name, [{"loc": (), "msg": str(e), "type": "bson_encoding"}]
        )

    async def create(self, data: Any) -> Document:
        """Validate and insert a new document.

        Args:
            data: Raw document fields

        Returns:
            Inserted document including the assigned ``_id``

        Raises:
            DocumentValidationError: If required fields are missing or malformed
            DatabaseConnectionError: If database operation fails
        """
        doc = self.model.validate_payload(data).to_mongo()
        try:
            result = await self.collection.insert_one(doc)
        except (BSONError, UnicodeEncodeError) as e:
            raise self._unencodable(e) from e
        except PyMongoError as e:
            logger.error(
                f"Failed to create {self._name}",
                extra={"model": self._name, "error": str(e)},
                exc_info=True,
            )
            raise DatabaseConnectionError(
                f"Database error during create: {str(e)}"
            ) from e
        doc["_id"] = result.inserted_id
        logger.debug(
            f"Created {self._name}",
            extra={"model": self._name, "id": str(result.inserted_id)},
        )
        return doc

    async def get_all(self) -> List[Document]:
        """Retrieve all documents of the collection, in no particular order.

        Raises:
            DatabaseConnectionError: If database operation fails
        """
        try:
            return await self.collection.find({}).to_list(None)
        except PyMongoError as e:
            logger.error(
                f"Failed to get all {self._name}",
                extra={"model": self._name, "error": str(e)},
                exc_info=True,
            )
            raise DatabaseConnectionError(
                f"Database error during get_all: {str(e)}"
            ) from e

    async def get_by_id(self, record_id: Any) -> Optional[Document]:
        """Retrieve a document by its identifier.

        Args:
            record_id: ObjectId or its hex string

        Returns:
            Document or None if not found

        Raises:
            InvalidIdentifierError: If record_id is not a valid ObjectId
            DatabaseConnectionError: If database operation fails
        """
        oid = parse_object_id(record_id)
        try:
            return await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            logger.error(
                f"Failed to get {self._name} by id",
                extra={"model": self._name, "id": str(oid), "error": str(e)},
                exc_info=True,
            )
            raise DatabaseConnectionError(f"Database error during get: {str(e)}") from e

    async def update(self, record_id: Any, data: Any) -> Optional[Document]:
        """Replace a document entirely with new, validated fields.

        Fields missing from ``data`` are not carried over from the stored
        document; the identifier is kept.

        Args:
            record_id: ObjectId or its hex string
            data: Full replacement document fields

        Returns:
            Document after replacement or None if not found

        Raises:
            InvalidIdentifierError: If record_id is not a valid ObjectId
            DocumentValidationError: If required fields are missing or malformed
            DatabaseConnectionError: If database operation fails
        """
        oid = parse_object_id(record_id)
        replacement = self.model.validate_payload(data).to_mongo()
        try:
            record = await self.collection.find_one_and_replace(
                {"_id": oid}, replacement, return_document=ReturnDocument.AFTER
            )
        except (BSONError, UnicodeEncodeError) as e:
            raise self._unencodable(e) from e
        except PyMongoError as e:
            logger.error(
                f"Failed to update {self._name}",
                extra={"model": self._name, "id": str(oid), "error": str(e)},
                exc_info=True,
            )
            raise DatabaseConnectionError(
                f"Database error during update: {str(e)}"
            ) from e
        logger.debug(
            f"Updated {self._name}",
            extra={"model": self._name, "id": str(oid), "found": record is not None},
        )
        return record

    async def delete(self, record_id: Any) -> Optional[Document]:
        """Delete a document permanently.

        Args:
            record_id: ObjectId or its hex string

        Returns:
            Document as it was before deletion or None if not found

        Raises:
            InvalidIdentifierError: If record_id is not a valid ObjectId
            DatabaseConnectionError: If database operation fails
        """
        oid = parse_object_id(record_id)
        try:
            record = await self.collection.find_one_and_delete({"_id": oid})
        except PyMongoError as e:
            logger.error(
                f"Failed to delete {self._name}",
                extra={"model": self._name, "id": str(oid), "error": str(e)},
                exc_info=True,
            )
            raise DatabaseConnectionError(
                f"Database error during delete: {str(e)}"
            ) from e
        logger.debug(
            f"Deleted {self._name}",
            extra={"model": self._name, "id": str(oid), "found": record is not None},
        )
        return record

    async def populate(self, record_id: Any, join: ReferenceJoin) -> List[Document]:
        """Resolve the references held by one document.

        Results follow the order of the reference list; a reference listed
        twice appears twice. References without a matching document are
        handled according to ``join.unresolved``.

        Args:
            record_id: Identifier of the document holding the references
            join: Which field to resolve and against which collection

        Returns:
            Referenced documents, or an empty list if the source is absent

        Raises:
            InvalidIdentifierError: If record_id is not a valid ObjectId
            DatabaseConnectionError: If database operation fails
        """
        source = await self.get_by_id(record_id)
        if source is None:
            return []
        refs = source.get(join.local_field) or []
        if not refs:
            return []

        try:
            found = await (
                self.db[join.from_collection]
                .find({"_id": {"$in": list(set(refs))}})
                .to_list(None)
            )
        except PyMongoError as e:
            logger.error(
                f"Failed to populate {self._name}.{join.local_field}",
                extra={"model": self._name, "id": str(record_id), "error": str(e)},
                exc_info=True,
            )
            raise DatabaseConnectionError(
                f"Database error during populate: {str(e)}"
            ) from e

        by_id = {doc["_id"]: doc for doc in found}
        resolved: List[Document] = []
        missing = 0
        for ref in refs:
            doc = by_id.get(ref)
            if doc is not None:
                resolved.append(doc)
                continue
            missing += 1
            if join.unresolved is UnresolvedReferencePolicy.PLACEHOLDER:
                resolved.append({"_id": ref})

        if missing:
            logger.warning(
                f"{missing} unresolved reference(s) in {self._name}.{join.local_field}",
                extra={
                    "model": self._name,
                    "id": str(source["_id"]),
                    "collection": join.from_collection,
                    "policy": join.unresolved.value,
                },
            )
        return resolved
