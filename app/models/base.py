"""Base document model with schema validation for MongoDB collections."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Type, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel, ConfigDict, ValidationError

from app.exceptions import DocumentValidationError, InvalidIdentifierError

T = TypeVar("T", bound="DocumentModel")


def parse_object_id(value: Any, field: str = "id") -> ObjectId:
    """Convert a value into an ObjectId.

    Args:
        value: ObjectId or its 24 character hex representation
        field: Field name reported in the error

    Returns:
        ObjectId instance

    Raises:
        InvalidIdentifierError: If value is not a valid ObjectId
    """
    if isinstance(value, ObjectId):
        return value
    # ObjectId(None) would generate a fresh id
    if not isinstance(value, str):
        raise InvalidIdentifierError(value, field)
    try:
        return ObjectId(value)
    except InvalidId as e:
        raise InvalidIdentifierError(value, field) from e


class DocumentModel(BaseModel):
    """Abstract base class for documents stored in a MongoDB collection.

    Subclasses declare the writable fields of a document. The ``_id`` is
    never part of the model: it is assigned by the database on insert and
    kept unchanged on replacement. Unknown fields are dropped.

    Usage:
        class User(DocumentModel):
            name: str = Field(..., min_length=1)
            email: str = Field(..., min_length=1)

        user = User.validate_payload({"name": "John", "email": "j@x.io"})
        await collection.insert_one(user.to_mongo())
    """

    model_config = ConfigDict(extra="ignore")

    # Fields holding lists of ObjectId references to other collections
    __references__: ClassVar[tuple[str, ...]] = ()

    @classmethod
    def validate_payload(cls: Type[T], data: Any) -> T:
        """Validate raw input against the document schema.

        Args:
            data: Decoded request body or any mapping

        Returns:
            Validated model instance

        Raises:
            DocumentValidationError: If required fields are missing or malformed
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise DocumentValidationError(
                cls.__name__,
                e.errors(include_url=False, include_context=False, include_input=False),
            ) from e

    def to_mongo(self) -> Dict[str, Any]:
        """Convert model to a document ready to be written.

        Reference fields are converted to ObjectId values.
        """
        doc = self.model_dump()
        for field in self.__references__:
            doc[field] = [parse_object_id(ref, field) for ref in doc.get(field, [])]
        return doc


class UnresolvedReferencePolicy(str, Enum):
    """What to return for a reference that no longer resolves."""

    DROP = "drop"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True, slots=True)
class ReferenceJoin:
    """Join of a list of references against another collection.

    Attributes:
        local_field: Field of the source document holding ObjectId references
        from_collection: Collection the references point into
        unresolved: Policy for references with no matching document
    """

    local_field: str
    from_collection: str
    unresolved: UnresolvedReferencePolicy = UnresolvedReferencePolicy.DROP
