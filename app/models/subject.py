"""Subject model representing academic subjects."""

from typing import Any, ClassVar

from bson import ObjectId
from pydantic import Field, field_validator

from app.models.base import DocumentModel


class Subject(DocumentModel):
    """Subject document with the users enrolled in it.

    Attributes:
        name: Name of the subject (e.g., "Mathematics", "Physics")
        teacher: Name of the teacher giving the subject
        difficulty: Free-form difficulty label (e.g., "easy", "hard")
        users: References to documents in the users collection

    Example:
        subject = Subject.validate_payload(
            {"name": "Linear Algebra", "teacher": "Dr. Smith", "difficulty": "hard"}
        )
    """

    __references__: ClassVar[tuple[str, ...]] = ("users",)

    name: str = Field(..., min_length=1)
    teacher: str = Field(..., min_length=1)
    difficulty: str = Field(..., min_length=1)
    users: list[str] = Field(default_factory=list)

    @field_validator("users", mode="before")
    @classmethod
    def users_as_hex(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [str(v) if isinstance(v, ObjectId) else v for v in value]
        return value

    @field_validator("users")
    @classmethod
    def users_are_object_ids(cls, value: list[str]) -> list[str]:
        for ref in value:
            if not ObjectId.is_valid(ref):
                raise ValueError(f"'{ref}' is not a valid user identifier")
        return value


# Collection-level validator mirroring the model, enforced by MongoDB itself
SUBJECT_VALIDATOR: dict[str, Any] = {
    "$jsonSchema": {
        "bsonType": "object",
        "required": ["name", "teacher", "difficulty"],
        "properties": {
            "name": {"bsonType": "string", "minLength": 1},
            "teacher": {"bsonType": "string", "minLength": 1},
            "difficulty": {"bsonType": "string", "minLength": 1},
            "users": {"bsonType": "array", "items": {"bsonType": "objectId"}},
        },
    }
}
