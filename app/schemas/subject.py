"""Subject schemas for API responses."""

from typing import Any

from pydantic import BaseModel, Field


class SubjectResponse(BaseModel):
    """Response schema for subject.

    Attributes:
        id: Subject ID (ObjectId hex string).
        name: Subject name.
        teacher: Teacher giving the subject.
        difficulty: Difficulty label.
        users: IDs of the users enrolled in the subject.
    """

    id: str
    name: str
    teacher: str
    difficulty: str
    users: list[str] = Field(default_factory=list)

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "SubjectResponse":
        """Build response from a stored subject document."""
        return cls(
            id=str(doc["_id"]),
            name=doc["name"],
            teacher=doc["teacher"],
            difficulty=doc["difficulty"],
            users=[str(ref) for ref in doc.get("users", [])],
        )


class SubjectPayload(BaseModel):
    """Documented shape of create and update request bodies.

    Bodies are validated by the Subject model when they are written, so this
    schema only feeds the OpenAPI documentation.
    """

    name: str
    teacher: str
    difficulty: str
    users: list[str] = Field(default_factory=list)
