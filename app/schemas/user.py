"""User schemas for API responses."""

from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from app.exceptions import DocumentValidationError


class UserResponse(BaseModel):
    """Response schema for a user enrolled in a subject.

    Users are owned by another service. Fields are optional because
    unresolved references may be returned as placeholders holding only the id.
    """

    id: str
    name: Optional[str] = None
    age: Optional[int] = None
    email: Optional[str] = None

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "UserResponse":
        """Build response from a stored user document.

        Raises:
            DocumentValidationError: If the stored user has malformed fields
        """
        try:
            return cls(
                id=str(doc["_id"]),
                name=doc.get("name"),
                age=doc.get("age"),
                email=doc.get("email"),
            )
        except ValidationError as e:
            raise DocumentValidationError(
                "User",
                e.errors(include_url=False, include_context=False, include_input=False),
            ) from e
