"""Pydantic schemas for API request/response models."""

from app.schemas.error import ErrorDetail, ErrorResponse
from app.schemas.subject import SubjectPayload, SubjectResponse
from app.schemas.user import UserResponse

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "SubjectPayload",
    "SubjectResponse",
    "UserResponse",
]
