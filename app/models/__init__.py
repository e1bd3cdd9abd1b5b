"""Data models package."""

from app.exceptions import (
    DatabaseConnectionError,
    DocumentValidationError,
    InvalidIdentifierError,
    ModelError,
    RecordNotFoundError,
)
from app.models.base import (
    DocumentModel,
    ReferenceJoin,
    UnresolvedReferencePolicy,
    parse_object_id,
)
from app.models.subject import SUBJECT_VALIDATOR, Subject

__all__ = [
    "DocumentModel",
    "ReferenceJoin",
    "UnresolvedReferencePolicy",
    "parse_object_id",
    "ModelError",
    "RecordNotFoundError",
    "DatabaseConnectionError",
    "DocumentValidationError",
    "InvalidIdentifierError",
    "Subject",
    "SUBJECT_VALIDATOR",
]
