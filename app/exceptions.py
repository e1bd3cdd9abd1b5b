"""Application exceptions."""

from typing import Any


class AppError(Exception):
    """Base exception for application errors."""


class ModelError(AppError):
    """Base exception for model/database operations."""


class RecordNotFoundError(ModelError):
    """Raised when a record is not found in the database."""

    def __init__(self, model_name: str, record_id: str):
        self.model_name = model_name
        self.record_id = record_id
        super().__init__(f"{model_name} with id={record_id} not found")


class InvalidIdentifierError(ModelError):
    """Raised when a value is not a valid document identifier."""

    def __init__(self, value: Any, field: str = "id"):
        self.value = value
        self.field = field
        super().__init__(f"Invalid identifier for '{field}': {value!r}")


class DocumentValidationError(ModelError):
    """Raised when a document does not satisfy its schema."""

    def __init__(self, model_name: str, errors: list[dict[str, Any]]):
        self.model_name = model_name
        self.errors = errors
        fields = ", ".join(
            ".".join(str(part) for part in err.get("loc", ())) or "body"
            for err in errors
        )
        super().__init__(f"{model_name} validation failed: {fields}")


class DatabaseConnectionError(ModelError):
    """Raised when database connection fails."""


class OperationFailedError(AppError):
    """Raised by route handlers when a subject operation fails.

    Carries the message shown to API clients together with the original
    error, so the exception handler can decide the status code.
    """

    def __init__(self, message: str, cause: Exception):
        self.message = message
        self.cause = cause
        super().__init__(f"{message}: {cause}")
