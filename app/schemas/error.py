"""Error envelope schemas."""

from typing import Any, Optional

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Description of the error that made an operation fail."""

    name: str
    message: str
    details: Optional[list[dict[str, Any]]] = None


class ErrorResponse(BaseModel):
    """Error envelope returned by subject routes."""

    message: str
    error: Optional[ErrorDetail] = None
