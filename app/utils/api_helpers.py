"""API helper functions for routes."""

from contextlib import contextmanager
from typing import Iterator

from app.exceptions import ModelError, OperationFailedError


@contextmanager
def operation_errors(message: str) -> Iterator[None]:
    """Report model errors raised inside the block as a failed operation.

    Args:
        message: Message shown to the client, e.g. "Error creating subject".

    Raises:
        OperationFailedError: Wrapping any ModelError raised in the block.

    Example:
        with operation_errors("Error getting subject"):
            subject = await service.get_by_id(subject_id)
    """
    try:
        yield
    except ModelError as e:
        raise OperationFailedError(message, e) from e
