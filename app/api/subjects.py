"""Subjects API endpoints."""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from fastapi import status as http_status

from app.config import Settings
from app.exceptions import RecordNotFoundError
from app.schemas.error import ErrorResponse
from app.schemas.subject import SubjectPayload, SubjectResponse
from app.schemas.user import UserResponse
from app.services.subject_service import SubjectService
from app.utils.api_helpers import operation_errors
from app.utils.dependencies import dependencies, get_app_settings

router = APIRouter(
    prefix="/subjects",
    tags=["Subjects"],
    responses={http_status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)

# Bodies are plain JSON objects; the Subject model validates them on write
SubjectBody = Body(
    ...,
    openapi_examples={
        "subject": {
            "summary": "A subject with one enrolled user",
            "value": SubjectPayload(
                name="Linear Algebra",
                teacher="Dr. Smith",
                difficulty="hard",
                users=["665f1b2c9d1e8a0012345678"],
            ).model_dump(),
        }
    },
)


def _subject_or_none(
    subject: Optional[dict[str, Any]], subject_id: str, settings: Settings
) -> Optional[SubjectResponse]:
    """Serialize a subject; absence is ``null`` unless strict errors are on."""
    if subject is None:
        if settings.strict_errors:
            raise RecordNotFoundError("Subject", subject_id)
        return None
    return SubjectResponse.from_document(subject)


@router.post(
    "",
    status_code=http_status.HTTP_201_CREATED,
    summary="Create a new subject",
)
async def create_subject(
    data: dict[str, Any] = SubjectBody,
    service: SubjectService = Depends(dependencies.subject),
) -> SubjectResponse:
    """Create a new subject.

    Args:
        data: Subject fields (name, teacher, difficulty, optional users).
        service: SubjectService instance.

    Returns:
        Created subject with its assigned id.
    """
    with operation_errors("Error creating subject"):
        subject = await service.create(data)
    return SubjectResponse.from_document(subject)


@router.get("", summary="Get all subjects")
async def get_all_subjects(
    service: SubjectService = Depends(dependencies.subject),
) -> list[SubjectResponse]:
    """List every subject, in no particular order."""
    with operation_errors("Error getting subjects"):
        subjects = await service.get_all()
    return [SubjectResponse.from_document(s) for s in subjects]


@router.get(
    "/{subject_id}",
    summary="Get a subject by ID",
    responses={http_status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_subject(
    subject_id: str,
    service: SubjectService = Depends(dependencies.subject),
    settings: Settings = Depends(get_app_settings),
) -> Optional[SubjectResponse]:
    """Get a subject by ID.

    Returns ``null`` for an unknown id, or 404 when STRICT_ERRORS is enabled.
    """
    with operation_errors("Error getting subject"):
        subject = await service.get_by_id(subject_id)
    return _subject_or_none(subject, subject_id, settings)


@router.put(
    "/{subject_id}",
    summary="Update a subject by ID",
    responses={http_status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def update_subject(
    subject_id: str,
    data: dict[str, Any] = SubjectBody,
    service: SubjectService = Depends(dependencies.subject),
    settings: Settings = Depends(get_app_settings),
) -> Optional[SubjectResponse]:
    """Replace a subject with the given fields.

    The body replaces the stored subject entirely, so it must contain every
    required field.
    """
    with operation_errors("Error updating subject"):
        subject = await service.update(subject_id, data)
    return _subject_or_none(subject, subject_id, settings)


@router.delete(
    "/{subject_id}",
    summary="Delete a subject by ID",
    responses={http_status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def delete_subject(
    subject_id: str,
    service: SubjectService = Depends(dependencies.subject),
    settings: Settings = Depends(get_app_settings),
) -> Optional[SubjectResponse]:
    """Delete a subject and return it as it was before deletion."""
    with operation_errors("Error deleting subject"):
        subject = await service.delete(subject_id)
    return _subject_or_none(subject, subject_id, settings)


@router.get(
    "/{subject_id}/users",
    summary="Get all users in a subject",
    responses={http_status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_users_in_subject(
    subject_id: str,
    service: SubjectService = Depends(dependencies.subject),
) -> list[UserResponse]:
    """List the users enrolled in a subject.

    References to users that no longer exist are left out (or returned as
    id-only placeholders when UNRESOLVED_USERS=placeholder).

    Raises:
        RecordNotFoundError: If the subject does not exist.
    """
    with operation_errors("Error getting users in subject"):
        subject = await service.get_by_id(subject_id)
    if subject is None:
        raise RecordNotFoundError("Subject", subject_id)
    with operation_errors("Error getting users in subject"):
        users = await service.list_users_in_subject(subject_id)
        return [UserResponse.from_document(u) for u in users]
