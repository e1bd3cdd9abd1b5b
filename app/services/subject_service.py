"""Subject service providing persistence operations for subjects.

This service extends BaseService with the lookup of the users enrolled in a
subject. Everything else is inherited pass-through CRUD.
"""

from typing import Any, List, Optional

from pymongo.asynchronous.database import AsyncDatabase

from app.config import Settings
from app.models.base import ReferenceJoin, UnresolvedReferencePolicy
from app.models.subject import Subject
from app.services.base import BaseService, Document


class SubjectService(BaseService[Subject]):
    """Service for managing Subject documents.

    Provides operations through BaseService inheritance:
    - create(data): Create new subject
    - get_all(): Get all subjects
    - get_by_id(id): Get subject by ID (None if absent)
    - update(id, data): Replace subject (None if absent)
    - delete(id): Delete subject, returning it (None if absent)
    - list_users_in_subject(id): Users referenced by the subject

    Usage:
        service = SubjectService(database, settings)
        subject = await service.create(
            {"name": "Mathematics", "teacher": "Dr. Smith", "difficulty": "hard"}
        )
        users = await service.list_users_in_subject(subject["_id"])

    Attributes:
        model: Subject model class
        users_join: Join resolving ``users`` against the users collection
    """

    model = Subject
    collection_name = "subjects"

    def __init__(self, db: AsyncDatabase, settings: Optional[Settings] = None) -> None:
        """Initialize service with a database handle.

        Args:
            db: Database handle for operations
            settings: Collection names and unresolved reference policy;
                defaults apply when omitted
        """
        settings = settings or Settings()
        super().__init__(db, settings.subjects_collection)
        self.users_join = ReferenceJoin(
            local_field="users",
            from_collection=settings.users_collection,
            unresolved=UnresolvedReferencePolicy(settings.unresolved_users),
        )

    async def list_users_in_subject(self, subject_id: Any) -> List[Document]:
        """Resolve the users referenced by a subject.

        Args:
            subject_id: Subject identifier

        Returns:
            User documents in enrolment order; empty if the subject is absent
        """
        return await self.populate(subject_id, self.users_join)
