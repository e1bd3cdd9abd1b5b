"""Persistence services package."""

from app.services.base import BaseService
from app.services.subject_service import SubjectService

__all__ = ["BaseService", "SubjectService"]
