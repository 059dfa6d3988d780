"""
Resume Service
"""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Any, Dict, Optional
from uuid import UUID

from app.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from app.core.logging import logger
from app.models.resume import PERSONAL_FIELDS, RESUME_SECTIONS, Resume
from app.repositories.resume_repository import ResumeRepository
from app.schemas.resume import PersonalInfoView, ResumeSectionView, ResumeView

DEFAULT_RESUME_TITLE = "My Resume"
NOT_PROVIDED = "Not provided"


def empty_resume_content(email: str = "") -> Dict[str, Any]:
    """Skeleton content for a brand new resume"""
    return {
        "personal": {field: (email or "") if field == "email" else "" for field in PERSONAL_FIELDS},
        "sections": {name: [] for name in RESUME_SECTIONS},
    }


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _safe_list(value):
    return value if isinstance(value, list) else []


def render_resume(resume: Resume) -> ResumeView:
    """
    Build the display view of a resume

    Missing personal fields become "Not provided" and missing sections
    become empty lists; this never fails on absent optional data.
    """
    content = _as_dict(resume.content)
    personal = _as_dict(content.get("personal"))
    sections = _as_dict(content.get("sections"))

    personal_view = {}
    for field in PERSONAL_FIELDS:
        value = personal.get(field)
        personal_view[field] = value.strip() if isinstance(value, str) and value.strip() else NOT_PROVIDED

    return ResumeView(
        id=resume.id,
        title=resume.title or DEFAULT_RESUME_TITLE,
        updated_at=resume.updated_at,
        personal=PersonalInfoView(**personal_view),
        sections=[
            ResumeSectionView(
                name=name,
                entries=_safe_list(sections.get(name)),
                empty_message=f"No {name} added",
            )
            for name in RESUME_SECTIONS
        ],
    )


def validate_resume_content(content: Dict[str, Any]) -> None:
    """Reject content whose personal block or sections have the wrong shape"""
    if "personal" in content and not isinstance(content["personal"], dict):
        raise InvalidInputError("content.personal must be an object")
    if "sections" in content:
        sections = content["sections"]
        if not isinstance(sections, dict):
            raise InvalidInputError("content.sections must be an object")
        for name, entries in sections.items():
            if not isinstance(entries, list):
                raise InvalidInputError(f"content.sections.{name} must be a list")


class ResumeService:
    """Resume service for handling resume operations"""

    def __init__(self, db: Session):
        self.db = db
        self.resumes = ResumeRepository(db)

    def get_active_resume(self, user_id: UUID) -> Optional[Resume]:
        """Active resume, or None when the user has not created one yet"""
        return self.resumes.get_active(user_id)

    def require_active_resume(self, user_id: UUID) -> Resume:
        resume = self.resumes.get_active(user_id)
        if resume is None:
            raise NotFoundError("No active resume. Create your first resume to get started")
        return resume

    def create_resume(self, user_id: UUID, default_email: str = "") -> Resume:
        """
        Create the user's resume with an empty skeleton

        Fails with ConflictError when an active resume already exists; the
        partial unique index turns a concurrent second insert into the same
        error.
        """
        if self.resumes.get_active(user_id) is not None:
            raise ConflictError("An active resume already exists")

        try:
            resume = self.resumes.create(Resume(
                user_id=user_id,
                title=DEFAULT_RESUME_TITLE,
                content=empty_resume_content(default_email),
                is_active=True,
            ))
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("An active resume already exists")

        logger.info(f"Resume created: {resume.id} for user {user_id}")
        return resume

    def update_resume(
        self,
        user_id: UUID,
        title: Optional[str] = None,
        content: Optional[Dict[str, Any]] = None,
    ) -> Resume:
        """Replace title and/or content of the active resume"""
        resume = self.require_active_resume(user_id)
        if title is not None:
            if not title.strip():
                raise InvalidInputError("Title must not be empty")
            resume.title = title.strip()
        if content is not None:
            validate_resume_content(content)
            resume.content = content
        return self.resumes.update(resume)
