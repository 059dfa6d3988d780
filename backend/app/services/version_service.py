"""
Version Service - resume snapshot ledger and artifact downloads
"""
import copy
from dataclasses import dataclass
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from app.core.config import settings
from app.core.exceptions import ArtifactNotAvailableError, ConflictError, InvalidInputError, NotFoundError
from app.core.logging import logger
from app.core.storage import StorageService
from app.models.processing_job import ExportFormat
from app.models.resume_version import ResumeVersion
from app.repositories.resume_repository import ResumeRepository
from app.repositories.version_repository import VersionRepository

ARTIFACT_MEDIA_TYPES = {
    ExportFormat.PDF: "application/pdf",
    ExportFormat.DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


@dataclass
class ArtifactDownload:
    filename: str
    media_type: str
    content: bytes


def artifact_filename(version: ResumeVersion, fmt: ExportFormat) -> str:
    return f"resume-v{version.version_number}.{fmt.value}"


class VersionService:
    """Version ledger operations"""

    def __init__(self, db: Session, storage: Optional[StorageService] = None):
        self.db = db
        self.storage = storage
        self.resumes = ResumeRepository(db)
        self.versions = VersionRepository(db)

    def list_versions(self, user_id: UUID) -> List[ResumeVersion]:
        """Versions of the active resume, newest first; [] without an active resume"""
        resume = self.resumes.get_active(user_id)
        if resume is None:
            return []
        return self.versions.list_for_resume(resume.id)

    def get_version(self, user_id: UUID, version_id: UUID) -> ResumeVersion:
        version = self.versions.get_for_user(user_id, version_id)
        if version is None:
            raise NotFoundError("Version not found")
        return version

    def snapshot_version(self, user_id: UUID, changes_description: Optional[str] = None) -> ResumeVersion:
        """Copy the active resume's content into the next version number"""
        resume = self.resumes.get_active(user_id)
        if resume is None:
            raise NotFoundError("No active resume to snapshot")

        next_number = self.versions.latest_number(resume.id) + 1
        try:
            version = self.versions.create(ResumeVersion(
                resume_id=resume.id,
                version_number=next_number,
                content=copy.deepcopy(resume.content),
                changes_description=changes_description,
            ))
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Another snapshot was created at the same time, please retry")

        logger.info(f"Resume {resume.id} snapshot v{version.version_number} created")
        return version

    async def download_artifact(self, version: ResumeVersion, fmt: str) -> ArtifactDownload:
        """
        Fetch a version's generated export

        Raises ArtifactNotAvailableError, without touching storage, when the
        requested format was never generated.
        """
        try:
            export_format = ExportFormat(fmt)
        except ValueError:
            raise InvalidInputError(f"Unsupported format '{fmt}'. Expected pdf or docx")

        path = version.artifact_path(export_format.value)
        if not path:
            raise ArtifactNotAvailableError(
                f"{export_format.value.upper()} version not available for this version"
            )

        content = await self.storage.download(settings.GENERATED_BUCKET, path)
        return ArtifactDownload(
            filename=artifact_filename(version, export_format),
            media_type=ARTIFACT_MEDIA_TYPES[export_format],
            content=content,
        )
