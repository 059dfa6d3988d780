"""
Processing Service - boundary to the extraction / export worker

The service never extracts or renders anything itself. It queues jobs,
lets a worker claim them, and records what the worker reports back.
"""
from sqlalchemy.orm import Session
from typing import Any, Dict, Optional
from uuid import UUID

from app.core.config import settings
from app.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from app.core.logging import logger
from app.core.storage import StorageService
from app.models.document import Document, DocumentStatus
from app.models.processing_job import ExportFormat, JobKind, JobStatus, ProcessingJob
from app.repositories.processing_job_repository import ProcessingJobRepository
from app.services.version_service import VersionService


class ProcessingService:
    """Job queue operations for owners and workers"""

    def __init__(self, db: Session, storage: Optional[StorageService] = None):
        self.db = db
        self.storage = storage
        self.jobs = ProcessingJobRepository(db)

    # Owner side

    def get_job(self, user_id: UUID, job_id: UUID) -> ProcessingJob:
        job = self.jobs.get_for_user(user_id, job_id)
        if job is None:
            raise NotFoundError("Job not found")
        return job

    def request_export(
        self,
        user_id: UUID,
        fmt: ExportFormat,
        version_id: Optional[UUID] = None,
        changes_description: Optional[str] = None,
    ) -> ProcessingJob:
        """
        Queue PDF/DOCX generation for a version

        Without version_id the active resume is snapshotted first.
        """
        versions = VersionService(self.db)
        if version_id is not None:
            version = versions.get_version(user_id, version_id)
        else:
            version = versions.snapshot_version(user_id, changes_description or "Export requested")

        if version.artifact_path(fmt.value):
            raise ConflictError(f"{fmt.value.upper()} already generated for version {version.version_number}")
        if self.jobs.pending_export(version.id, fmt) is not None:
            raise ConflictError(
                f"{fmt.value.upper()} export already in progress for version {version.version_number}"
            )

        job = self.jobs.add(ProcessingJob(
            user_id=user_id,
            kind=JobKind.RESUME_EXPORT,
            version_id=version.id,
            format=fmt,
        ))
        self.db.commit()
        self.db.refresh(job)
        logger.info(f"Export job {job.id} queued: v{version.version_number} as {fmt.value}")
        return job

    # Worker side

    def claim(self, kind: Optional[JobKind] = None) -> Optional[Dict[str, Any]]:
        """Hand the oldest queued job to a worker, or None when the queue is empty"""
        job = self.jobs.next_queued(kind)
        if job is None:
            return None

        job.status = JobStatus.RUNNING
        if job.kind == JobKind.DOCUMENT_EXTRACTION:
            self._transition(job.document, DocumentStatus.PROCESSING)
        self.db.commit()
        self.db.refresh(job)
        logger.info(f"Job {job.id} ({job.kind.value}) claimed")
        return self._work_item(job)

    def complete(self, job_id: UUID, result: Dict[str, Any]) -> ProcessingJob:
        job = self._running_job(job_id)

        if job.kind == JobKind.DOCUMENT_EXTRACTION:
            extracted = result.get("extracted_content")
            if not isinstance(extracted, dict):
                raise InvalidInputError("result.extracted_content must be an object")
            self._transition(job.document, DocumentStatus.COMPLETED)
            job.document.extracted_content = extracted
        else:
            path = result.get("path")
            prefix = f"{job.user_id}/"
            if not isinstance(path, str) or not path.startswith(prefix) or ".." in path:
                raise InvalidInputError(f"result.path must be a storage path under '{prefix}'")
            if self.storage is None:
                raise RuntimeError("completing an export requires storage")
            if not self.storage.exists(settings.GENERATED_BUCKET, path):
                raise InvalidInputError(f"result.path not found in {settings.GENERATED_BUCKET}: {path}")
            version = job.version
            fmt = ExportFormat(job.format)
            if version.artifact_path(fmt.value):
                message = f"{fmt.value.upper()} already attached to version {version.version_number}"
                job.status = JobStatus.FAILED
                job.error = message
                self.db.commit()
                logger.warning(f"Job {job.id} failed: {message}")
                raise ConflictError(message)
            setattr(version, f"{fmt.value}_path", path)

        job.status = JobStatus.SUCCEEDED
        job.result = result
        self.db.commit()
        self.db.refresh(job)
        logger.info(f"Job {job.id} succeeded")
        return job

    def fail(self, job_id: UUID, error: str) -> ProcessingJob:
        job = self._running_job(job_id)
        job.status = JobStatus.FAILED
        job.error = error
        if job.kind == JobKind.DOCUMENT_EXTRACTION:
            self._transition(job.document, DocumentStatus.ERROR)
        self.db.commit()
        self.db.refresh(job)
        logger.warning(f"Job {job.id} failed: {error}")
        return job

    def _running_job(self, job_id: UUID) -> ProcessingJob:
        job = self.jobs.get_by_id(job_id)
        if job is None:
            raise NotFoundError("Job not found")
        if job.status != JobStatus.RUNNING:
            raise ConflictError(f"Job is {job.status.value}, expected running")
        return job

    @staticmethod
    def _transition(document: Document, status: DocumentStatus) -> None:
        if not document.can_transition_to(status):
            raise ConflictError(
                f"Document cannot move from {DocumentStatus(document.status).value} to {status.value}"
            )
        document.status = status

    @staticmethod
    def _work_item(job: ProcessingJob) -> Dict[str, Any]:
        if job.kind == JobKind.DOCUMENT_EXTRACTION:
            return {
                "job": job,
                "user_id": job.user_id,
                "bucket": settings.DOCUMENTS_BUCKET,
                "source_path": job.document.file_path,
            }
        version = job.version
        fmt = ExportFormat(job.format)
        return {
            "job": job,
            "user_id": job.user_id,
            "bucket": settings.GENERATED_BUCKET,
            "output_path": f"{job.user_id}/resume-v{version.version_number}-{job.id.hex[:8]}.{fmt.value}",
            "content": version.content,
        }
