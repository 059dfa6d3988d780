"""
Processing Job Repository
"""
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from app.models.processing_job import ExportFormat, JobKind, JobStatus, ProcessingJob


class ProcessingJobRepository:
    """Processing job data access layer"""

    def __init__(self, db: Session):
        self.db = db

    def add(self, job: ProcessingJob) -> ProcessingJob:
        """Stage a job in the current transaction"""
        self.db.add(job)
        self.db.flush()
        return job

    def get_by_id(self, job_id: UUID) -> Optional[ProcessingJob]:
        return self.db.get(ProcessingJob, job_id)

    def get_for_user(self, user_id: UUID, job_id: UUID) -> Optional[ProcessingJob]:
        return self.db.query(ProcessingJob).filter(
            ProcessingJob.id == job_id,
            ProcessingJob.user_id == user_id,
        ).first()

    def next_queued(self, kind: Optional[JobKind] = None) -> Optional[ProcessingJob]:
        """Oldest queued job, row-locked where the database supports it"""
        query = self.db.query(ProcessingJob).filter(ProcessingJob.status == JobStatus.QUEUED)
        if kind is not None:
            query = query.filter(ProcessingJob.kind == kind)
        return query.order_by(
            ProcessingJob.created_at.asc()
        ).with_for_update(skip_locked=True).first()

    def pending_export(self, version_id: UUID, fmt: ExportFormat) -> Optional[ProcessingJob]:
        """Queued or running export of a version in the given format"""
        return self.db.query(ProcessingJob).filter(
            ProcessingJob.kind == JobKind.RESUME_EXPORT,
            ProcessingJob.version_id == version_id,
            ProcessingJob.format == fmt,
            ProcessingJob.status.in_([JobStatus.QUEUED, JobStatus.RUNNING]),
        ).first()
