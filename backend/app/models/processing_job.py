"""
Processing Job Model - work handed to the extraction / export worker
"""
from enum import Enum

from sqlalchemy import Column, Text, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship
import uuid

from app.core.database import Base
from app.models.types import JSONType, enum_column_type, utc_now


class JobKind(str, Enum):
    DOCUMENT_EXTRACTION = "document_extraction"
    RESUME_EXPORT = "resume_export"


class JobStatus(str, Enum):
    QUEUED = "queued"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ExportFormat(str, Enum):
    PDF = "pdf"
    DOCX = "docx"


class ProcessingJob(Base):
    __tablename__ = "processing_jobs"

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    kind = Column(enum_column_type(JobKind, "job_kind"), nullable=False)
    status = Column(enum_column_type(JobStatus, "job_status"), nullable=False, default=JobStatus.QUEUED)

    # Subject of the job (one of the two, depending on kind)
    document_id = Column(Uuid, ForeignKey("documents.id", ondelete="CASCADE"), nullable=True)
    version_id = Column(Uuid, ForeignKey("resume_versions.id", ondelete="CASCADE"), nullable=True)
    format = Column(enum_column_type(ExportFormat, "export_format"), nullable=True)

    # Worker output
    result = Column(JSONType)
    error = Column(Text)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    # Relationships
    document = relationship("Document")
    version = relationship("ResumeVersion")

    __table_args__ = (
        Index("idx_processing_jobs_queue", "status", "kind", "created_at"),
    )

    def __repr__(self):
        return f"<ProcessingJob(id={self.id}, kind='{self.kind}', status='{self.status}')>"
