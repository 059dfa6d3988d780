"""
SQLAlchemy Models
"""
from app.models.user import User
from app.models.resume import Resume
from app.models.resume_version import ResumeVersion
from app.models.document import Document, DocumentType, DocumentStatus
from app.models.processing_job import ProcessingJob, JobKind, JobStatus, ExportFormat

__all__ = [
    "User",
    "Resume",
    "ResumeVersion",
    "Document",
    "DocumentType",
    "DocumentStatus",
    "ProcessingJob",
    "JobKind",
    "JobStatus",
    "ExportFormat",
]
