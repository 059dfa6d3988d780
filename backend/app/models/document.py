"""
Document Model - uploaded supporting files
"""
from enum import Enum

from sqlalchemy import Column, String, DateTime, ForeignKey, Index, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
import uuid

from app.core.database import Base
from app.models.types import JSONType, enum_column_type, utc_now


class DocumentType(str, Enum):
    CERTIFICATE = "certificate"
    PROJECT = "project"
    EDUCATION = "education"
    EXPERIENCE = "experience"
    SKILL = "skill"


class DocumentStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


# Lifecycle driven by the extraction worker
DOCUMENT_STATUS_TRANSITIONS = {
    DocumentStatus.PENDING: {DocumentStatus.PROCESSING, DocumentStatus.ERROR},
    DocumentStatus.PROCESSING: {DocumentStatus.COMPLETED, DocumentStatus.ERROR},
    DocumentStatus.COMPLETED: set(),
    DocumentStatus.ERROR: set(),
}


class Document(Base):
    __tablename__ = "documents"

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    resume_id = Column(Uuid, ForeignKey("resumes.id", ondelete="CASCADE"), nullable=True)

    # Metadata
    title = Column(String(500), nullable=False)
    type = Column(enum_column_type(DocumentType, "document_type"), nullable=False)

    # Blob reference ("<user_id>/<token>.<ext>" in the documents bucket)
    file_path = Column(String(500), nullable=False)

    # Filled in by the extraction worker
    extracted_content = Column(JSONType)
    status = Column(
        enum_column_type(DocumentStatus, "document_status"),
        nullable=False,
        default=DocumentStatus.PENDING,
    )

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    # Relationships
    resume = relationship("Resume", back_populates="documents")

    __table_args__ = (
        UniqueConstraint("user_id", "file_path", name="uq_documents_user_file_path"),
        Index("idx_documents_user_created", "user_id", "created_at"),
    )

    def can_transition_to(self, status: DocumentStatus) -> bool:
        return status in DOCUMENT_STATUS_TRANSITIONS[DocumentStatus(self.status)]

    def __repr__(self):
        return f"<Document(id={self.id}, title='{self.title}', type='{self.type}', status='{self.status}')>"
