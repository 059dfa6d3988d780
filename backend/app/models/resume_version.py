"""
Resume Version Model - immutable snapshots of a resume
"""
from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey, UniqueConstraint, Uuid, event, inspect
from sqlalchemy.orm import relationship
import uuid

from app.core.database import Base
from app.models.types import JSONType, utc_now

ARTIFACT_FORMATS = ("pdf", "docx")

# Columns frozen once the snapshot row exists
IMMUTABLE_VERSION_FIELDS = ("resume_id", "version_number", "content")


class ResumeVersion(Base):
    __tablename__ = "resume_versions"

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    resume_id = Column(Uuid, ForeignKey("resumes.id", ondelete="CASCADE"), nullable=False, index=True)

    version_number = Column(Integer, nullable=False)
    content = Column(JSONType, nullable=False)

    # Export artifacts in the generated-resumes bucket
    pdf_path = Column(String(500))
    docx_path = Column(String(500))

    changes_description = Column(Text)

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    # Relationships
    resume = relationship("Resume", back_populates="versions")

    __table_args__ = (
        UniqueConstraint("resume_id", "version_number", name="uq_resume_versions_number"),
    )

    def artifact_path(self, fmt: str):
        if fmt not in ARTIFACT_FORMATS:
            raise ValueError(f"Unsupported artifact format: {fmt}")
        return getattr(self, f"{fmt}_path")

    def __repr__(self):
        return f"<ResumeVersion(id={self.id}, resume_id={self.resume_id}, version={self.version_number})>"


@event.listens_for(ResumeVersion, "before_update")
def _reject_snapshot_changes(mapper, connection, target):
    state = inspect(target)
    for field in IMMUTABLE_VERSION_FIELDS:
        if state.attrs[field].history.has_changes():
            raise ValueError(f"ResumeVersion.{field} is immutable")
