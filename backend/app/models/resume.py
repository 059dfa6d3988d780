"""
Resume Model
"""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Index, Uuid, text
from sqlalchemy.orm import relationship
import uuid

from app.core.database import Base
from app.models.types import JSONType, utc_now

# Named sections of resume content, in display order
RESUME_SECTIONS = ("experience", "education", "skills", "projects", "certificates")
PERSONAL_FIELDS = ("name", "email", "phone", "location")


class Resume(Base):
    __tablename__ = "resumes"

    # Primary Key
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False, default="My Resume")

    # Structured content
    content = Column(JSONType, nullable=False, default=dict)
    """
    {
        "personal": {"name": "", "email": "", "phone": "", "location": ""},
        "sections": {
            "experience": [...],
            "education": [...],
            "skills": [...],
            "projects": [...],
            "certificates": [...]
        }
    }
    """

    is_active = Column(Boolean, nullable=False, default=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)

    # Relationships
    versions = relationship(
        "ResumeVersion",
        back_populates="resume",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ResumeVersion.version_number.desc()",
    )
    documents = relationship("Document", back_populates="resume", passive_deletes=True)

    __table_args__ = (
        # One active resume per user
        Index(
            "uq_resumes_one_active_per_user",
            "user_id",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active"),
        ),
    )

    def __repr__(self):
        return f"<Resume(id={self.id}, user_id={self.user_id}, is_active={self.is_active})>"
