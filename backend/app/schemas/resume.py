"""
Resume Schemas
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional
from datetime import datetime
from uuid import UUID

from app.models.processing_job import ExportFormat


class ResumeResponse(BaseModel):
    """Resume response schema"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    content: Dict[str, Any]
    is_active: bool
    created_at: datetime
    updated_at: datetime


class ResumeUpdate(BaseModel):
    """Resume update schema"""
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[Dict[str, Any]] = None


# Display view (defaults substituted for missing data)
class PersonalInfoView(BaseModel):
    name: str
    email: str
    phone: str
    location: str


class ResumeSectionView(BaseModel):
    name: str
    entries: List[Any]
    empty_message: str


class ResumeView(BaseModel):
    id: UUID
    title: str
    updated_at: datetime
    personal: PersonalInfoView
    sections: List[ResumeSectionView]


class ExportRequest(BaseModel):
    """Export (PDF/DOCX generation) request"""
    format: ExportFormat
    version_id: Optional[UUID] = None
    changes_description: Optional[str] = Field(default=None, max_length=1000)
