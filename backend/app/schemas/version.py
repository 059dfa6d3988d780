"""
Resume Version Schemas
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional
from datetime import datetime
from uuid import UUID


class VersionResponse(BaseModel):
    """Version list item"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    resume_id: UUID
    version_number: int
    pdf_path: Optional[str] = None
    docx_path: Optional[str] = None
    changes_description: Optional[str] = None
    created_at: datetime


class VersionDetail(VersionResponse):
    """Version with its content snapshot"""
    content: Dict[str, Any]


class SnapshotRequest(BaseModel):
    changes_description: Optional[str] = Field(default=None, max_length=1000)
