"""
Processing Job Schemas
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional
from datetime import datetime
from uuid import UUID

from app.models.processing_job import ExportFormat, JobKind, JobStatus


class JobResponse(BaseModel):
    """Job status (owner polling and worker views)"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    kind: JobKind
    status: JobStatus
    document_id: Optional[UUID] = None
    version_id: Optional[UUID] = None
    format: Optional[ExportFormat] = None
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ClaimRequest(BaseModel):
    kind: Optional[JobKind] = None


class WorkItem(BaseModel):
    """Everything a worker needs to run a claimed job"""
    job: JobResponse
    user_id: UUID
    bucket: str
    source_path: Optional[str] = None
    output_path: Optional[str] = None
    content: Optional[Dict[str, Any]] = None


class CompleteRequest(BaseModel):
    result: Dict[str, Any] = Field(default_factory=dict)


class FailRequest(BaseModel):
    error: str = Field(min_length=1, max_length=2000)
