"""
Document Schemas
"""
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, Optional
from datetime import datetime
from uuid import UUID

from app.models.document import DocumentStatus, DocumentType


class DocumentResponse(BaseModel):
    """Document response schema"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    resume_id: Optional[UUID] = None
    title: str
    type: DocumentType
    status: DocumentStatus
    file_path: str
    extracted_content: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime


class DocumentUploadResponse(BaseModel):
    """Document upload response schema"""
    document: DocumentResponse
    job_id: UUID
    message: str = "Document uploaded successfully! Processing will begin shortly."
