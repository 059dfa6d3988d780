"""
Document API Routes
"""
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID

from app.core.database import get_db
from app.core.storage import StorageService, get_storage
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.document import DocumentResponse, DocumentUploadResponse
from app.services.document_service import DocumentService

router = APIRouter()


def get_document_service(
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
) -> DocumentService:
    return DocumentService(db, storage)


@router.get("", response_model=List[DocumentResponse])
def list_documents(
    current_user: User = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
):
    """문서 목록 조회 (최신순)"""
    return service.list_documents(current_user.id)


@router.post("", response_model=DocumentUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_document(
    file: UploadFile = File(...),
    title: str = Form(""),
    type: str = Form(""),
    current_user: User = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
):
    """
    문서 업로드
    - 파일을 사용자 경로(<user_id>/...)에 저장
    - status=pending 문서 레코드 생성
    - 추출 작업 등록
    """
    data = await file.read()
    document, job = await service.upload_document(
        user_id=current_user.id,
        filename=file.filename or "",
        data=data,
        title=title,
        doc_type=type,
    )
    return DocumentUploadResponse(
        document=DocumentResponse.model_validate(document),
        job_id=job.id,
    )


@router.delete("/{document_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_id: UUID,
    current_user: User = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
):
    """문서 삭제 (파일 먼저, 레코드는 그 다음)"""
    await service.delete_document(current_user.id, document_id)
