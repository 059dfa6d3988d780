"""
Resume API Routes
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import Optional

from app.core.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.processing import JobResponse
from app.schemas.resume import ExportRequest, ResumeResponse, ResumeUpdate, ResumeView
from app.services.processing_service import ProcessingService
from app.services.resume_service import ResumeService, render_resume

router = APIRouter()


@router.get("/active", response_model=Optional[ResumeResponse])
def get_active_resume(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """활성 이력서 조회 (없으면 null)"""
    return ResumeService(db).get_active_resume(current_user.id)


@router.post("", response_model=ResumeResponse, status_code=status.HTTP_201_CREATED)
def create_resume(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """이력서 생성 (빈 템플릿, 이메일 미리 채움)"""
    return ResumeService(db).create_resume(current_user.id, current_user.email)


@router.patch("/active", response_model=ResumeResponse)
def update_active_resume(
    request: ResumeUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """이력서 수정"""
    return ResumeService(db).update_resume(
        current_user.id,
        title=request.title,
        content=request.content,
    )


@router.get("/active/view", response_model=ResumeView)
def view_active_resume(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """미리보기용 이력서 (누락된 항목은 기본값)"""
    resume = ResumeService(db).require_active_resume(current_user.id)
    return render_resume(resume)


@router.post("/active/exports", response_model=JobResponse, status_code=status.HTTP_202_ACCEPTED)
def generate_document(
    request: ExportRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    PDF/DOCX 생성 요청

    Queues an export job; poll /processing/jobs/{id} for the result.
    """
    return ProcessingService(db).request_export(
        current_user.id,
        request.format,
        version_id=request.version_id,
        changes_description=request.changes_description,
    )
