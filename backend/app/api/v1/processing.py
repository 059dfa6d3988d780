"""
Processing Job API Routes

Owners poll their jobs; the extraction / export worker claims and
reports on them with the X-Worker-Token header.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from app.core.database import get_db
from app.core.storage import StorageService, get_storage
from app.dependencies import get_current_user, require_worker
from app.models.user import User
from app.schemas.processing import ClaimRequest, CompleteRequest, FailRequest, JobResponse, WorkItem
from app.services.processing_service import ProcessingService

router = APIRouter()


@router.get("/jobs/{job_id}", response_model=JobResponse)
def get_job(
    job_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """작업 상태 조회"""
    return ProcessingService(db).get_job(current_user.id, job_id)


@router.post("/jobs/claim", response_model=Optional[WorkItem], dependencies=[Depends(require_worker)])
def claim_job(
    request: ClaimRequest,
    db: Session = Depends(get_db),
):
    """다음 대기 작업 가져오기 (없으면 null)"""
    return ProcessingService(db).claim(request.kind)


@router.post("/jobs/{job_id}/complete", response_model=JobResponse, dependencies=[Depends(require_worker)])
def complete_job(
    job_id: UUID,
    request: CompleteRequest,
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
):
    """작업 완료 보고"""
    return ProcessingService(db, storage).complete(job_id, request.result)


@router.post("/jobs/{job_id}/fail", response_model=JobResponse, dependencies=[Depends(require_worker)])
def fail_job(
    job_id: UUID,
    request: FailRequest,
    db: Session = Depends(get_db),
):
    """작업 실패 보고"""
    return ProcessingService(db).fail(job_id, request.error)
