"""
Resume Version API Routes
"""
import io

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID

from app.core.database import get_db
from app.core.storage import StorageService, get_storage
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.version import SnapshotRequest, VersionDetail, VersionResponse
from app.services.version_service import VersionService

router = APIRouter()


@router.get("", response_model=List[VersionResponse])
def list_versions(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """버전 이력 조회 (최신 버전 먼저)"""
    return VersionService(db).list_versions(current_user.id)


@router.post("", response_model=VersionDetail, status_code=status.HTTP_201_CREATED)
def create_version(
    request: SnapshotRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """현재 이력서 스냅샷 생성"""
    return VersionService(db).snapshot_version(current_user.id, request.changes_description)


@router.get("/{version_id}", response_model=VersionDetail)
def get_version(
    version_id: UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """버전 상세 조회"""
    return VersionService(db).get_version(current_user.id, version_id)


@router.get("/{version_id}/download")
async def download_version(
    version_id: UUID,
    format: str = Query(..., pattern="^(pdf|docx)$"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    storage: StorageService = Depends(get_storage),
):
    """버전 파일 다운로드 (resume-v<번호>.<형식>)"""
    service = VersionService(db, storage)
    version = service.get_version(current_user.id, version_id)
    artifact = await service.download_artifact(version, format)
    return StreamingResponse(
        io.BytesIO(artifact.content),
        media_type=artifact.media_type,
        headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
    )
