"""
Resume Version Repository - 버전 이력 데이터 액세스

Versions carry no user id of their own; ownership is checked through the
parent resume.
"""
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from app.models.resume import Resume
from app.models.resume_version import ResumeVersion


class VersionRepository:
    """버전 데이터 액세스 레이어"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, version: ResumeVersion) -> ResumeVersion:
        """버전 생성"""
        self.db.add(version)
        self.db.commit()
        self.db.refresh(version)
        return version

    def get_for_user(self, user_id: UUID, version_id: UUID) -> Optional[ResumeVersion]:
        """사용자 소유 버전 조회"""
        return self.db.query(ResumeVersion).join(
            Resume, Resume.id == ResumeVersion.resume_id
        ).filter(
            ResumeVersion.id == version_id,
            Resume.user_id == user_id,
        ).first()

    def list_for_resume(self, resume_id: UUID) -> List[ResumeVersion]:
        """이력서의 버전 목록 (버전 번호 내림차순)"""
        return self.db.query(ResumeVersion).filter(
            ResumeVersion.resume_id == resume_id
        ).order_by(
            ResumeVersion.version_number.desc()
        ).all()

    def latest_number(self, resume_id: UUID) -> int:
        """가장 최근 버전 번호 (없으면 0)"""
        latest = self.db.query(func.max(ResumeVersion.version_number)).filter(
            ResumeVersion.resume_id == resume_id
        ).scalar()
        return latest or 0
