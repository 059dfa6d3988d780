"""
Resume Repository - 이력서 데이터 액세스
"""
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID

from app.models.resume import Resume


class ResumeRepository:
    """이력서 데이터 액세스 레이어"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, resume: Resume) -> Resume:
        """이력서 생성"""
        self.db.add(resume)
        self.db.commit()
        self.db.refresh(resume)
        return resume

    def get_active(self, user_id: UUID) -> Optional[Resume]:
        """사용자의 활성 이력서 조회"""
        return self.db.query(Resume).filter(
            Resume.user_id == user_id,
            Resume.is_active.is_(True),
        ).first()

    def update(self, resume: Resume) -> Resume:
        """이력서 업데이트"""
        self.db.commit()
        self.db.refresh(resume)
        return resume
