"""
Document Repository - 업로드 문서 데이터 액세스

Every query is scoped to the owning user.
"""
from sqlalchemy.orm import Session
from typing import List, Optional, Set
from uuid import UUID

from app.models.document import Document


class DocumentRepository:
    """문서 데이터 액세스 레이어"""

    def __init__(self, db: Session):
        self.db = db

    def add(self, document: Document) -> Document:
        """문서 추가 (commit은 호출자가 수행)"""
        self.db.add(document)
        self.db.flush()
        return document

    def get_for_user(self, user_id: UUID, document_id: UUID) -> Optional[Document]:
        """사용자 소유 문서 조회"""
        return self.db.query(Document).filter(
            Document.id == document_id,
            Document.user_id == user_id,
        ).first()

    def list_for_user(self, user_id: UUID) -> List[Document]:
        """사용자의 문서 목록 조회 (최신순)"""
        return self.db.query(Document).filter(
            Document.user_id == user_id
        ).order_by(
            Document.created_at.desc()
        ).all()

    def all_file_paths(self) -> Set[str]:
        """Every blob path referenced by a document row"""
        return {row[0] for row in self.db.query(Document.file_path).all()}

    def delete_for_user(self, user_id: UUID, document_id: UUID) -> bool:
        """문서 삭제"""
        deleted = self.db.query(Document).filter(
            Document.id == document_id,
            Document.user_id == user_id,
        ).delete(synchronize_session="fetch")
        self.db.commit()
        return deleted > 0
