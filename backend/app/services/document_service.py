"""
Document Service

Upload and delete span two stores (blob storage and the documents table).
Upload writes the blob first and removes it again if the row cannot be
committed; delete removes the blob first and leaves the row in place if
that fails. Blobs orphaned by a crash between the two steps are reclaimed
by sweep_orphaned_blobs.
"""
import asyncio
import time
import uuid
from datetime import datetime, timedelta, timezone
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List, Optional, Tuple
from uuid import UUID

from app.core.config import settings
from app.core.exceptions import InvalidInputError, NotFoundError, StorageError
from app.core.logging import logger
from app.core.storage import StorageService
from app.models.document import Document, DocumentStatus, DocumentType
from app.models.processing_job import JobKind, ProcessingJob
from app.repositories.document_repository import DocumentRepository
from app.repositories.processing_job_repository import ProcessingJobRepository
from app.utils.validators import file_extension, validate_file_extension, validate_file_size


def build_document_path(user_id: UUID, filename: str) -> str:
    """<user_id>/<epoch ms>_<random>.<ext>"""
    ext = file_extension(filename)
    token = f"{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"
    return f"{user_id}/{token}.{ext}" if ext else f"{user_id}/{token}"


class DocumentService:
    """Document upload, listing and deletion"""

    def __init__(self, db: Session, storage: StorageService):
        self.db = db
        self.storage = storage
        self.bucket = settings.DOCUMENTS_BUCKET
        self.documents = DocumentRepository(db)
        self.jobs = ProcessingJobRepository(db)

    def list_documents(self, user_id: UUID) -> List[Document]:
        """The user's documents, newest first"""
        return self.documents.list_for_user(user_id)

    @staticmethod
    def validate_upload(filename: str, size: int, title: str, doc_type: str) -> Tuple[str, DocumentType]:
        """Check upload input; raises InvalidInputError before any I/O happens"""
        title = (title or "").strip()
        if not title or not doc_type:
            raise InvalidInputError("Please fill in the document title and type")
        try:
            parsed_type = DocumentType(doc_type)
        except ValueError:
            allowed = ", ".join(t.value for t in DocumentType)
            raise InvalidInputError(f"Invalid document type '{doc_type}'. Expected one of: {allowed}")

        if not validate_file_extension(filename, settings.allowed_extensions):
            raise InvalidInputError(
                f"Unsupported file type. Allowed: {', '.join(settings.allowed_extensions)}"
            )
        if size == 0:
            raise InvalidInputError("File is empty")
        if not validate_file_size(size, settings.MAX_UPLOAD_SIZE):
            raise InvalidInputError(f"File exceeds the {settings.MAX_UPLOAD_SIZE} byte limit")
        return title, parsed_type

    async def upload_document(
        self,
        user_id: UUID,
        filename: str,
        data: bytes,
        title: str,
        doc_type: str,
    ) -> Tuple[Document, ProcessingJob]:
        """
        Store an uploaded file and register it

        Steps:
        1. validate input
        2. write the blob under the user's prefix
        3. insert the document (status=pending) and its extraction job
        4. on insert failure, delete the blob and re-raise
        """
        title, parsed_type = self.validate_upload(filename, len(data), title, doc_type)
        file_path = build_document_path(user_id, filename)

        await self.storage.upload(self.bucket, file_path, data)

        try:
            document = self.documents.add(Document(
                user_id=user_id,
                title=title,
                type=parsed_type,
                file_path=file_path,
                status=DocumentStatus.PENDING,
            ))
            job = self.jobs.add(ProcessingJob(
                user_id=user_id,
                kind=JobKind.DOCUMENT_EXTRACTION,
                document_id=document.id,
            ))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Document insert failed for {file_path}, removing blob: {e}")
            await self._discard_blob(file_path)
            raise

        self.db.refresh(document)
        logger.info(f"Document uploaded: {document.id} ({parsed_type.value}) -> {file_path}")
        return document, job

    async def delete_document(self, user_id: UUID, document_id: UUID) -> None:
        """
        Delete a document and its blob

        The blob goes first; a storage failure propagates and the row stays.
        """
        document = self.documents.get_for_user(user_id, document_id)
        if document is None:
            raise NotFoundError("Document not found")

        file_path = document.file_path
        removed = await self.storage.remove(self.bucket, file_path)
        if not removed:
            logger.warning(f"Blob already missing for document {document_id}: {file_path}")

        self.documents.delete_for_user(user_id, document_id)
        logger.info(f"Document deleted: {document_id}")

    async def sweep_orphaned_blobs(
        self,
        grace: Optional[timedelta] = None,
        now: Optional[datetime] = None,
    ) -> List[str]:
        """
        Remove blobs in the documents bucket that no row references

        Blobs younger than the grace period are skipped so in-flight uploads
        are not touched.
        """
        grace = grace if grace is not None else timedelta(minutes=settings.ORPHAN_GRACE_MINUTES)
        cutoff = (now or datetime.now(timezone.utc)) - grace
        referenced = self.documents.all_file_paths()

        removed = []
        # Directory walk runs off the event loop
        objects = await asyncio.to_thread(self.storage.list_objects, self.bucket)
        for obj in objects:
            if obj.path in referenced or obj.modified_at > cutoff:
                continue
            await self.storage.remove(self.bucket, obj.path)
            removed.append(obj.path)

        logger.info(f"Orphan sweep removed {len(removed)} blob(s) from {self.bucket}")
        return removed

    async def _discard_blob(self, file_path: str) -> None:
        try:
            await self.storage.remove(self.bucket, file_path)
        except StorageError as e:
            logger.error(f"Compensating delete failed, left for orphan sweep: {file_path}: {e}")
