"""
Processing job tests: extraction and export hand-off to the worker
"""
import asyncio
import uuid

import pytest

from app.core.config import settings
from app.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from app.models import DocumentStatus, ExportFormat, JobKind, JobStatus
from app.services.document_service import DocumentService
from app.services.processing_service import ProcessingService
from app.services.resume_service import ResumeService
from app.services.version_service import VersionService

WORKER_TOKEN = "worker-secret"


@pytest.fixture
def uploaded(db_session, storage, user):
    service = DocumentService(db_session, storage)
    return asyncio.run(service.upload_document(user.id, "cert.pdf", b"%PDF-1.4", "AWS Cert", "certificate"))


@pytest.fixture
def resume(db_session, user):
    return ResumeService(db_session).create_resume(user.id, user.email)


@pytest.fixture
def service(db_session, storage):
    return ProcessingService(db_session, storage)


def _store_artifact(storage, path, data=b"%PDF-1.7"):
    asyncio.run(storage.upload(settings.GENERATED_BUCKET, path, data))


@pytest.fixture
def worker_headers(monkeypatch):
    monkeypatch.setattr(settings, "WORKER_API_TOKEN", WORKER_TOKEN)
    return {"X-Worker-Token": WORKER_TOKEN}


class TestExtraction:

    def test_claim_moves_document_to_processing(self, service, uploaded, user):
        document, job = uploaded

        item = service.claim()

        assert item["job"].id == job.id
        assert item["job"].status == JobStatus.RUNNING
        assert item["bucket"] == settings.DOCUMENTS_BUCKET
        assert item["source_path"] == document.file_path
        assert document.status == DocumentStatus.PROCESSING

    def test_empty_queue(self, service):
        assert service.claim() is None

    def test_claim_filters_by_kind(self, service, uploaded):
        assert service.claim(JobKind.RESUME_EXPORT) is None
        assert service.claim(JobKind.DOCUMENT_EXTRACTION) is not None

    def test_complete_stores_extracted_content(self, service, uploaded):
        document, job = uploaded
        service.claim()

        done = service.complete(job.id, {"extracted_content": {"issuer": "AWS"}})

        assert done.status == JobStatus.SUCCEEDED
        assert document.status == DocumentStatus.COMPLETED
        assert document.extracted_content == {"issuer": "AWS"}

    def test_complete_requires_extracted_object(self, service, uploaded):
        _, job = uploaded
        service.claim()

        with pytest.raises(InvalidInputError):
            service.complete(job.id, {"extracted_content": "plain text"})

    def test_fail_marks_document_error(self, service, uploaded):
        document, job = uploaded
        service.claim()

        failed = service.fail(job.id, "unreadable scan")

        assert failed.status == JobStatus.FAILED
        assert failed.error == "unreadable scan"
        assert document.status == DocumentStatus.ERROR

    def test_only_running_jobs_can_be_reported(self, service, uploaded):
        _, job = uploaded

        with pytest.raises(ConflictError):
            service.complete(job.id, {"extracted_content": {}})

    def test_unknown_job(self, service):
        with pytest.raises(NotFoundError):
            service.fail(uuid.uuid4(), "boom")


class TestExport:

    def test_export_snapshots_active_resume(self, service, db_session, user, resume):
        job = service.request_export(user.id, ExportFormat.PDF)

        versions = VersionService(db_session).list_versions(user.id)
        assert job.kind == JobKind.RESUME_EXPORT
        assert job.status == JobStatus.QUEUED
        assert job.version_id == versions[0].id
        assert versions[0].changes_description == "Export requested"

    def test_export_existing_version(self, service, db_session, user, resume):
        version = VersionService(db_session).snapshot_version(user.id)

        job = service.request_export(user.id, ExportFormat.DOCX, version_id=version.id)

        assert job.version_id == version.id
        assert VersionService(db_session).list_versions(user.id) == [version]

    def test_export_without_resume(self, service, user):
        with pytest.raises(NotFoundError):
            service.request_export(user.id, ExportFormat.PDF)

    def test_complete_attaches_artifact(self, service, db_session, storage, user, resume):
        job = service.request_export(user.id, ExportFormat.PDF)
        item = service.claim()
        assert item["output_path"].startswith(f"{user.id}/resume-v1-")
        assert item["content"] == resume.content

        _store_artifact(storage, item["output_path"])
        service.complete(job.id, {"path": item["output_path"]})

        version = VersionService(db_session).get_version(user.id, job.version_id)
        assert version.pdf_path == item["output_path"]
        assert version.docx_path is None

    def test_already_generated_format_is_conflict(self, service, storage, user, resume):
        job = service.request_export(user.id, ExportFormat.PDF)
        item = service.claim()
        _store_artifact(storage, item["output_path"])
        service.complete(job.id, {"path": item["output_path"]})

        with pytest.raises(ConflictError):
            service.request_export(user.id, ExportFormat.PDF, version_id=job.version_id)

    def test_artifact_path_must_belong_to_owner(self, service, user, other_user, resume):
        job = service.request_export(user.id, ExportFormat.PDF)
        service.claim()

        with pytest.raises(InvalidInputError):
            service.complete(job.id, {"path": f"{other_user.id}/resume.pdf"})
        with pytest.raises(InvalidInputError):
            service.complete(job.id, {"path": f"{user.id}/../{other_user.id}/resume.pdf"})


    def test_complete_requires_stored_artifact(self, service, db_session, user, resume):
        job = service.request_export(user.id, ExportFormat.PDF)
        item = service.claim()

        with pytest.raises(InvalidInputError):
            service.complete(job.id, {"path": item["output_path"]})

        db_session.refresh(job)
        assert job.status == JobStatus.RUNNING

    def test_duplicate_export_request_is_conflict(self, service, db_session, user, resume):
        first = service.request_export(user.id, ExportFormat.PDF)

        with pytest.raises(ConflictError):
            service.request_export(user.id, ExportFormat.PDF, version_id=first.version_id)
        service.claim()
        with pytest.raises(ConflictError):
            service.request_export(user.id, ExportFormat.PDF, version_id=first.version_id)

        docx = service.request_export(user.id, ExportFormat.DOCX, version_id=first.version_id)
        assert docx.status == JobStatus.QUEUED

    def test_export_can_be_requested_again_after_failure(self, service, user, resume):
        first = service.request_export(user.id, ExportFormat.PDF)
        service.claim()
        service.fail(first.id, "renderer crashed")

        retry = service.request_export(user.id, ExportFormat.PDF, version_id=first.version_id)

        assert retry.id != first.id
        assert retry.status == JobStatus.QUEUED

    def test_completion_against_attached_artifact_fails_job(self, service, db_session, storage, user, resume):
        job = service.request_export(user.id, ExportFormat.PDF)
        item = service.claim()
        version = VersionService(db_session).get_version(user.id, job.version_id)
        version.pdf_path = f"{user.id}/attached-elsewhere.pdf"
        db_session.commit()
        _store_artifact(storage, item["output_path"])

        with pytest.raises(ConflictError):
            service.complete(job.id, {"path": item["output_path"]})

        db_session.refresh(job)
        assert job.status == JobStatus.FAILED
        assert job.error == "PDF already attached to version 1"
        assert version.pdf_path == f"{user.id}/attached-elsewhere.pdf"


class TestProcessingApi:

    def test_owner_polls_export_job(self, client, auth_headers, headers_for, other_user):
        client.post("/api/v1/resumes", headers=auth_headers)
        created = client.post("/api/v1/resumes/active/exports", headers=auth_headers, json={"format": "pdf"})

        assert created.status_code == 202
        job_id = created.json()["id"]
        polled = client.get(f"/api/v1/processing/jobs/{job_id}", headers=auth_headers)
        assert polled.json()["status"] == "queued"
        assert client.get(f"/api/v1/processing/jobs/{job_id}", headers=headers_for(other_user)).status_code == 404

    def test_worker_api_disabled_without_token(self, client, monkeypatch):
        monkeypatch.setattr(settings, "WORKER_API_TOKEN", None)

        response = client.post("/api/v1/processing/jobs/claim", json={})

        assert response.status_code == 503

    def test_worker_token_required(self, client, worker_headers):
        response = client.post("/api/v1/processing/jobs/claim", json={}, headers={"X-Worker-Token": "wrong"})

        assert response.status_code == 401

    def test_worker_round_trip(self, client, auth_headers, worker_headers):
        upload = client.post(
            "/api/v1/documents",
            headers=auth_headers,
            files={"file": ("cv.txt", b"Python, SQL", "text/plain")},
            data={"title": "Skills", "type": "skill"},
        )
        job_id = upload.json()["job_id"]

        claimed = client.post("/api/v1/processing/jobs/claim", json={"kind": "document_extraction"}, headers=worker_headers)
        assert claimed.status_code == 200
        assert claimed.json()["job"]["id"] == job_id

        completed = client.post(
            f"/api/v1/processing/jobs/{job_id}/complete",
            json={"result": {"extracted_content": {"skills": ["Python", "SQL"]}}},
            headers=worker_headers,
        )
        assert completed.status_code == 200
        assert completed.json()["status"] == "succeeded"

        documents = client.get("/api/v1/documents", headers=auth_headers).json()
        assert documents[0]["status"] == "completed"
        assert documents[0]["extracted_content"] == {"skills": ["Python", "SQL"]}

    def test_claim_empty_queue_returns_null(self, client, worker_headers):
        response = client.post("/api/v1/processing/jobs/claim", json={}, headers=worker_headers)

        assert response.status_code == 200
        assert response.json() is None

    def test_non_ascii_worker_token_is_rejected(self, client, worker_headers):
        response = client.post(
            "/api/v1/processing/jobs/claim",
            json={},
            headers={"X-Worker-Token": "wörker-sécret".encode("utf-8")},
        )

        assert response.status_code == 401

    def test_worker_completes_export_with_stored_file(self, client, storage, auth_headers, worker_headers):
        client.post("/api/v1/resumes", headers=auth_headers)
        job_id = client.post("/api/v1/resumes/active/exports", headers=auth_headers, json={"format": "docx"}).json()["id"]
        item = client.post("/api/v1/processing/jobs/claim", json={}, headers=worker_headers).json()

        missing = client.post(
            f"/api/v1/processing/jobs/{job_id}/complete",
            json={"result": {"path": item["output_path"]}},
            headers=worker_headers,
        )
        assert missing.status_code == 422

        _store_artifact(storage, item["output_path"], b"PK docx")
        completed = client.post(
            f"/api/v1/processing/jobs/{job_id}/complete",
            json={"result": {"path": item["output_path"]}},
            headers=worker_headers,
        )
        assert completed.status_code == 200

        version_id = completed.json()["version_id"]
        download = client.get(f"/api/v1/versions/{version_id}/download", params={"format": "docx"}, headers=auth_headers)
        assert download.content == b"PK docx"
