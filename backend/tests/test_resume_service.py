"""
Resume aggregate tests
"""
import uuid
from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from app.models import Resume
from app.services.resume_service import ResumeService, empty_resume_content, render_resume


@pytest.fixture
def service(db_session):
    return ResumeService(db_session)


class TestCreateResume:

    def test_no_resume_is_not_an_error(self, service, user):
        assert service.get_active_resume(user.id) is None

    def test_create_first_resume(self, service, user):
        resume = service.create_resume(user.id, "alice@example.com")

        assert resume.is_active is True
        assert resume.title == "My Resume"
        assert resume.content["personal"]["email"] == "alice@example.com"
        assert resume.content["sections"] == {
            "experience": [], "education": [], "skills": [], "projects": [], "certificates": [],
        }
        assert service.get_active_resume(user.id).id == resume.id

    def test_second_create_conflicts(self, service, db_session, user):
        service.create_resume(user.id, "alice@example.com")

        with pytest.raises(ConflictError):
            service.create_resume(user.id, "alice@example.com")
        assert db_session.query(Resume).filter(Resume.user_id == user.id).count() == 1

    def test_users_are_independent(self, service, user, other_user):
        service.create_resume(user.id, "alice@example.com")

        assert service.get_active_resume(other_user.id) is None
        assert service.create_resume(other_user.id, "bob@example.com").user_id == other_user.id


class TestActiveResumeIndex:

    def test_database_rejects_second_active_resume(self, db_session, user):
        db_session.add(Resume(user_id=user.id, content={}, is_active=True))
        db_session.commit()

        db_session.add(Resume(user_id=user.id, content={}, is_active=True))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_inactive_resumes_are_unconstrained(self, db_session, user):
        db_session.add_all([
            Resume(user_id=user.id, content={}, is_active=False),
            Resume(user_id=user.id, content={}, is_active=False),
            Resume(user_id=user.id, content={}, is_active=True),
        ])
        db_session.commit()

        assert db_session.query(Resume).count() == 3


class TestUpdateResume:

    def test_update_requires_active_resume(self, service, user):
        with pytest.raises(NotFoundError):
            service.update_resume(user.id, title="New")

    def test_update_title_and_content(self, service, user):
        service.create_resume(user.id, "alice@example.com")
        content = empty_resume_content("alice@example.com")
        content["sections"]["skills"] = ["Python", "AWS"]

        resume = service.update_resume(user.id, title="Cloud Resume", content=content)

        assert resume.title == "Cloud Resume"
        assert resume.content["sections"]["skills"] == ["Python", "AWS"]

    @pytest.mark.parametrize("content", [
        {"personal": "Alice"},
        {"sections": []},
        {"sections": {"skills": "Python"}},
    ])
    def test_malformed_content_rejected(self, service, user, content):
        service.create_resume(user.id, "alice@example.com")

        with pytest.raises(InvalidInputError):
            service.update_resume(user.id, content=content)


class TestRenderResume:

    def _resume(self, content):
        return Resume(
            id=uuid.uuid4(),
            title="My Resume",
            content=content,
            updated_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        )

    def test_missing_data_gets_placeholders(self):
        view = render_resume(self._resume({"personal": {"name": "Ada", "phone": "  "}}))

        assert view.personal.name == "Ada"
        assert view.personal.email == "Not provided"
        assert view.personal.phone == "Not provided"
        assert [s.name for s in view.sections] == ["experience", "education", "skills", "projects", "certificates"]
        assert all(s.entries == [] for s in view.sections)
        assert view.sections[2].empty_message == "No skills added"

    def test_malformed_content_never_fails(self):
        view = render_resume(self._resume({"personal": None, "sections": {"skills": "oops"}}))

        assert view.personal.location == "Not provided"
        assert view.sections[2].entries == []

    def test_entries_are_kept_in_order(self):
        view = render_resume(self._resume({"sections": {"certificates": [{"name": "AWS"}, {"name": "CKA"}]}}))

        assert view.sections[4].entries == [{"name": "AWS"}, {"name": "CKA"}]
