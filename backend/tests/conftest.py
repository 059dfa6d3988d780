"""
Pytest configuration: in-memory database, temp storage, mocked Redis and
an API client wired to all three.
"""
import os
import sys
import tempfile
from pathlib import Path
from typing import Generator
from unittest.mock import Mock

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["LOG_DIR"] = tempfile.mkdtemp(prefix="resume-manager-logs-")
os.environ["STORAGE_DIR"] = tempfile.mkdtemp(prefix="resume-manager-storage-")

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
from fastapi.testclient import TestClient
from passlib.context import CryptContext
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from app.core import security
from app.core.cache import TokenBlacklist, get_token_blacklist
from app.core.database import build_engine, create_tables, get_db
from app.core.storage import StorageService, get_storage
from app.main import app
from app.models import User
from app.repositories.user_repository import UserRepository


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch):
    monkeypatch.setattr(security, "pwd_context", CryptContext(schemes=["bcrypt"], bcrypt__rounds=4))


# ==================== Database ====================

@pytest.fixture(scope="function")
def db_engine():
    """Fresh in-memory SQLite database per test"""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    with Session(db_engine) as session:
        yield session


# ==================== Storage / Redis ====================

@pytest.fixture(scope="function")
def storage(tmp_path) -> StorageService:
    return StorageService(root=str(tmp_path / "storage"))


@pytest.fixture(scope="function")
def redis_client():
    client = Mock()
    client.exists.return_value = 0
    return client


@pytest.fixture(scope="function")
def blacklist(redis_client) -> TokenBlacklist:
    return TokenBlacklist(client=redis_client)


# ==================== API client ====================

@pytest.fixture(scope="function")
def client(db_session, storage, blacklist) -> Generator[TestClient, None, None]:
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_token_blacklist] = lambda: blacklist
    yield TestClient(app)
    app.dependency_overrides.clear()


# ==================== Users ====================

@pytest.fixture(scope="function")
def make_user(db_session):
    """Factory for confirmed users"""
    def _make_user(email: str = "alice@example.com", password: str = "secret123", verified: bool = True) -> User:
        return UserRepository(db_session).create(User(
            email=email,
            password_hash=security.hash_password(password),
            is_verified=verified,
        ))
    return _make_user


@pytest.fixture(scope="function")
def user(make_user) -> User:
    return make_user()


@pytest.fixture(scope="function")
def other_user(make_user) -> User:
    return make_user(email="bob@example.com")


@pytest.fixture(scope="function")
def headers_for():
    """Bearer headers for a given user"""
    def _headers_for(user: User) -> dict:
        return {"Authorization": f"Bearer {security.create_access_token(user.id)}"}
    return _headers_for


@pytest.fixture(scope="function")
def auth_headers(user, headers_for) -> dict:
    return headers_for(user)
