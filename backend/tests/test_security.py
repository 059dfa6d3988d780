"""
Password hashing and token tests
"""
import uuid

import pytest
from jose import jwt

from app.core import security
from app.core.config import settings
from app.core.exceptions import AuthenticationError


def test_password_round_trip():
    hashed = security.hash_password("secret123")

    assert hashed.startswith("$2b$")
    assert security.verify_password("secret123", hashed)
    assert not security.verify_password("wrong", hashed)


def test_hashes_are_salted():
    assert security.hash_password("same") != security.hash_password("same")


@pytest.mark.parametrize("stored", ["not-a-hash", "$2b$04$garbage", "pbkdf2_sha256$x$!!$!!"])
def test_verify_rejects_malformed_hash(stored):
    assert not security.verify_password("secret123", stored)


def test_decode_checks_token_type():
    user_id = uuid.uuid4()
    refresh = security.create_refresh_token(user_id)

    assert security.decode_token(refresh, expected_type="refresh")["sub"] == str(user_id)
    with pytest.raises(AuthenticationError):
        security.decode_token(refresh, expected_type="access")


def test_decode_rejects_foreign_signature():
    forged = jwt.encode(
        {"sub": str(uuid.uuid4()), "type": "access", "jti": "x", "exp": 9999999999},
        "another-secret",
        algorithm=settings.JWT_ALGORITHM,
    )
    with pytest.raises(AuthenticationError):
        security.decode_token(forged)


def test_seconds_until_expiry_never_negative():
    assert security.seconds_until_expiry({"exp": 0}) == 0
