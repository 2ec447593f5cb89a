"""Security Primitives — password hashing and access-token round trips."""

from datetime import timedelta

import pytest
from jose import jwt

from supportdesk.core.errors import AuthenticationError
from supportdesk.infrastructure.security import (
    create_access_token, decode_access_token, hash_password, verify_password,
)

SECRET = "unit-test-secret"


def test_password_hash_verifies():
    hashed = hash_password("correct-horse")
    assert hashed != "correct-horse"
    assert verify_password("correct-horse", hashed)
    assert not verify_password("wrong-horse", hashed)


def test_token_round_trip():
    token = create_access_token(7, "bob", "agent", secret_key=SECRET)
    claims = decode_access_token(token, SECRET)
    assert claims["sub"] == 7
    assert claims["username"] == "bob"
    assert claims["role"] == "agent"


def test_wrong_secret_is_rejected():
    token = create_access_token(7, "bob", "agent", secret_key=SECRET)
    with pytest.raises(AuthenticationError):
        decode_access_token(token, "other-secret")


def test_expired_token_is_rejected():
    token = create_access_token(
        7, "bob", "agent", secret_key=SECRET, expires_delta=timedelta(seconds=-5),
    )
    with pytest.raises(AuthenticationError):
        decode_access_token(token, SECRET)


def test_non_numeric_subject_is_rejected():
    token = jwt.encode({"sub": "bob"}, SECRET, algorithm="HS256")
    with pytest.raises(AuthenticationError):
        decode_access_token(token, SECRET)


def test_garbage_token_is_rejected():
    with pytest.raises(AuthenticationError):
        decode_access_token("not.a.jwt", SECRET)
