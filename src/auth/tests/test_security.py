from uuid import uuid4

import pytest

from src.auth.dtos import InvalidTokenError, RoleSlug
from src.auth.security import (
    create_access_token,
    create_verification_token,
    decode_access_token,
    decode_verification_token,
    hash_password,
    verify_password,
)


def test_password_hash_verifies():
    hashed = hash_password("correct horse")

    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_account_without_password_never_verifies():
    assert not verify_password("anything", None)
    assert not verify_password("anything", "")


def test_access_token_carries_role_claims(user_factory):
    user = user_factory(RoleSlug.APPLICATION_ADMIN, last_fetch=1700000000.0)

    decoded = decode_access_token(create_access_token(user))

    assert decoded == user
    assert decoded.is_admin


def test_garbage_token_is_rejected():
    with pytest.raises(InvalidTokenError):
        decode_access_token("not-a-token")


def test_verification_token_is_not_a_session_token():
    token = create_verification_token(uuid4())

    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_session_token_is_not_a_verification_token(user_factory):
    token = create_access_token(user_factory(RoleSlug.HOST))

    with pytest.raises(InvalidTokenError):
        decode_verification_token(token)


def test_verification_token_returns_user_id():
    user_id = uuid4()

    assert decode_verification_token(create_verification_token(user_id)) == user_id
