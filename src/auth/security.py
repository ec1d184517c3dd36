"""Password hashing and signed tokens for sessions and email verification."""

from datetime import UTC, datetime, timedelta
from uuid import UUID

import bcrypt
import jwt

from src.auth.dtos import InvalidTokenError, SessionUser
from src.config.settings import settings

VERIFY_EMAIL_PURPOSE = "verify-email"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed_password: str | None) -> bool:
    # Accounts created through invitations or OAuth have no password
    if not hashed_password:
        return False
    return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))


def _encode(payload: dict, expires_in: timedelta) -> str:
    payload = {**payload, "exp": datetime.now(UTC) + expires_in}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def _decode(token: str) -> dict:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except jwt.PyJWTError as e:
        raise InvalidTokenError(str(e)) from e


def create_access_token(user: SessionUser, expires_minutes: int | None = None) -> str:
    minutes = expires_minutes or settings.access_token_expire_minutes
    return _encode(user.to_claims(), timedelta(minutes=minutes))


def decode_access_token(token: str) -> SessionUser:
    claims = _decode(token)
    if claims.get("purpose"):
        raise InvalidTokenError("Not a session token")
    try:
        return SessionUser.from_claims(claims)
    except (KeyError, ValueError) as e:
        raise InvalidTokenError(f"Malformed session claims: {e}") from e


def create_verification_token(user_id: UUID) -> str:
    return _encode(
        {"sub": str(user_id), "purpose": VERIFY_EMAIL_PURPOSE},
        timedelta(minutes=settings.verification_token_expire_minutes),
    )


def decode_verification_token(token: str) -> UUID:
    claims = _decode(token)
    if claims.get("purpose") != VERIFY_EMAIL_PURPOSE:
        raise InvalidTokenError("Not an email verification token")
    try:
        return UUID(claims["sub"])
    except (KeyError, ValueError) as e:
        raise InvalidTokenError(f"Malformed verification token: {e}") from e
