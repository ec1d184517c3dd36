"""Tests for SqlSignupWriteModel."""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select

from src.auth.dtos import EmailAlreadyRegisteredError, NoDefaultRoleError, RoleSlug, UserStatus
from src.auth.features.signup.write_model import SqlSignupWriteModel
from src.auth.security import verify_password
from src.models.user import User, UserRole


async def seed_roles(db):
    host = UserRole(slug=RoleSlug.HOST.value, name="Host")
    attendee = UserRole(slug=RoleSlug.ATTENDEE.value, name="Attendee", is_default=True)
    db.add_all([host, attendee])
    await db.flush()
    return host, attendee


async def test_signup_creates_inactive_attendee(db):
    _, attendee = await seed_roles(db)
    email_service = AsyncMock()
    write_model = SqlSignupWriteModel(session_overwrite=db, email_service=email_service)

    result = await write_model.signup(email="a@example.com", password="longenough", name="A")

    user = (await db.execute(select(User).where(User.email == "a@example.com"))).scalar_one()
    assert result.verification_resent is False
    assert user.status == UserStatus.INACTIVE
    assert user.role_id == attendee.uuid
    assert verify_password("longenough", user.hashed_password)
    email_service.send_verification.assert_awaited_once()
    kwargs = email_service.send_verification.await_args.kwargs
    assert kwargs["to_address"] == "a@example.com"
    assert "/verify-email?token=" in kwargs["verification_url"]
    assert kwargs["verification_url"].endswith("callbackUrl=%2Ftemplates")


async def test_signup_as_host(db):
    host, _ = await seed_roles(db)
    write_model = SqlSignupWriteModel(session_overwrite=db)

    await write_model.signup(email="h@example.com", password="longenough", name="H", is_host=True)

    user = (await db.execute(select(User).where(User.email == "h@example.com"))).scalar_one()
    assert user.role_id == host.uuid


async def test_signup_again_while_inactive_resends(db):
    await seed_roles(db)
    email_service = AsyncMock()
    write_model = SqlSignupWriteModel(session_overwrite=db, email_service=email_service)
    await write_model.signup(email="a@example.com", password="longenough", name="A")

    result = await write_model.signup(email="a@example.com", password="longenough", name="A")

    assert result.verification_resent is True
    assert email_service.send_verification.await_count == 2


async def test_signup_with_active_email_raises(db):
    await seed_roles(db)
    db.add(User(email="taken@example.com", status=UserStatus.ACTIVE))
    await db.flush()
    write_model = SqlSignupWriteModel(session_overwrite=db)

    with pytest.raises(EmailAlreadyRegisteredError):
        await write_model.signup(email="taken@example.com", password="longenough", name="T")


async def test_signup_without_roles_raises(db):
    write_model = SqlSignupWriteModel(session_overwrite=db)

    with pytest.raises(NoDefaultRoleError):
        await write_model.signup(email="a@example.com", password="longenough", name="A")
