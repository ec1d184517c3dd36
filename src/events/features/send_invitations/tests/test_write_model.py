"""Tests for SqlSendInvitationsWriteModel."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.auth.dtos import RoleSlug
from src.events.dtos import EventNotFoundError, EventPermissionError, InvitationKind
from src.events.features.send_invitations.write_model import SqlSendInvitationsWriteModel
from src.guests.dtos import GuestStatus
from src.guests.repository.orm_models import Guest

INVITED_AT = datetime(2030, 1, 1, tzinfo=UTC)


@pytest.fixture
async def event_with_guests(db, add_event, add_user):
    host = await add_user(name="Hosting Host")
    event = await add_event(owner=host)
    guests = {
        "new": Guest(event_id=event.uuid, name="New", email="new@example.com"),
        "phone": Guest(event_id=event.uuid, name="Phone", phone="555-0100"),
        "waiting": Guest(
            event_id=event.uuid,
            name="Waiting",
            email="waiting@example.com",
            status=GuestStatus.INVITED,
            invited_at=INVITED_AT,
        ),
        "answered": Guest(
            event_id=event.uuid,
            name="Answered",
            email="answered@example.com",
            status=GuestStatus.CONFIRMED,
            invited_at=INVITED_AT,
        ),
    }
    db.add_all(guests.values())
    await db.flush()
    return host, event, guests


async def test_invitations_go_to_guests_never_invited(db, event_with_guests, user_factory):
    host, event, guests = event_with_guests
    email_service = AsyncMock()
    write_model = SqlSendInvitationsWriteModel(session_overwrite=db, email_service=email_service)

    outcome = await write_model.send_invitations(event.uuid, user_factory(RoleSlug.HOST, id=host.uuid))

    assert sorted(result.guest_name for result in outcome.results) == ["New", "Phone"]
    assert outcome.summary.total == 2
    assert outcome.summary.successful == 1
    assert outcome.summary.failed == 1
    assert outcome.message == "Sent invitations to 1 guests, 1 failed"
    assert guests["new"].status == GuestStatus.INVITED
    assert guests["new"].invited_at is not None
    assert guests["phone"].status == GuestStatus.PENDING
    assert guests["phone"].invited_at is None
    assert email_service.send_invitation.await_args.kwargs["host_name"] == "Hosting Host"


async def test_reminders_go_to_invited_guests_without_answer(db, event_with_guests, user_factory):
    host, event, guests = event_with_guests
    email_service = AsyncMock()
    write_model = SqlSendInvitationsWriteModel(session_overwrite=db, email_service=email_service)

    outcome = await write_model.send_invitations(
        event.uuid, user_factory(RoleSlug.HOST, id=host.uuid), kind=InvitationKind.REMINDER
    )

    assert [result.guest_name for result in outcome.results] == ["Waiting"]
    assert outcome.message == "Sent reminders to 1 guests"
    assert guests["waiting"].status == GuestStatus.INVITED


async def test_explicit_guest_ids(db, event_with_guests, user_factory):
    host, event, guests = event_with_guests
    write_model = SqlSendInvitationsWriteModel(session_overwrite=db, email_service=AsyncMock())

    outcome = await write_model.send_invitations(
        event.uuid,
        user_factory(RoleSlug.HOST, id=host.uuid),
        guest_ids=[guests["answered"].uuid, uuid4()],
    )

    assert [result.guest_name for result in outcome.results] == ["Answered"]
    assert guests["answered"].status == GuestStatus.CONFIRMED


async def test_nobody_to_invite(db, add_event, user_factory):
    event = await add_event()
    write_model = SqlSendInvitationsWriteModel(session_overwrite=db, email_service=AsyncMock())

    outcome = await write_model.send_invitations(event.uuid, user_factory(RoleSlug.SUPER_ADMIN))

    assert outcome.message == "No guests found to send invitations to"
    assert outcome.results == []
    assert outcome.summary.total == 0


async def test_trashed_event(db, add_event, user_factory):
    event = await add_event(is_trashed=True)
    write_model = SqlSendInvitationsWriteModel(session_overwrite=db)

    with pytest.raises(EventNotFoundError):
        await write_model.send_invitations(event.uuid, user_factory(RoleSlug.SUPER_ADMIN))


async def test_other_host_is_refused(db, event_with_guests, user_factory):
    _, event, _ = event_with_guests
    write_model = SqlSendInvitationsWriteModel(session_overwrite=db)

    with pytest.raises(EventPermissionError):
        await write_model.send_invitations(event.uuid, user_factory(RoleSlug.HOST))
