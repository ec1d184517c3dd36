"""Tests for SqlGuestWriteModel."""

from uuid import uuid4

import pytest
from sqlalchemy import select

from src.events.dtos import EventNotFoundError
from src.guests.dtos import (
    GuestChangesDTO,
    GuestNotFoundError,
    GuestResponse,
    GuestStatus,
    NewGuestDTO,
)
from src.guests.features.manage_guests.write_model import SqlGuestWriteModel
from src.guests.repository.orm_models import Guest


async def test_create_guest(db, add_event):
    event = await add_event()
    write_model = SqlGuestWriteModel(session_overwrite=db)

    guest = await write_model.create_guest(
        NewGuestDTO(event_id=event.uuid, name="Alice", email="alice@example.com")
    )

    assert guest.event_id == event.uuid
    assert guest.status == GuestStatus.PENDING
    assert guest.response is None
    assert guest.invited_at is not None
    assert guest.event.title == "Garden Party"


async def test_create_guest_for_unknown_event(db):
    write_model = SqlGuestWriteModel(session_overwrite=db)

    with pytest.raises(EventNotFoundError):
        await write_model.create_guest(NewGuestDTO(event_id=uuid4(), name="Alice"))


async def test_update_guest_response_stamps_responded_at(db, add_event):
    event = await add_event()
    write_model = SqlGuestWriteModel(session_overwrite=db)
    guest = await write_model.create_guest(NewGuestDTO(event_id=event.uuid, name="Alice"))

    renamed = await write_model.update_guest(guest.id, GuestChangesDTO(name="Alicia"))
    answered = await write_model.update_guest(
        guest.id, GuestChangesDTO(status=GuestStatus.CONFIRMED, response=GuestResponse.YES)
    )

    assert renamed.name == "Alicia"
    assert renamed.responded_at is None
    assert answered.name == "Alicia"
    assert answered.status == GuestStatus.CONFIRMED
    assert answered.response == GuestResponse.YES
    assert answered.responded_at is not None


async def test_update_unknown_guest(db):
    write_model = SqlGuestWriteModel(session_overwrite=db)

    with pytest.raises(GuestNotFoundError):
        await write_model.update_guest(uuid4(), GuestChangesDTO(name="Nobody"))


async def test_delete_guest_removes_row(db, add_event):
    event = await add_event()
    write_model = SqlGuestWriteModel(session_overwrite=db)
    guest = await write_model.create_guest(NewGuestDTO(event_id=event.uuid, name="Alice"))

    deleted = await write_model.delete_guest(guest.id)

    assert deleted.id == guest.id
    remaining = (await db.execute(select(Guest).where(Guest.uuid == guest.id))).scalar_one_or_none()
    assert remaining is None
    with pytest.raises(GuestNotFoundError):
        await write_model.delete_guest(guest.id)
