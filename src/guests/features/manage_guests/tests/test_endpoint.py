from dataclasses import replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from src.auth.dependencies import get_optional_user
from src.auth.dtos import RoleSlug
from src.events.dtos import EventNotFoundError
from src.guests.dtos import (
    GuestChangesDTO,
    GuestDTO,
    GuestNotFoundError,
    GuestResponse,
    GuestStatus,
    NewGuestDTO,
)
from src.guests.features.manage_guests.router import get_guest_read_model, get_guest_write_model
from src.guests.features.manage_guests.write_model import GuestWriteModel
from src.guests.repository.read_models import GuestReadModel
from src.guests.urls import GUEST_URL, GUESTS_URL


class InMemoryGuestModel(GuestReadModel, GuestWriteModel):
    def __init__(self, guests: dict[UUID, GuestDTO], event_ids: set[UUID]):
        self._guests = guests
        self._event_ids = event_ids

    async def list_guests(self, event_id=None, status=None, search=None) -> list[GuestDTO]:
        guests = list(self._guests.values())
        if event_id:
            guests = [guest for guest in guests if guest.event_id == event_id]
        if status:
            guests = [guest for guest in guests if guest.status == status]
        if search:
            guests = [guest for guest in guests if search.lower() in guest.name.lower()]
        return guests

    async def get_guest(self, guest_id: UUID) -> GuestDTO | None:
        return self._guests.get(guest_id)

    async def create_guest(self, guest: NewGuestDTO) -> GuestDTO:
        if guest.event_id not in self._event_ids:
            raise EventNotFoundError(guest.event_id)
        created = GuestDTO(
            id=uuid4(),
            event_id=guest.event_id,
            name=guest.name,
            email=guest.email,
            phone=guest.phone,
            status=guest.status,
            response=guest.response,
            invited_at=datetime.now(UTC),
        )
        self._guests[created.id] = created
        return created

    async def update_guest(self, guest_id: UUID, changes: GuestChangesDTO) -> GuestDTO:
        if guest_id not in self._guests:
            raise GuestNotFoundError()
        values = {key: value for key, value in vars(changes).items() if value is not None}
        self._guests[guest_id] = replace(self._guests[guest_id], **values)
        return self._guests[guest_id]

    async def delete_guest(self, guest_id: UUID) -> GuestDTO:
        if guest_id not in self._guests:
            raise GuestNotFoundError()
        return self._guests.pop(guest_id)


def make_guest(event_id: UUID, name: str = "Alice", status=GuestStatus.PENDING) -> GuestDTO:
    return GuestDTO(
        id=uuid4(),
        event_id=event_id,
        name=name,
        email=f"{name.lower()}@example.com",
        status=status,
    )


@pytest.fixture
def event_id():
    return uuid4()


@pytest.fixture
def model(event_id):
    alice = make_guest(event_id, "Alice")
    bob = make_guest(event_id, "Bob", status=GuestStatus.CONFIRMED)
    other = make_guest(uuid4(), "Carol")
    return InMemoryGuestModel({g.id: g for g in (alice, bob, other)}, {event_id})


@pytest.fixture
def overrides(model, user_factory):
    host = user_factory(RoleSlug.HOST)
    return {
        get_guest_read_model: lambda: model,
        get_guest_write_model: lambda: model,
        get_optional_user: lambda: host,
    }


@pytest.mark.asyncio
async def test_list_guests_for_event(client_factory, overrides, event_id):
    async with client_factory(overrides) as client:
        response = await client.get(GUESTS_URL, params={"event_id": str(event_id)})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert sorted(guest["name"] for guest in body["data"]) == ["Alice", "Bob"]


@pytest.mark.asyncio
async def test_list_guests_by_status_and_search(client_factory, overrides):
    async with client_factory(overrides) as client:
        confirmed = await client.get(GUESTS_URL, params={"status": "CONFIRMED"})
        searched = await client.get(GUESTS_URL, params={"search": "car"})

    assert [guest["name"] for guest in confirmed.json()["data"]] == ["Bob"]
    assert [guest["name"] for guest in searched.json()["data"]] == ["Carol"]


@pytest.mark.asyncio
async def test_list_guests_requires_sign_in(client_factory, model):
    overrides = {get_guest_read_model: lambda: model, get_optional_user: lambda: None}

    async with client_factory(overrides) as client:
        response = await client.get(GUESTS_URL)

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Unauthorized"}


@pytest.mark.asyncio
async def test_attendee_cannot_list_guests(client_factory, model, user_factory):
    attendee = user_factory(RoleSlug.ATTENDEE)
    overrides = {get_guest_read_model: lambda: model, get_optional_user: lambda: attendee}

    async with client_factory(overrides) as client:
        response = await client.get(GUESTS_URL)

    assert response.status_code == 403
    assert response.json()["error"] == (
        "Forbidden: Only hosts, super administrators, application administrators can view guests"
    )


@pytest.mark.asyncio
async def test_create_guest(client_factory, overrides, event_id):
    payload = {"event_id": str(event_id), "name": "Dave", "email": "dave@example.com", "response": "yes"}

    async with client_factory(overrides) as client:
        response = await client.post(GUESTS_URL, json=payload)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Dave"
    assert data["status"] == "PENDING"
    assert data["response"] == "YES"
    assert data["invited_at"] is not None


@pytest.mark.asyncio
async def test_create_guest_for_unknown_event(client_factory, overrides):
    async with client_factory(overrides) as client:
        response = await client.post(GUESTS_URL, json={"event_id": str(uuid4()), "name": "Dave"})

    assert response.status_code == 404
    assert response.json()["error"] == "Event not found"


@pytest.mark.asyncio
async def test_create_guest_without_name(client_factory, overrides, event_id):
    async with client_factory(overrides) as client:
        response = await client.post(GUESTS_URL, json={"event_id": str(event_id), "name": ""})

    assert response.status_code == 400
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_get_guest(client_factory, overrides, model, event_id):
    guest = (await model.list_guests(event_id=event_id, search="alice"))[0]

    async with client_factory(overrides) as client:
        response = await client.get(GUEST_URL.format(guest_id=guest.id))
        missing = await client.get(GUEST_URL.format(guest_id=uuid4()))

    assert response.status_code == 200
    assert response.json()["data"]["email"] == "alice@example.com"
    assert missing.status_code == 404
    assert missing.json()["error"] == "Guest not found"


@pytest.mark.asyncio
async def test_update_guest_normalizes_response(client_factory, overrides, model, event_id):
    guest = (await model.list_guests(event_id=event_id, search="alice"))[0]

    async with client_factory(overrides) as client:
        response = await client.put(
            GUEST_URL.format(guest_id=guest.id),
            json={"status": "CONFIRMED", "response": "Maybe"},
        )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "CONFIRMED"
    assert data["response"] == GuestResponse.MAYBE.value
    assert data["name"] == "Alice"


@pytest.mark.asyncio
async def test_update_unknown_guest(client_factory, overrides):
    async with client_factory(overrides) as client:
        response = await client.put(GUEST_URL.format(guest_id=uuid4()), json={"name": "X"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_guest(client_factory, overrides, model, event_id):
    guest = (await model.list_guests(event_id=event_id, search="bob"))[0]

    async with client_factory(overrides) as client:
        response = await client.delete(GUEST_URL.format(guest_id=guest.id))
        again = await client.delete(GUEST_URL.format(guest_id=guest.id))

    assert response.status_code == 200
    assert response.json()["message"] == "Guest deleted successfully"
    assert response.json()["data"]["name"] == "Bob"
    assert again.status_code == 404
