from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from src.auth.dependencies import get_optional_user
from src.auth.dtos import RoleSlug, SessionUser
from src.events.access import ensure_can_manage_event
from src.events.dtos import (
    EventChangesDTO,
    EventDTO,
    EventFeaturesDTO,
    EventNotFoundError,
    EventStatus,
    InvitationType,
)
from src.events.features.update_event.router import get_event_update_write_model
from src.events.features.update_event.write_model import EventUpdateWriteModel
from src.events.urls import UPDATE_EVENT_URL


class InMemoryEventUpdateWriteModel(EventUpdateWriteModel):
    def __init__(self, owners: dict[UUID, UUID]):
        # event id -> creator id
        self._owners = owners
        self.changes: list[EventChangesDTO] = []

    async def update_event(self, event_id: UUID, user: SessionUser, changes: EventChangesDTO) -> EventDTO:
        if event_id not in self._owners:
            raise EventNotFoundError(event_id)
        ensure_can_manage_event(user, self._owners[event_id], "update")
        self.changes.append(changes)
        return EventDTO(
            id=event_id,
            title=changes.fields.get("title", "Garden Party"),
            status=changes.fields.get("status", EventStatus.DRAFT),
            start_date_time=changes.fields.get("start_date_time", datetime(2030, 6, 1, tzinfo=UTC)),
            created_by_user_id=self._owners[event_id],
            features=EventFeaturesDTO(),
        )


@pytest.fixture
def host(user_factory):
    return user_factory(RoleSlug.HOST)


@pytest.fixture
def event_id():
    return uuid4()


@pytest.fixture
def write_model(host, event_id):
    return InMemoryEventUpdateWriteModel({event_id: host.id})


async def put(client_factory, write_model, user, payload):
    overrides = {get_event_update_write_model: lambda: write_model, get_optional_user: lambda: user}
    async with client_factory(overrides) as client:
        return await client.put(UPDATE_EVENT_URL, json=payload)


@pytest.mark.asyncio
async def test_update_only_provided_fields(client_factory, write_model, host, event_id):
    response = await put(
        client_factory,
        write_model,
        host,
        {"id": str(event_id), "title": " New title ", "description": None, "status": "PUBLISHED"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Event updated successfully"
    assert body["data"]["title"] == "New title"
    changes = write_model.changes[0]
    assert changes.fields == {"title": "New title", "description": None, "status": EventStatus.PUBLISHED}
    assert changes.guests is None
    assert changes.invitation_type is None


@pytest.mark.asyncio
async def test_null_flags_are_ignored(client_factory, write_model, host, event_id):
    await put(
        client_factory,
        write_model,
        host,
        {"id": str(event_id), "allow_plus_ones": None, "max_plus_ones": None},
    )

    assert write_model.changes[0].fields == {"max_plus_ones": None}


@pytest.mark.asyncio
async def test_update_guest_list(client_factory, write_model, host, event_id):
    stored_id = uuid4()
    payload = {
        "id": str(event_id),
        "guests": [
            {"id": str(stored_id), "name": "Ann", "email": "ann@example.com"},
            {"id": "temp-1700000000", "name": "Ben", "phone": " 555 "},
        ],
        "invitation_type": "new",
    }

    response = await put(client_factory, write_model, host, payload)

    assert response.status_code == 200
    changes = write_model.changes[0]
    assert [(guest.id, guest.name, guest.phone) for guest in changes.guests] == [
        (stored_id, "Ann", None),
        (None, "Ben", "555"),
    ]
    assert changes.invitation_type == InvitationType.NEW


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload, message",
    [
        ({"title": "  "}, "Event title is required"),
        ({"location_address": ""}, "Location address is required"),
        ({"start_date_time": None}, "Start date is required"),
        ({"start_date_time": "tomorrow"}, "Invalid date format"),
        ({"guests": [{"name": "Ann"}]}, "Either email or phone number is required for guests"),
        ({"guests": [{"email": "ann@example.com"}]}, "Guest name is required"),
    ],
)
async def test_update_invalid(client_factory, write_model, host, event_id, payload, message):
    response = await put(client_factory, write_model, host, {"id": str(event_id), **payload})

    assert response.status_code == 400
    assert response.json()["error"] == message
    assert write_model.changes == []


@pytest.mark.asyncio
async def test_update_requires_id(client_factory, write_model, host):
    response = await put(client_factory, write_model, host, {"title": "New title"})

    assert response.status_code == 400
    assert response.json()["error"] == "Event ID is required"


@pytest.mark.asyncio
async def test_update_unknown_event(client_factory, write_model, host):
    response = await put(client_factory, write_model, host, {"id": str(uuid4()), "title": "X"})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_other_host_cannot_update(client_factory, write_model, user_factory, event_id):
    response = await put(
        client_factory, write_model, user_factory(RoleSlug.HOST), {"id": str(event_id), "title": "X"}
    )

    assert response.status_code == 403
    assert response.json()["error"] == "You do not have permission to update this event"


@pytest.mark.asyncio
async def test_admin_can_update_any_event(client_factory, write_model, user_factory, event_id):
    response = await put(
        client_factory, write_model, user_factory(RoleSlug.SUPER_ADMIN), {"id": str(event_id), "title": "X"}
    )

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_attendee_cannot_update(client_factory, write_model, user_factory, event_id):
    response = await put(
        client_factory, write_model, user_factory(RoleSlug.ATTENDEE), {"id": str(event_id), "title": "X"}
    )

    assert response.status_code == 403
    assert response.json()["error"].endswith("can update events")
