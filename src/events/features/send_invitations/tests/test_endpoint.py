from uuid import UUID, uuid4

import pytest

from src.auth.dependencies import get_optional_user
from src.auth.dtos import RoleSlug, SessionUser
from src.events.access import ensure_can_manage_event
from src.events.dtos import (
    EventNotFoundError,
    InvitationKind,
    InvitationResultDTO,
    SendInvitationsResultDTO,
    SendInvitationsSummaryDTO,
)
from src.events.features.send_invitations.router import get_send_invitations_write_model
from src.events.features.send_invitations.write_model import SendInvitationsWriteModel
from src.events.urls import SEND_INVITATIONS_URL


class InMemorySendInvitationsWriteModel(SendInvitationsWriteModel):
    def __init__(self, owners: dict[UUID, UUID]):
        self._owners = owners
        self.calls = []

    async def send_invitations(self, event_id, user: SessionUser, guest_ids=None, kind=InvitationKind.INVITATION):
        if event_id not in self._owners:
            raise EventNotFoundError(event_id)
        ensure_can_manage_event(user, self._owners[event_id], "send invitations for")
        self.calls.append((guest_ids, kind))
        results = [
            InvitationResultDTO(guest_id=uuid4(), guest_name="Ann", contact="ann@example.com", success=True),
            InvitationResultDTO(
                guest_id=uuid4(), guest_name="Ben", contact="555", success=False, error="Guest has no email address"
            ),
        ]
        return SendInvitationsResultDTO(
            message=f"Sent {kind.value}s to 1 guests, 1 failed",
            results=results,
            summary=SendInvitationsSummaryDTO(total=2, successful=1, failed=1),
        )


@pytest.fixture
def host(user_factory):
    return user_factory(RoleSlug.HOST)


@pytest.fixture
def event_id():
    return uuid4()


@pytest.fixture
def write_model(host, event_id):
    return InMemorySendInvitationsWriteModel({event_id: host.id})


async def send(client_factory, write_model, user, event_id, **kwargs):
    overrides = {get_send_invitations_write_model: lambda: write_model, get_optional_user: lambda: user}
    async with client_factory(overrides) as client:
        return await client.post(SEND_INVITATIONS_URL.format(event_id=event_id), **kwargs)


@pytest.mark.asyncio
async def test_send_invitations_without_body(client_factory, write_model, host, event_id):
    response = await send(client_factory, write_model, host, event_id)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Sent invitations to 1 guests, 1 failed"
    assert body["summary"] == {"total": 2, "successful": 1, "failed": 1}
    assert body["results"][1]["error"] == "Guest has no email address"
    assert write_model.calls == [(None, InvitationKind.INVITATION)]


@pytest.mark.asyncio
async def test_send_reminders_to_chosen_guests(client_factory, write_model, host, event_id):
    guest_id = uuid4()

    response = await send(
        client_factory, write_model, host, event_id, json={"guest_ids": [str(guest_id)], "type": "reminder"}
    )

    assert response.status_code == 200
    assert write_model.calls == [([guest_id], InvitationKind.REMINDER)]


@pytest.mark.asyncio
async def test_unknown_type(client_factory, write_model, host, event_id):
    response = await send(client_factory, write_model, host, event_id, json={"type": "nudge"})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unknown_event(client_factory, write_model, host):
    response = await send(client_factory, write_model, host, uuid4())

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_other_host_cannot_send(client_factory, write_model, user_factory, event_id):
    response = await send(client_factory, write_model, user_factory(RoleSlug.HOST), event_id)

    assert response.status_code == 403
    assert response.json()["error"] == "You do not have permission to send invitations for this event"
