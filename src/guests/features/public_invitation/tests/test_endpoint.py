from uuid import UUID, uuid4

import pytest

from src.guests.dtos import GuestDTO, GuestStatus, InvitationDTO
from src.guests.features.public_invitation.router import get_public_invitation_read_model
from src.guests.repository.read_models import PublicInvitationReadModel
from src.guests.urls import PUBLIC_GUEST_URL


class InMemoryPublicInvitationReadModel(PublicInvitationReadModel):
    def __init__(self, invitations: dict[UUID, InvitationDTO]):
        self._invitations = invitations

    async def get_invitation(self, guest_id: UUID) -> InvitationDTO | None:
        return self._invitations.get(guest_id)


def make_invitation(**kwargs) -> InvitationDTO:
    guest = GuestDTO(
        id=uuid4(),
        event_id=uuid4(),
        name="Ann",
        email="ann@example.com",
        status=GuestStatus.INVITED,
    )
    values = {
        "guest": guest,
        "event_title": "Garden Party",
        "event_status": "PUBLISHED",
        "host_name": "Hosting Host",
        "host_email": "host@example.com",
    }
    values.update(kwargs)
    return InvitationDTO(**values)


async def fetch(client_factory, invitation: InvitationDTO | None, guest_id: str | None = None):
    invitations = {invitation.guest.id: invitation} if invitation else {}
    read_model = InMemoryPublicInvitationReadModel(invitations)
    if guest_id is None:
        guest_id = str(invitation.guest.id)

    async with client_factory({get_public_invitation_read_model: lambda: read_model}) as client:
        return await client.get(PUBLIC_GUEST_URL.format(guest_id=guest_id))


@pytest.mark.asyncio
async def test_public_invitation(client_factory):
    invitation = make_invitation()

    response = await fetch(client_factory, invitation)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Ann"
    assert data["event_status"] == "PUBLISHED"
    assert data["host"] == {"name": "Hosting Host", "email": "host@example.com"}


@pytest.mark.asyncio
async def test_draft_events_are_viewable(client_factory):
    response = await fetch(client_factory, make_invitation(event_status="DRAFT"))

    assert response.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize("guest_id", ["not-a-uuid", str(uuid4())])
async def test_invalid_invitation(client_factory, guest_id):
    response = await fetch(client_factory, None, guest_id=guest_id)

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error_type"] == "INVALID_INVITATION"
    assert body["error"] == "Guest invitation not found or invalid"
    assert body["message"].startswith("The invitation link you clicked is not valid")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "invitation_kwargs, error_type",
    [
        ({"event_exists": False, "event_status": None}, "EVENT_NOT_FOUND"),
        ({"event_is_trashed": True}, "EVENT_REMOVED"),
        ({"event_status": "CANCELLED"}, "EVENT_CANCELLED"),
        ({"event_status": "COMPLETED"}, "EVENT_COMPLETED"),
    ],
)
async def test_unavailable_event(client_factory, invitation_kwargs, error_type):
    response = await fetch(client_factory, make_invitation(**invitation_kwargs))

    assert response.status_code == 404
    assert response.json()["error_type"] == error_type


@pytest.mark.asyncio
async def test_trashed_wins_over_cancelled(client_factory):
    invitation = make_invitation(event_is_trashed=True, event_status="CANCELLED")

    response = await fetch(client_factory, invitation)

    assert response.json()["error_type"] == "EVENT_REMOVED"
