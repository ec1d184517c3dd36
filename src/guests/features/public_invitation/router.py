from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.events.dtos import EventStatus
from src.guests.repository.read_models import PublicInvitationReadModel, SqlPublicInvitationReadModel
from src.guests.schemas import GuestOut
from src.guests.urls import PUBLIC_GUEST_URL

router = APIRouter()

# error_type -> (error, message shown to the invited person)
INVITATION_ERRORS = {
    "INVALID_INVITATION": (
        "Guest invitation not found or invalid",
        "The invitation link you clicked is not valid. Please check the link or contact the event organizer.",
    ),
    "EVENT_NOT_FOUND": (
        "Event not found",
        "The event associated with this invitation no longer exists.",
    ),
    "EVENT_REMOVED": (
        "Event has been removed",
        "This event has been removed by the host/organizer and is no longer available.",
    ),
    "EVENT_CANCELLED": (
        "Event has been cancelled",
        "This event has been cancelled by the organizer. Please contact them for more information.",
    ),
    "EVENT_COMPLETED": (
        "Event has already been completed",
        "This event has already taken place and is no longer accepting RSVPs. Thank you for your interest!",
    ),
}


class InvitationHostOut(BaseModel):
    name: str | None = None
    email: str | None = None


class PublicInvitationOut(GuestOut):
    host: InvitationHostOut | None = None
    event_status: str | None = None


class PublicInvitationEnvelope(BaseModel):
    success: bool = True
    data: PublicInvitationOut


def invitation_error(error_type: str) -> HTTPException:
    error, message = INVITATION_ERRORS[error_type]
    return HTTPException(
        status_code=404,
        detail={"error": error, "error_type": error_type, "message": message},
    )


def get_public_invitation_read_model() -> PublicInvitationReadModel:
    return SqlPublicInvitationReadModel()


@router.get(PUBLIC_GUEST_URL, response_model=PublicInvitationEnvelope)
async def get_public_invitation(
    guest_id: str,
    read_model: PublicInvitationReadModel = Depends(get_public_invitation_read_model),
) -> PublicInvitationEnvelope:
    """Invitation page data, reachable without signing in."""
    try:
        guest_uuid = UUID(guest_id)
    except ValueError:
        raise invitation_error("INVALID_INVITATION")

    invitation = await read_model.get_invitation(guest_uuid)
    if invitation is None:
        raise invitation_error("INVALID_INVITATION")
    if not invitation.event_exists:
        raise invitation_error("EVENT_NOT_FOUND")
    if invitation.event_is_trashed:
        raise invitation_error("EVENT_REMOVED")
    if invitation.event_status == EventStatus.CANCELLED.value:
        raise invitation_error("EVENT_CANCELLED")
    if invitation.event_status == EventStatus.COMPLETED.value:
        raise invitation_error("EVENT_COMPLETED")

    guest = GuestOut.model_validate(invitation.guest)
    return PublicInvitationEnvelope(
        data=PublicInvitationOut(
            **guest.model_dump(),
            host=InvitationHostOut(name=invitation.host_name, email=invitation.host_email),
            event_status=invitation.event_status,
        )
    )
