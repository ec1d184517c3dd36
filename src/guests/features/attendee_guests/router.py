from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.auth.dependencies import get_optional_user
from src.auth.dtos import SessionUser
from src.guests.dtos import (
    ATTENDEE_STATUSES,
    GuestNotFoundError,
    GuestStatus,
    RSVPPolicyViolation,
    RSVPRequestDTO,
    normalize_response,
)
from src.guests.features.attendee_guests.write_model import RSVPWriteModel, SqlRSVPWriteModel
from src.guests.identity import resolve_attendee_email
from src.guests.repository.read_models import AttendeeReadModel, SqlAttendeeReadModel
from src.guests.schemas import GuestEnvelope, GuestListEnvelope, GuestOut
from src.guests.urls import ATTENDEE_GUESTS_URL

router = APIRouter()


class RSVPRequest(BaseModel):
    status: str | None = None
    response: str | None = None
    # Older clients send the answer as additional_notes
    additional_notes: str | None = None
    name: str | None = None
    phone: str | None = None
    plus_ones: int | None = None
    adults: int | None = None
    children: int | None = None


def get_attendee_read_model() -> AttendeeReadModel:
    return SqlAttendeeReadModel()


def get_rsvp_write_model() -> RSVPWriteModel:
    return SqlRSVPWriteModel()


def _require_email(email: str | None, user: SessionUser | None) -> str:
    attendee_email = resolve_attendee_email(email, user)
    if not attendee_email:
        raise HTTPException(status_code=400, detail="Email or userId required")
    return attendee_email


@router.get(ATTENDEE_GUESTS_URL, response_model=GuestListEnvelope)
async def list_my_invitations(
    email: str | None = None,
    event_id: UUID | None = None,
    status: GuestStatus | None = None,
    user: SessionUser | None = Depends(get_optional_user),
    read_model: AttendeeReadModel = Depends(get_attendee_read_model),
) -> GuestListEnvelope:
    """Guest records of the caller, newest invitation first."""
    attendee_email = _require_email(email, user)
    guests = await read_model.list_invitations(attendee_email, event_id=event_id, status=status)
    return GuestListEnvelope(data=[GuestOut.model_validate(guest) for guest in guests])


@router.put(ATTENDEE_GUESTS_URL, response_model=GuestEnvelope)
async def submit_rsvp(
    request: RSVPRequest,
    email: str | None = None,
    event_id: UUID | None = None,
    user: SessionUser | None = Depends(get_optional_user),
    write_model: RSVPWriteModel = Depends(get_rsvp_write_model),
) -> GuestEnvelope:
    """
    RSVP to an invitation.

    The answer is checked against the event's guest policy: plus-ones,
    "maybe" answers, family headcount and capacity.
    """
    attendee_email = _require_email(email, user)
    if event_id is None:
        raise HTTPException(status_code=400, detail="Event ID is required")

    try:
        status = GuestStatus(request.status) if request.status else None
    except ValueError:
        status = None
    if status not in ATTENDEE_STATUSES:
        raise HTTPException(status_code=400, detail="Valid status is required")

    rsvp = RSVPRequestDTO(
        status=status,
        response=normalize_response(request.additional_notes or request.response),
        name=request.name,
        phone=request.phone,
        plus_ones=request.plus_ones,
        adults=request.adults,
        children=request.children,
    )
    try:
        guest = await write_model.submit_rsvp(attendee_email, event_id, rsvp)
    except GuestNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RSVPPolicyViolation as e:
        raise HTTPException(status_code=400, detail=str(e))

    return GuestEnvelope(data=GuestOut.model_validate(guest))
