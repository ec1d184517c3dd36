from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from src.auth.dependencies import get_optional_user
from src.auth.dtos import SessionUser
from src.events.schemas import EventListEnvelope, EventOut
from src.guests.dtos import GuestStatus
from src.guests.identity import resolve_attendee_email
from src.guests.repository.read_models import AttendeeReadModel, SqlAttendeeReadModel
from src.guests.urls import ATTENDEE_EVENTS_URL

router = APIRouter()


def get_attendee_events_read_model() -> AttendeeReadModel:
    return SqlAttendeeReadModel()


@router.get(ATTENDEE_EVENTS_URL, response_model=EventListEnvelope)
async def list_invited_events(
    email: str | None = None,
    event_id: UUID | None = None,
    status: GuestStatus | None = None,
    user: SessionUser | None = Depends(get_optional_user),
    read_model: AttendeeReadModel = Depends(get_attendee_events_read_model),
) -> EventListEnvelope:
    """Events the caller is invited to, each with the caller's own guest record."""
    attendee_email = resolve_attendee_email(email, user)
    if not attendee_email:
        raise HTTPException(status_code=400, detail="Email or userId required")

    events = await read_model.list_invited_events(attendee_email, event_id=event_id, status=status)
    return EventListEnvelope(data=[EventOut.model_validate(event) for event in events])
