from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.auth.dependencies import require_roles
from src.auth.dtos import RoleGroups, SessionUser
from src.email_service import get_email_service
from src.events.dtos import EventStatus, GuestInputDTO, InvalidEventDataError, NewEventDTO
from src.events.features.create_event.write_model import EventWriteModel, SqlEventWriteModel
from src.events.schemas import EventEnvelope, EventOut, InvitationResultOut
from src.events.urls import CREATE_EVENT_URL, EVENTS_URL
from src.events.validation import ensure_not_blank, parse_event_datetime, split_contact

router = APIRouter()


class EventCreateRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    start_date_time: str | None = None
    end_date_time: str | None = None
    timezone: str = "UTC"
    location_address: str | None = None
    location_unit: str | None = None
    show_map: bool = False
    json_content: Any = None
    image_path: str | None = None
    template_id: UUID | None = None
    status: EventStatus = EventStatus.DRAFT

    def to_dto(self) -> NewEventDTO:
        ensure_not_blank(self.title, "Title and date are required")
        if not self.start_date_time:
            raise InvalidEventDataError("Title and date are required")
        return NewEventDTO(
            title=self.title.strip(),
            description=self.description,
            start_date_time=parse_event_datetime(self.start_date_time, self.timezone),
            end_date_time=(
                parse_event_datetime(self.end_date_time, self.timezone, field="End date")
                if self.end_date_time
                else None
            ),
            timezone=self.timezone,
            location_address=self.location_address,
            location_unit=self.location_unit,
            show_map=self.show_map,
            json_content=self.json_content,
            image_path=self.image_path,
            template_id=self.template_id,
            status=self.status,
        )


class NewGuestRequest(BaseModel):
    name: str = ""
    contact: str | None = None


class CreateEventWithGuestsRequest(EventCreateRequest):
    guests: list[NewGuestRequest] = []
    send_invitations: bool = False


class CreatedEventData(BaseModel):
    event: EventOut
    invitations: list[InvitationResultOut] = []


class CreatedEventEnvelope(BaseModel):
    success: bool = True
    data: CreatedEventData


def get_event_write_model() -> EventWriteModel:
    return SqlEventWriteModel(email_service=get_email_service())


@router.post(EVENTS_URL, response_model=EventEnvelope)
async def create_event(
    request: EventCreateRequest,
    write_model: EventWriteModel = Depends(get_event_write_model),
    user: SessionUser = Depends(require_roles(RoleGroups.EVENT_MANAGERS, "create events")),
) -> EventEnvelope:
    """Create an event owned by the caller, a draft unless a status is given."""
    try:
        new_event = request.to_dto()
    except InvalidEventDataError as e:
        raise HTTPException(status_code=400, detail=str(e))

    event = await write_model.create_event(new_event, owner=user)
    return EventEnvelope(data=EventOut.model_validate(event))


@router.post(CREATE_EVENT_URL, response_model=CreatedEventEnvelope)
async def create_event_with_guests(
    request: CreateEventWithGuestsRequest,
    write_model: EventWriteModel = Depends(get_event_write_model),
    user: SessionUser = Depends(require_roles(RoleGroups.EVENT_MANAGERS, "create events")),
) -> CreatedEventEnvelope:
    """
    Create an event together with its guest list.

    Each guest is given as ``{name, contact}`` where the contact is an email
    address or a phone number. With ``send_invitations`` every guest is
    invited right away and the outcome is reported per guest.
    """
    try:
        new_event = request.to_dto()
        if not request.guests:
            raise InvalidEventDataError("At least one guest is required")
        guests = []
        for guest in request.guests:
            ensure_not_blank(guest.name, "Guest name is required")
            email, phone = split_contact(guest.contact)
            guests.append(GuestInputDTO(name=guest.name.strip(), email=email, phone=phone))
    except InvalidEventDataError as e:
        raise HTTPException(status_code=400, detail=str(e))

    created = await write_model.create_event_with_guests(
        new_event,
        owner=user,
        guests=guests,
        send_invitations=request.send_invitations,
    )
    return CreatedEventEnvelope(
        data=CreatedEventData(
            event=EventOut.model_validate(created.event),
            invitations=[InvitationResultOut.model_validate(result) for result in created.invitations],
        )
    )
