from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.auth.dependencies import require_roles
from src.auth.dtos import RoleGroups, SessionUser
from src.email_service import get_email_service
from src.events.dtos import (
    EventChangesDTO,
    EventNotFoundError,
    EventPermissionError,
    EventStatus,
    GuestInputDTO,
    InvalidEventDataError,
    InvitationType,
)
from src.events.features.update_event.write_model import EventUpdateWriteModel, SqlEventUpdateWriteModel
from src.events.schemas import EventEnvelope, EventOut
from src.events.urls import UPDATE_EVENT_URL
from src.events.validation import ensure_not_blank, parse_event_datetime, parse_guest_id, validate_guest_inputs
from src.guests.dtos import GuestStatus

router = APIRouter()

# Columns copied as given when present in the request
PLAIN_FIELDS = (
    "description",
    "timezone",
    "location_unit",
    "show_map",
    "template_id",
    "json_content",
    "image_path",
    "status",
    "private_guest_list",
    "allow_plus_ones",
    "max_plus_ones",
    "allow_maybe_rsvp",
    "allow_family_headcount",
    "limit_event_capacity",
    "max_event_capacity",
)
NULLABLE_FIELDS = {
    "description",
    "location_unit",
    "template_id",
    "json_content",
    "image_path",
    "max_plus_ones",
    "max_event_capacity",
}


class GuestPayload(BaseModel):
    id: str | None = None
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    status: GuestStatus | None = None


class EventUpdateRequest(BaseModel):
    id: UUID | None = None
    title: str | None = None
    description: str | None = None
    start_date_time: str | None = None
    end_date_time: str | None = None
    timezone: str | None = None
    location_address: str | None = None
    location_unit: str | None = None
    show_map: bool | None = None
    template_id: UUID | None = None
    json_content: Any = None
    image_path: str | None = None
    status: EventStatus | None = None
    guests: list[GuestPayload] | None = None
    invitation_type: InvitationType | None = None
    # Guest policy
    private_guest_list: bool | None = None
    allow_plus_ones: bool | None = None
    max_plus_ones: int | None = None
    allow_maybe_rsvp: bool | None = None
    allow_family_headcount: bool | None = None
    limit_event_capacity: bool | None = None
    max_event_capacity: int | None = None

    def to_changes(self) -> EventChangesDTO:
        provided = self.model_fields_set
        fields: dict[str, Any] = {}

        if "title" in provided:
            ensure_not_blank(self.title, "Event title is required")
            fields["title"] = self.title.strip()
        if "location_address" in provided:
            ensure_not_blank(self.location_address, "Location address is required")
            fields["location_address"] = self.location_address.strip()

        timezone = self.timezone
        if "start_date_time" in provided:
            fields["start_date_time"] = parse_event_datetime(self.start_date_time, timezone)
        if "end_date_time" in provided:
            fields["end_date_time"] = (
                parse_event_datetime(self.end_date_time, timezone, field="End date")
                if self.end_date_time
                else None
            )

        for name in PLAIN_FIELDS:
            if name in provided:
                value = getattr(self, name)
                if value is None and name not in NULLABLE_FIELDS:
                    continue
                fields[name] = value

        guests = None
        if self.guests is not None:
            guests = [
                GuestInputDTO(
                    id=parse_guest_id(guest.id),
                    name=(guest.name or "").strip(),
                    email=guest.email.strip() if guest.email and guest.email.strip() else None,
                    phone=guest.phone.strip() if guest.phone and guest.phone.strip() else None,
                    status=guest.status.value if guest.status else None,
                )
                for guest in self.guests
            ]
            validate_guest_inputs(guests)

        return EventChangesDTO(fields=fields, guests=guests, invitation_type=self.invitation_type)


def get_event_update_write_model() -> EventUpdateWriteModel:
    return SqlEventUpdateWriteModel(email_service=get_email_service())


@router.put(UPDATE_EVENT_URL, response_model=EventEnvelope)
async def update_event(
    request: EventUpdateRequest,
    write_model: EventUpdateWriteModel = Depends(get_event_update_write_model),
    user: SessionUser = Depends(require_roles(RoleGroups.EVENT_MANAGERS, "update events")),
) -> EventEnvelope:
    """
    Partially update an event. Only the creator or an admin may do so.

    When ``guests`` is given it replaces the guest list: stored guests missing
    from it are deleted, guests with a stored id are updated and the rest are
    created. ``invitation_type`` then invites ``all`` listed guests or only the
    ``new`` ones. Delivery failures never fail the update.
    """
    if request.id is None:
        raise HTTPException(status_code=400, detail="Event ID is required")

    try:
        changes = request.to_changes()
        event = await write_model.update_event(request.id, user, changes)
    except InvalidEventDataError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except EventNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except EventPermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

    return EventEnvelope(data=EventOut.model_validate(event), message="Event updated successfully")
