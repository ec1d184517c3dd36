from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from src.events.dtos import EventStatus


class EventFeaturesOut(BaseModel):
    private_guest_list: bool = False
    allow_plus_ones: bool = False
    max_plus_ones: int | None = None
    allow_maybe_rsvp: bool = True
    allow_family_headcount: bool = False
    limit_event_capacity: bool = False
    max_event_capacity: int | None = None

    class Config:
        from_attributes = True


class EventGuestOut(BaseModel):
    id: UUID
    name: str
    status: str
    email: str | None = None
    phone: str | None = None
    response: str | None = None
    plus_ones: int = 0
    adults: int = 0
    children: int = 0
    invited_at: datetime | None = None
    responded_at: datetime | None = None

    class Config:
        from_attributes = True


class EventOwnerOut(BaseModel):
    id: UUID
    email: str
    name: str | None = None

    class Config:
        from_attributes = True


class EventOut(BaseModel):
    id: UUID
    title: str
    description: str | None = None
    status: EventStatus
    start_date_time: datetime
    end_date_time: datetime | None = None
    timezone: str = "UTC"
    location: str | None = None
    location_address: str | None = None
    location_unit: str | None = None
    show_map: bool = False
    json_content: Any = None
    image_path: str | None = None
    template_id: UUID | None = None
    created_by_user_id: UUID
    is_trashed: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    features: EventFeaturesOut
    guests: list[EventGuestOut] = []
    owner: EventOwnerOut | None = None

    class Config:
        from_attributes = True


class EventEnvelope(BaseModel):
    success: bool = True
    data: EventOut
    message: str | None = None


class EventListEnvelope(BaseModel):
    success: bool = True
    data: list[EventOut]


class InvitationResultOut(BaseModel):
    guest_id: UUID
    guest_name: str
    contact: str | None = None
    success: bool
    error: str | None = None

    class Config:
        from_attributes = True


class SendInvitationsSummaryOut(BaseModel):
    total: int = 0
    successful: int = 0
    failed: int = 0

    class Config:
        from_attributes = True
