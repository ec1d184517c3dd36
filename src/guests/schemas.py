from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from src.guests.dtos import GuestResponse, GuestStatus


class GuestEventOut(BaseModel):
    id: UUID
    title: str
    start_date_time: datetime
    location_address: str | None = None
    description: str | None = None
    image_path: str | None = None

    class Config:
        from_attributes = True


class GuestOut(BaseModel):
    id: UUID
    event_id: UUID
    name: str
    email: str | None = None
    phone: str | None = None
    status: GuestStatus
    response: GuestResponse | None = None
    plus_ones: int = 0
    adults: int = 0
    children: int = 0
    invited_at: datetime | None = None
    responded_at: datetime | None = None
    event: GuestEventOut | None = None

    class Config:
        from_attributes = True


class GuestEnvelope(BaseModel):
    success: bool = True
    data: GuestOut
    message: str | None = None


class GuestListEnvelope(BaseModel):
    success: bool = True
    data: list[GuestOut]
