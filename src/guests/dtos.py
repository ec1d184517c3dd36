from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from src.events.repository.orm_models import Event
    from src.guests.repository.orm_models import Guest


class GuestStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    DECLINED = "DECLINED"
    INVITED = "INVITED"


class GuestResponse(str, Enum):
    YES = "YES"
    NO = "NO"
    MAYBE = "MAYBE"


# Statuses a guest may set on their own invitation
ATTENDEE_STATUSES = (GuestStatus.PENDING, GuestStatus.CONFIRMED, GuestStatus.DECLINED)


def normalize_response(value: str | None) -> GuestResponse | None:
    """Map yes/no/maybe in any case to a GuestResponse; anything else is no response."""
    if value is None:
        return None
    try:
        return GuestResponse(str(value).strip().upper())
    except ValueError:
        return None


class GuestNotFoundError(Exception):
    def __init__(self, message: str = "Guest not found") -> None:
        super().__init__(message)


class RSVPPolicyViolation(Exception):
    """Raised when an RSVP asks for something the event does not allow."""


@dataclass(frozen=True)
class GuestEventDTO:
    """Event summary attached to guest records."""

    id: UUID
    title: str
    start_date_time: datetime
    location_address: str | None = None
    description: str | None = None
    image_path: str | None = None

    @classmethod
    def from_event(cls, event: "Event") -> "GuestEventDTO":
        return cls(
            id=event.uuid,
            title=event.title,
            start_date_time=event.start_date_time,
            location_address=event.location_address,
            description=event.description,
            image_path=event.image_path,
        )


@dataclass(frozen=True)
class GuestDTO:
    id: UUID
    event_id: UUID
    name: str
    status: GuestStatus
    email: str | None = None
    phone: str | None = None
    response: GuestResponse | None = None
    plus_ones: int = 0
    adults: int = 0
    children: int = 0
    invited_at: datetime | None = None
    responded_at: datetime | None = None
    event: GuestEventDTO | None = None

    @classmethod
    def from_guest(cls, guest: "Guest", event: "Event | None" = None) -> "GuestDTO":
        return cls(
            id=guest.uuid,
            event_id=guest.event_id,
            name=guest.name,
            email=guest.email,
            phone=guest.phone,
            status=GuestStatus(guest.status),
            response=GuestResponse(guest.response) if guest.response else None,
            plus_ones=guest.plus_ones,
            adults=guest.adults,
            children=guest.children,
            invited_at=guest.invited_at,
            responded_at=guest.responded_at,
            event=GuestEventDTO.from_event(event) if event is not None else None,
        )


@dataclass(frozen=True)
class InvitationDTO:
    """Everything the public invitation page needs for one guest."""

    guest: GuestDTO
    event_title: str | None = None
    event_status: str | None = None
    event_is_trashed: bool = False
    host_name: str | None = None
    host_email: str | None = None
    event_exists: bool = True


@dataclass(frozen=True)
class NewGuestDTO:
    event_id: UUID
    name: str
    email: str | None = None
    phone: str | None = None
    status: GuestStatus = GuestStatus.PENDING
    response: GuestResponse | None = None


@dataclass(frozen=True)
class GuestChangesDTO:
    """Fields a guest manager may change. None leaves the stored value."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    status: GuestStatus | None = None
    response: GuestResponse | None = None


@dataclass(frozen=True)
class RSVPRequestDTO:
    """An attendee's answer. Counts left as None keep their stored values."""

    status: GuestStatus
    response: GuestResponse | None = None
    name: str | None = None
    phone: str | None = None
    plus_ones: int | None = None
    adults: int | None = None
    children: int | None = None
