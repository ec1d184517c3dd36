from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Any
from uuid import UUID

if TYPE_CHECKING:
    from src.events.repository.orm_models import Event
    from src.guests.repository.orm_models import Guest


class EventStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


class InvitationType(str, Enum):
    ALL = "all"
    NEW = "new"


class EventNotFoundError(Exception):
    def __init__(self, event_id: UUID | str) -> None:
        self.event_id = event_id
        super().__init__("Event not found")


class EventPermissionError(Exception):
    def __init__(self, operation: str) -> None:
        super().__init__(f"You do not have permission to {operation} this event")


class InvalidEventDataError(Exception):
    """Raised when an event or guest payload fails the business checks."""


@dataclass(frozen=True)
class EventFeaturesDTO:
    """Guest policy switches of an event."""

    private_guest_list: bool = False
    allow_plus_ones: bool = False
    max_plus_ones: int | None = None
    allow_maybe_rsvp: bool = True
    allow_family_headcount: bool = False
    limit_event_capacity: bool = False
    max_event_capacity: int | None = None

    @classmethod
    def from_event(cls, event: "Event") -> "EventFeaturesDTO":
        return cls(
            private_guest_list=event.private_guest_list,
            allow_plus_ones=event.allow_plus_ones,
            max_plus_ones=event.max_plus_ones,
            allow_maybe_rsvp=event.allow_maybe_rsvp,
            allow_family_headcount=event.allow_family_headcount,
            limit_event_capacity=event.limit_event_capacity,
            max_event_capacity=event.max_event_capacity,
        )


@dataclass(frozen=True)
class EventOwnerDTO:
    id: UUID
    email: str
    name: str | None = None


@dataclass(frozen=True)
class EventGuestDTO:
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

    @classmethod
    def from_guest(cls, guest: "Guest") -> "EventGuestDTO":
        return cls(
            id=guest.uuid,
            name=guest.name,
            email=guest.email,
            phone=guest.phone,
            status=guest.status.value,
            response=guest.response.value if guest.response else None,
            plus_ones=guest.plus_ones,
            adults=guest.adults,
            children=guest.children,
            invited_at=guest.invited_at,
            responded_at=guest.responded_at,
        )


@dataclass(frozen=True)
class EventDTO:
    id: UUID
    title: str
    status: EventStatus
    start_date_time: datetime
    created_by_user_id: UUID
    features: EventFeaturesDTO
    description: str | None = None
    end_date_time: datetime | None = None
    timezone: str = "UTC"
    location_address: str | None = None
    location_unit: str | None = None
    show_map: bool = False
    json_content: Any = None
    image_path: str | None = None
    template_id: UUID | None = None
    is_trashed: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None
    guests: list[EventGuestDTO] = field(default_factory=list)
    owner: EventOwnerDTO | None = None

    @property
    def location(self) -> str | None:
        if not self.location_address:
            return None
        if self.location_unit:
            return f"{self.location_address}, {self.location_unit}"
        return self.location_address

    @classmethod
    def from_event(
        cls,
        event: "Event",
        guests: list["Guest"] | None = None,
        owner: EventOwnerDTO | None = None,
    ) -> "EventDTO":
        return cls(
            id=event.uuid,
            title=event.title,
            description=event.description,
            status=EventStatus(event.status),
            start_date_time=event.start_date_time,
            end_date_time=event.end_date_time,
            timezone=event.timezone,
            location_address=event.location_address,
            location_unit=event.location_unit,
            show_map=event.show_map,
            json_content=event.json_content,
            image_path=event.image_path,
            template_id=event.template_id,
            created_by_user_id=event.created_by_user_id,
            is_trashed=event.is_trashed,
            created_at=event.created_at,
            updated_at=event.updated_at,
            features=EventFeaturesDTO.from_event(event),
            guests=[EventGuestDTO.from_guest(guest) for guest in guests or []],
            owner=owner,
        )


@dataclass(frozen=True)
class NewEventDTO:
    """Fields accepted when creating an event."""

    title: str
    start_date_time: datetime
    description: str | None = None
    end_date_time: datetime | None = None
    timezone: str = "UTC"
    location_address: str | None = None
    location_unit: str | None = None
    show_map: bool = False
    json_content: Any = None
    image_path: str | None = None
    template_id: UUID | None = None
    status: EventStatus = EventStatus.DRAFT


@dataclass(frozen=True)
class GuestInputDTO:
    """Guest row submitted with an event. ``id`` is None for guests not stored yet."""

    name: str
    id: UUID | None = None
    email: str | None = None
    phone: str | None = None
    status: str | None = None


@dataclass(frozen=True)
class InvitationResultDTO:
    guest_id: UUID
    guest_name: str
    contact: str | None
    success: bool
    error: str | None = None


@dataclass(frozen=True)
class CreatedEventDTO:
    event: EventDTO
    invitations: list[InvitationResultDTO] = field(default_factory=list)


@dataclass(frozen=True)
class SendInvitationsSummaryDTO:
    total: int
    successful: int
    failed: int


@dataclass(frozen=True)
class SendInvitationsResultDTO:
    message: str
    results: list[InvitationResultDTO]
    summary: SendInvitationsSummaryDTO


@dataclass(frozen=True)
class EventChangesDTO:
    """A partial event update.

    ``fields`` holds only the event columns present in the request. ``guests``
    is None when the guest list is left alone, otherwise it replaces it.
    """

    fields: dict[str, Any] = field(default_factory=dict)
    guests: list[GuestInputDTO] | None = None
    invitation_type: InvitationType | None = None


class InvitationKind(str, Enum):
    INVITATION = "invitation"
    REMINDER = "reminder"
