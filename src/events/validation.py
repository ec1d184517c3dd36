"""Checks on event payloads that go beyond field types."""

from datetime import datetime
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.events.dtos import GuestInputDTO, InvalidEventDataError

TEMP_GUEST_ID_PREFIX = "temp-"


def parse_event_datetime(value: str | None, timezone: str | None = None, field: str = "Start date") -> datetime:
    """Parse an ISO 8601 date or datetime. Naive values are read in the event's timezone."""
    if value is None or not str(value).strip():
        raise InvalidEventDataError(f"{field} is required")
    try:
        parsed = datetime.fromisoformat(str(value).strip())
    except ValueError:
        raise InvalidEventDataError("Invalid date format")

    if parsed.tzinfo is None:
        try:
            parsed = parsed.replace(tzinfo=ZoneInfo(timezone or "UTC"))
        except (ZoneInfoNotFoundError, ValueError):
            raise InvalidEventDataError(f"Unknown timezone: {timezone}")
    return parsed


def ensure_not_blank(value: str | None, message: str) -> None:
    if value is None or not value.strip():
        raise InvalidEventDataError(message)


def validate_guest_inputs(guests: list[GuestInputDTO]) -> None:
    for guest in guests:
        ensure_not_blank(guest.name, "Guest name is required")
        if not (guest.email and guest.email.strip()) and not (guest.phone and guest.phone.strip()):
            raise InvalidEventDataError("Either email or phone number is required for guests")


def split_contact(contact: str | None) -> tuple[str | None, str | None]:
    """Sort a free-form contact into ``(email, phone)``."""
    if not contact or not contact.strip():
        return None, None
    contact = contact.strip()
    if "@" in contact:
        return contact, None
    return None, contact


def parse_guest_id(raw_id: str | None) -> UUID | None:
    """Ids of stored guests. Blank, ``temp-`` and malformed ids mean a guest to create."""
    if not raw_id or raw_id.startswith(TEMP_GUEST_ID_PREFIX):
        return None
    try:
        return UUID(raw_id)
    except ValueError:
        return None
