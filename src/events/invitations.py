import logging
from datetime import UTC, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.config.settings import settings
from src.email_service.base import EmailServiceBase
from src.events.dtos import InvitationResultDTO
from src.events.repository.orm_models import Event
from src.guests.repository.orm_models import Guest

logger = logging.getLogger(__name__)

DATE_FORMAT = "%A, %B %d, %Y at %I:%M %p"


def build_invitation_url(event_id, guest_id) -> str:
    return f"{settings.frontend_url}/invitation/{event_id}/{guest_id}"


def format_event_date(start: datetime, timezone: str | None) -> str:
    # sqlite hands back naive datetimes, they are stored as UTC
    if start.tzinfo is None:
        start = start.replace(tzinfo=UTC)
    try:
        tz = ZoneInfo(timezone or "UTC")
    except (ZoneInfoNotFoundError, ValueError):
        tz = ZoneInfo("UTC")
    local = start.astimezone(tz)
    return f"{local.strftime(DATE_FORMAT)} ({local.tzname()})"


def format_location(event: Event) -> str:
    if not event.location_address:
        return "To be announced"
    if event.location_unit:
        return f"{event.location_address}, {event.location_unit}"
    return event.location_address


class InvitationSender:
    """Delivers invitation emails and reports the outcome per guest.

    Delivery problems never raise; they are logged and returned as a failed result.
    """

    def __init__(self, email_service: EmailServiceBase | None) -> None:
        self.email_service = email_service

    async def send(self, event: Event, guest: Guest, host_name: str | None = None) -> InvitationResultDTO:
        contact = guest.email or guest.phone

        if not self.email_service:
            logger.warning("No email service configured. Skipping invitation for guest %s", guest.uuid)
            return self._failed(guest, contact, "No messaging service configured")

        if not guest.email:
            # Only email delivery is supported
            return self._failed(guest, contact, "Guest has no email address")

        try:
            await self.email_service.send_invitation(
                to_address=guest.email,
                guest_name=guest.name,
                event_title=event.title,
                event_date=format_event_date(event.start_date_time, event.timezone),
                event_location=format_location(event),
                host_name=host_name or "Your host",
                invitation_url=build_invitation_url(event.uuid, guest.uuid),
            )
        except Exception as e:
            logger.exception("Error sending invitation to %s", guest.email)
            return self._failed(guest, contact, str(e) or "Failed to send invitation")

        return InvitationResultDTO(
            guest_id=guest.uuid,
            guest_name=guest.name,
            contact=contact,
            success=True,
        )

    @staticmethod
    def _failed(guest: Guest, contact: str | None, error: str) -> InvitationResultDTO:
        return InvitationResultDTO(
            guest_id=guest.uuid,
            guest_name=guest.name,
            contact=contact,
            success=False,
            error=error,
        )
