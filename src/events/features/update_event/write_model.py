import logging
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dtos import SessionUser
from src.config.database import async_session_manager
from src.email_service.base import EmailServiceBase
from src.events.access import ensure_can_manage_event
from src.events.dtos import EventChangesDTO, EventDTO, EventNotFoundError, GuestInputDTO, InvitationType
from src.events.invitations import InvitationSender
from src.events.repository.orm_models import Event
from src.events.repository.read_models import owner_dto
from src.guests.dtos import GuestStatus
from src.guests.repository.orm_models import Guest
from src.models.user import User

logger = logging.getLogger(__name__)


class EventUpdateWriteModel(ABC):
    @abstractmethod
    async def update_event(self, event_id: UUID, user: SessionUser, changes: EventChangesDTO) -> EventDTO:
        """
        Apply a partial update to an event and sync its guest list.
        Raises EventNotFoundError or EventPermissionError.
        """
        raise NotImplementedError


class SqlEventUpdateWriteModel(EventUpdateWriteModel):
    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        email_service: EmailServiceBase | None = None,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.invitation_sender = InvitationSender(email_service)

    async def update_event(self, event_id: UUID, user: SessionUser, changes: EventChangesDTO) -> EventDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await session.get(Event, event_id)
            if event is None:
                raise EventNotFoundError(event_id)
            ensure_can_manage_event(user, event.created_by_user_id, "update")

            current_guests = list(
                (await session.execute(select(Guest).where(Guest.event_id == event_id))).scalars()
            )
            kept_guests, created_guests = current_guests, []
            if changes.guests is not None:
                kept_guests, created_guests = await self._sync_guests(
                    session, event_id, current_guests, changes.guests
                )

            for name, value in changes.fields.items():
                setattr(event, name, value)

            guests_to_invite = []
            if changes.invitation_type == InvitationType.ALL:
                guests_to_invite = kept_guests + created_guests
            elif changes.invitation_type == InvitationType.NEW:
                guests_to_invite = created_guests

            now = datetime.now(UTC)
            for guest in guests_to_invite:
                guest.status = GuestStatus.INVITED
                guest.invited_at = now

            await session.flush()
            await session.refresh(event)
            owner = await session.get(User, event.created_by_user_id)
            updated = EventDTO.from_event(
                event,
                guests=kept_guests + created_guests,
                owner=owner_dto(owner),
            )

        if guests_to_invite:
            await self._send_invitations(event, guests_to_invite, host_name=updated.owner.name if updated.owner else None)
        return updated

    @staticmethod
    async def _sync_guests(
        session,
        event_id: UUID,
        current_guests: list[Guest],
        guests: list[GuestInputDTO],
    ) -> tuple[list[Guest], list[Guest]]:
        """Make the stored guest list match ``guests``. Returns (updated, created)."""
        stored = {guest.uuid: guest for guest in current_guests}
        payload_ids = {guest.id for guest in guests if guest.id}

        removed = [guest for guest_id, guest in stored.items() if guest_id not in payload_ids]
        for guest in removed:
            await session.delete(guest)
        if removed:
            logger.info("Deleted %s removed guests from event %s", len(removed), event_id)

        updated, created = [], []
        for guest_input in guests:
            guest = stored.get(guest_input.id) if guest_input.id else None
            if guest is not None:
                guest.name = guest_input.name
                guest.email = guest_input.email
                guest.phone = guest_input.phone
                if guest_input.status:
                    guest.status = GuestStatus(guest_input.status)
                updated.append(guest)
            else:
                guest = Guest(
                    event_id=event_id,
                    name=guest_input.name,
                    email=guest_input.email,
                    phone=guest_input.phone,
                    status=GuestStatus(guest_input.status) if guest_input.status else GuestStatus.PENDING,
                )
                session.add(guest)
                created.append(guest)

        await session.flush()
        return updated, created

    async def _send_invitations(self, event: Event, guests: list[Guest], host_name: str | None) -> None:
        results = [await self.invitation_sender.send(event, guest, host_name=host_name) for guest in guests]
        failed = [result for result in results if not result.success]
        if failed:
            logger.warning("Failed to send invitations to %s guests for event %s", len(failed), event.uuid)
