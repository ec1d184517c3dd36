import logging
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dtos import SessionUser
from src.config.database import async_session_manager
from src.email_service.base import EmailServiceBase
from src.events.dtos import (
    CreatedEventDTO,
    EventDTO,
    EventOwnerDTO,
    GuestInputDTO,
    InvitationResultDTO,
    NewEventDTO,
)
from src.events.invitations import InvitationSender
from src.events.repository.orm_models import Event
from src.guests.dtos import GuestStatus
from src.guests.repository.orm_models import Guest

logger = logging.getLogger(__name__)


class EventWriteModel(ABC):
    @abstractmethod
    async def create_event(self, event: NewEventDTO, owner: SessionUser) -> EventDTO:
        raise NotImplementedError

    @abstractmethod
    async def create_event_with_guests(
        self,
        event: NewEventDTO,
        owner: SessionUser,
        guests: list[GuestInputDTO],
        send_invitations: bool = False,
    ) -> CreatedEventDTO:
        """
        Create the event and its PENDING guests in one transaction.
        Invitations go out after the commit; failures are reported per guest.
        """
        raise NotImplementedError


def new_event_orm(event: NewEventDTO, owner_id: UUID) -> Event:
    return Event(
        title=event.title,
        description=event.description,
        start_date_time=event.start_date_time,
        end_date_time=event.end_date_time,
        timezone=event.timezone,
        location_address=event.location_address,
        location_unit=event.location_unit,
        show_map=event.show_map,
        json_content=event.json_content,
        image_path=event.image_path,
        template_id=event.template_id,
        status=event.status,
        created_by_user_id=owner_id,
        is_trashed=False,
    )


class SqlEventWriteModel(EventWriteModel):
    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        email_service: EmailServiceBase | None = None,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.invitation_sender = InvitationSender(email_service)

    async def create_event(self, event: NewEventDTO, owner: SessionUser) -> EventDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            new_event = new_event_orm(event, owner.id)
            session.add(new_event)
            await session.flush()
            await session.refresh(new_event)
            return EventDTO.from_event(new_event, owner=_owner(owner))

    async def create_event_with_guests(
        self,
        event: NewEventDTO,
        owner: SessionUser,
        guests: list[GuestInputDTO],
        send_invitations: bool = False,
    ) -> CreatedEventDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            new_event = new_event_orm(event, owner.id)
            session.add(new_event)
            await session.flush()

            new_guests = [
                Guest(
                    event_id=new_event.uuid,
                    name=guest.name,
                    email=guest.email,
                    phone=guest.phone,
                    status=GuestStatus.PENDING,
                )
                for guest in guests
            ]
            session.add_all(new_guests)
            await session.flush()
            await session.refresh(new_event)
            for guest in new_guests:
                await session.refresh(guest)

        invitations: list[InvitationResultDTO] = []
        if send_invitations:
            invitations = await self._invite(new_event, new_guests, owner)

        return CreatedEventDTO(
            event=EventDTO.from_event(new_event, guests=new_guests, owner=_owner(owner)),
            invitations=invitations,
        )

    async def _invite(self, event: Event, guests: list[Guest], owner: SessionUser) -> list[InvitationResultDTO]:
        results = [await self.invitation_sender.send(event, guest, host_name=owner.name) for guest in guests]

        delivered = {result.guest_id for result in results if result.success}
        if delivered:
            now = datetime.now(UTC)
            async with async_session_manager(session_overwrite=self.session_overwrite) as session:
                await session.execute(
                    update(Guest)
                    .where(Guest.uuid.in_(delivered))
                    .values(status=GuestStatus.INVITED, invited_at=now)
                    .execution_options(synchronize_session=False)
                )
            for guest in guests:
                if guest.uuid in delivered:
                    guest.status = GuestStatus.INVITED
                    guest.invited_at = now

        failed = len(results) - len(delivered)
        if failed:
            logger.warning("Failed to send invitations to %s guests for event %s", failed, event.uuid)
        return results


def _owner(user: SessionUser) -> EventOwnerDTO:
    return EventOwnerDTO(id=user.id, email=user.email, name=user.name)
