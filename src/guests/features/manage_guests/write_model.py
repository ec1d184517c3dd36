from abc import ABC, abstractmethod
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.events.dtos import EventNotFoundError
from src.events.repository.orm_models import Event
from src.guests.dtos import GuestChangesDTO, GuestDTO, GuestNotFoundError, NewGuestDTO
from src.guests.repository.orm_models import Guest


class GuestWriteModel(ABC):
    @abstractmethod
    async def create_guest(self, guest: NewGuestDTO) -> GuestDTO:
        raise NotImplementedError

    @abstractmethod
    async def update_guest(self, guest_id: UUID, changes: GuestChangesDTO) -> GuestDTO:
        raise NotImplementedError

    @abstractmethod
    async def delete_guest(self, guest_id: UUID) -> GuestDTO:
        raise NotImplementedError


class SqlGuestWriteModel(GuestWriteModel):
    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def create_guest(self, guest: NewGuestDTO) -> GuestDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await session.get(Event, guest.event_id)
            if event is None:
                raise EventNotFoundError(guest.event_id)

            new_guest = Guest(
                event_id=guest.event_id,
                name=guest.name,
                email=guest.email,
                phone=guest.phone,
                status=guest.status,
                response=guest.response,
                invited_at=datetime.now(UTC),
            )
            session.add(new_guest)
            await session.flush()
            await session.refresh(new_guest)
            return GuestDTO.from_guest(new_guest, event)

    async def update_guest(self, guest_id: UUID, changes: GuestChangesDTO) -> GuestDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest, event = await self._get_guest_with_event(session, guest_id)

            if changes.name is not None:
                guest.name = changes.name
            if changes.email is not None:
                guest.email = changes.email
            if changes.phone is not None:
                guest.phone = changes.phone
            if changes.status is not None:
                guest.status = changes.status
            if changes.response is not None:
                guest.response = changes.response
                guest.responded_at = datetime.now(UTC)

            await session.flush()
            await session.refresh(guest)
            return GuestDTO.from_guest(guest, event)

    async def delete_guest(self, guest_id: UUID) -> GuestDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest, event = await self._get_guest_with_event(session, guest_id)
            deleted = GuestDTO.from_guest(guest, event)
            await session.delete(guest)
            await session.flush()
            return deleted

    @staticmethod
    async def _get_guest_with_event(session, guest_id: UUID) -> tuple[Guest, Event]:
        row = (
            await session.execute(
                select(Guest, Event).join(Event, Guest.event_id == Event.uuid).where(Guest.uuid == guest_id)
            )
        ).one_or_none()
        if row is None:
            raise GuestNotFoundError()
        return row[0], row[1]
