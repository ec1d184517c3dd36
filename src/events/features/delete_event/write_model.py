from abc import ABC, abstractmethod
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dtos import SessionUser
from src.config.database import async_session_manager
from src.events.access import ensure_can_manage_event
from src.events.dtos import EventDTO, EventNotFoundError
from src.events.repository.orm_models import Event


class EventDeleteWriteModel(ABC):
    @abstractmethod
    async def trash_event(self, event_id: UUID, user: SessionUser) -> EventDTO:
        """Soft delete: the event and its guests stay stored but are hidden."""
        raise NotImplementedError


class SqlEventDeleteWriteModel(EventDeleteWriteModel):
    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def trash_event(self, event_id: UUID, user: SessionUser) -> EventDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await session.get(Event, event_id)
            if event is None or event.is_trashed:
                raise EventNotFoundError(event_id)
            ensure_can_manage_event(user, event.created_by_user_id, "delete")

            event.is_trashed = True
            await session.flush()
            await session.refresh(event)
            return EventDTO.from_event(event)
