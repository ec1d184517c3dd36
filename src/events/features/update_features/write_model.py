from abc import ABC, abstractmethod
from dataclasses import asdict
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dtos import SessionUser
from src.config.database import async_session_manager
from src.events.access import ensure_can_manage_event
from src.events.dtos import EventFeaturesDTO, EventNotFoundError
from src.events.repository.orm_models import Event


class EventFeaturesWriteModel(ABC):
    @abstractmethod
    async def update_features(
        self,
        event_id: UUID,
        user: SessionUser,
        features: EventFeaturesDTO,
    ) -> EventFeaturesDTO:
        raise NotImplementedError


class SqlEventFeaturesWriteModel(EventFeaturesWriteModel):
    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def update_features(
        self,
        event_id: UUID,
        user: SessionUser,
        features: EventFeaturesDTO,
    ) -> EventFeaturesDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await session.get(Event, event_id)
            if event is None:
                raise EventNotFoundError(event_id)
            ensure_can_manage_event(user, event.created_by_user_id, "update")

            for name, value in asdict(features).items():
                setattr(event, name, value)
            await session.flush()
            return EventFeaturesDTO.from_event(event)
