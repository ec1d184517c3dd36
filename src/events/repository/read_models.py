import abc
import logging
from collections import defaultdict
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import DBAPIError

from src.config.database import async_session_manager
from src.events.dtos import EventDTO, EventOwnerDTO, EventStatus
from src.events.repository.orm_models import Event
from src.guests.repository.orm_models import Guest
from src.models.search import LIKE_ESCAPE, contains_pattern
from src.models.user import User
from src.responses import is_missing_relation_error

logger = logging.getLogger(__name__)


class EventReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_events(
        self,
        status: EventStatus | None = None,
        search: str | None = None,
        created_by_user_id: UUID | None = None,
    ) -> list[EventDTO]:
        """
        Get non-trashed events, newest first.
        Each event carries a summary of its guests and its owner.
        """
        raise NotImplementedError

    @abc.abstractmethod
    async def get_event(self, event_id: UUID) -> EventDTO | None:
        raise NotImplementedError


def owner_dto(user: User | None) -> EventOwnerDTO | None:
    if user is None:
        return None
    return EventOwnerDTO(id=user.uuid, email=user.email, name=user.name)


class SqlEventReadModel(EventReadModel):
    async def list_events(
        self,
        status: EventStatus | None = None,
        search: str | None = None,
        created_by_user_id: UUID | None = None,
    ) -> list[EventDTO]:
        stmt = (
            select(Event, User)
            .outerjoin(User, Event.created_by_user_id == User.uuid)
            .where(Event.is_trashed.is_(False))
        )
        if status:
            stmt = stmt.where(Event.status == status)
        if created_by_user_id:
            stmt = stmt.where(Event.created_by_user_id == created_by_user_id)
        if search:
            pattern = contains_pattern(search)
            stmt = stmt.where(
                or_(
                    Event.title.ilike(pattern, escape=LIKE_ESCAPE),
                    Event.description.ilike(pattern, escape=LIKE_ESCAPE),
                    Event.location_address.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        stmt = stmt.order_by(Event.created_at.desc())

        try:
            async with async_session_manager() as session:
                rows = (await session.execute(stmt)).all()
                event_ids = [event.uuid for event, _ in rows]
                guests_by_event = defaultdict(list)
                if event_ids:
                    guests = (
                        await session.execute(
                            select(Guest).where(Guest.event_id.in_(event_ids)).order_by(Guest.created_at)
                        )
                    ).scalars()
                    for guest in guests:
                        guests_by_event[guest.event_id].append(guest)
        except DBAPIError as e:
            if is_missing_relation_error(e):
                logger.warning("Events table is missing, returning no events: %s", e.orig)
                return []
            raise

        return [
            EventDTO.from_event(event, guests=guests_by_event[event.uuid], owner=owner_dto(owner))
            for event, owner in rows
        ]

    async def get_event(self, event_id: UUID) -> EventDTO | None:
        try:
            async with async_session_manager() as session:
                row = (
                    await session.execute(
                        select(Event, User)
                        .outerjoin(User, Event.created_by_user_id == User.uuid)
                        .where(Event.uuid == event_id)
                    )
                ).one_or_none()
                if row is None:
                    return None
                guests = (
                    await session.execute(
                        select(Guest).where(Guest.event_id == event_id).order_by(Guest.created_at)
                    )
                ).scalars().all()
        except DBAPIError as e:
            if is_missing_relation_error(e):
                logger.warning("Events table is missing, event %s not found: %s", event_id, e.orig)
                return None
            raise

        event, owner = row
        return EventDTO.from_event(event, guests=guests, owner=owner_dto(owner))
