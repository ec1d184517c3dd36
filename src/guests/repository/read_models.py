import abc
import logging
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import DBAPIError

from src.config.database import async_session_manager
from src.events.dtos import EventDTO, EventOwnerDTO
from src.events.repository.orm_models import Event
from src.guests.dtos import GuestDTO, GuestStatus, InvitationDTO
from src.guests.repository.orm_models import Guest
from src.models.search import LIKE_ESCAPE, contains_pattern
from src.models.user import User
from src.responses import is_missing_relation_error

logger = logging.getLogger(__name__)


class GuestReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_guests(
        self,
        event_id: UUID | None = None,
        status: GuestStatus | None = None,
        search: str | None = None,
    ) -> list[GuestDTO]:
        raise NotImplementedError

    @abc.abstractmethod
    async def get_guest(self, guest_id: UUID) -> GuestDTO | None:
        raise NotImplementedError


class AttendeeReadModel(abc.ABC):
    """Invitations seen from the invited person's side, matched by email."""

    @abc.abstractmethod
    async def list_invitations(
        self,
        email: str,
        event_id: UUID | None = None,
        status: GuestStatus | None = None,
    ) -> list[GuestDTO]:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_invited_events(
        self,
        email: str,
        event_id: UUID | None = None,
        status: GuestStatus | None = None,
    ) -> list[EventDTO]:
        """
        Get the non-trashed events ``email`` is invited to.
        Each event carries only the caller's own guest record.
        """
        raise NotImplementedError


class PublicInvitationReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_invitation(self, guest_id: UUID) -> InvitationDTO | None:
        raise NotImplementedError


def _newest_invitation_first():
    return (Guest.invited_at.desc().nulls_last(), Guest.created_at.desc())


class SqlGuestReadModel(GuestReadModel):
    async def list_guests(
        self,
        event_id: UUID | None = None,
        status: GuestStatus | None = None,
        search: str | None = None,
    ) -> list[GuestDTO]:
        stmt = select(Guest, Event).join(Event, Guest.event_id == Event.uuid)
        if event_id:
            stmt = stmt.where(Guest.event_id == event_id)
        if status:
            stmt = stmt.where(Guest.status == status)
        if search:
            pattern = contains_pattern(search)
            stmt = stmt.where(
                or_(
                    Guest.name.ilike(pattern, escape=LIKE_ESCAPE),
                    Guest.email.ilike(pattern, escape=LIKE_ESCAPE),
                    Guest.phone.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        stmt = stmt.order_by(*_newest_invitation_first())

        try:
            async with async_session_manager() as session:
                rows = (await session.execute(stmt)).all()
        except DBAPIError as e:
            if is_missing_relation_error(e):
                logger.warning("Guests table is missing, returning no guests: %s", e.orig)
                return []
            raise

        return [GuestDTO.from_guest(guest, event) for guest, event in rows]

    async def get_guest(self, guest_id: UUID) -> GuestDTO | None:
        async with async_session_manager() as session:
            row = (
                await session.execute(
                    select(Guest, Event)
                    .join(Event, Guest.event_id == Event.uuid)
                    .where(Guest.uuid == guest_id)
                )
            ).one_or_none()

        if row is None:
            return None
        guest, event = row
        return GuestDTO.from_guest(guest, event)


class SqlAttendeeReadModel(AttendeeReadModel):
    @staticmethod
    def _invitations_stmt(email: str, event_id: UUID | None, status: GuestStatus | None):
        stmt = select(Guest, Event).join(Event, Guest.event_id == Event.uuid).where(Guest.email == email)
        if event_id:
            stmt = stmt.where(Guest.event_id == event_id)
        if status:
            stmt = stmt.where(Guest.status == status)
        return stmt.order_by(*_newest_invitation_first())

    async def list_invitations(
        self,
        email: str,
        event_id: UUID | None = None,
        status: GuestStatus | None = None,
    ) -> list[GuestDTO]:
        try:
            async with async_session_manager() as session:
                rows = (await session.execute(self._invitations_stmt(email, event_id, status))).all()
        except DBAPIError as e:
            if is_missing_relation_error(e):
                logger.warning("Guests table is missing, returning no invitations: %s", e.orig)
                return []
            raise

        return [GuestDTO.from_guest(guest, event) for guest, event in rows]

    async def list_invited_events(
        self,
        email: str,
        event_id: UUID | None = None,
        status: GuestStatus | None = None,
    ) -> list[EventDTO]:
        stmt = (
            self._invitations_stmt(email, event_id, status)
            .add_columns(User)
            .outerjoin(User, Event.created_by_user_id == User.uuid)
            .where(Event.is_trashed.is_(False))
        )
        try:
            async with async_session_manager() as session:
                rows = (await session.execute(stmt)).all()
        except DBAPIError as e:
            if is_missing_relation_error(e):
                logger.warning("Events table is missing, returning no invited events: %s", e.orig)
                return []
            raise

        events = []
        for guest, event, owner in rows:
            owner_dto = EventOwnerDTO(id=owner.uuid, email=owner.email, name=owner.name) if owner else None
            events.append(EventDTO.from_event(event, guests=[guest], owner=owner_dto))
        return events


class SqlPublicInvitationReadModel(PublicInvitationReadModel):
    async def get_invitation(self, guest_id: UUID) -> InvitationDTO | None:
        async with async_session_manager() as session:
            row = (
                await session.execute(
                    select(Guest, Event, User)
                    .outerjoin(Event, Guest.event_id == Event.uuid)
                    .outerjoin(User, Event.created_by_user_id == User.uuid)
                    .where(Guest.uuid == guest_id)
                )
            ).one_or_none()

        if row is None:
            return None

        guest, event, host = row
        if event is None:
            return InvitationDTO(guest=GuestDTO.from_guest(guest), event_exists=False)

        return InvitationDTO(
            guest=GuestDTO.from_guest(guest, event),
            event_title=event.title,
            event_status=event.status.value,
            event_is_trashed=event.is_trashed,
            host_name=host.name if host else None,
            host_email=host.email if host else None,
        )
