"""Write model for an attendee answering their invitation."""

from abc import ABC, abstractmethod
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.events.repository.orm_models import Event
from src.guests.dtos import GuestDTO, GuestNotFoundError, GuestStatus, RSVPRequestDTO
from src.guests.repository.orm_models import Guest
from src.guests.rsvp_policy import EventPolicy, RSVPUpdate, party_size, validate_rsvp_update


class RSVPWriteModel(ABC):
    @abstractmethod
    async def submit_rsvp(self, email: str, event_id: UUID, rsvp: RSVPRequestDTO) -> GuestDTO:
        """
        Apply an RSVP to the guest record of ``email`` for ``event_id``.
        Raises GuestNotFoundError or RSVPPolicyViolation.
        """
        raise NotImplementedError


def policy_from_event(event: Event) -> EventPolicy:
    return EventPolicy(
        allow_plus_ones=event.allow_plus_ones,
        max_plus_ones=event.max_plus_ones,
        allow_maybe_rsvp=event.allow_maybe_rsvp,
        allow_family_headcount=event.allow_family_headcount,
        limit_event_capacity=event.limit_event_capacity,
        max_event_capacity=event.max_event_capacity,
    )


class SqlRSVPWriteModel(RSVPWriteModel):
    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def submit_rsvp(self, email: str, event_id: UUID, rsvp: RSVPRequestDTO) -> GuestDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            # Lock the event row so concurrent confirmations see each other's seats
            event = (
                await session.execute(select(Event).where(Event.uuid == event_id).with_for_update())
            ).scalar_one_or_none()
            guest = None
            if event is not None:
                guest = (
                    await session.execute(
                        select(Guest)
                        .where(Guest.email == email)
                        .where(Guest.event_id == event_id)
                        .order_by(Guest.created_at)
                    )
                ).scalars().first()
            if guest is None:
                raise GuestNotFoundError("Guest record not found")

            policy = policy_from_event(event)
            update = RSVPUpdate(
                status=rsvp.status,
                response=rsvp.response,
                plus_ones=guest.plus_ones if rsvp.plus_ones is None else rsvp.plus_ones,
                adults=guest.adults if rsvp.adults is None else rsvp.adults,
                children=guest.children if rsvp.children is None else rsvp.children,
            )
            confirmed_headcount = 0
            if update.status == GuestStatus.CONFIRMED and policy.limit_event_capacity:
                confirmed_headcount = await self._confirmed_headcount(session, event, exclude_guest_id=guest.uuid)

            validate_rsvp_update(update, policy, confirmed_headcount=confirmed_headcount)

            guest.name = rsvp.name or guest.name
            guest.phone = rsvp.phone or guest.phone
            guest.status = update.status
            guest.response = update.response
            guest.plus_ones = update.plus_ones
            guest.adults = update.adults
            guest.children = update.children
            guest.responded_at = datetime.now(UTC)

            await session.flush()
            return GuestDTO.from_guest(guest, event)

    @staticmethod
    async def _confirmed_headcount(session, event: Event, exclude_guest_id: UUID) -> int:
        """Seats taken by the confirmed guests of ``event`` other than ``exclude_guest_id``."""
        rows = (
            await session.execute(
                select(Guest.plus_ones, Guest.adults, Guest.children)
                .where(Guest.event_id == event.uuid)
                .where(Guest.status == GuestStatus.CONFIRMED)
                .where(Guest.uuid != exclude_guest_id)
            )
        ).all()
        policy = policy_from_event(event)
        return sum(
            party_size(
                RSVPUpdate(
                    status=GuestStatus.CONFIRMED,
                    plus_ones=plus_ones,
                    adults=adults,
                    children=children,
                ),
                policy,
            )
            for plus_ones, adults, children in rows
        )
