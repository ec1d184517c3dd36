"""Sends invitations, or reminders, to the guests of one event."""

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
from src.events.dtos import (
    EventNotFoundError,
    InvitationKind,
    SendInvitationsResultDTO,
    SendInvitationsSummaryDTO,
)
from src.events.invitations import InvitationSender
from src.events.repository.orm_models import Event
from src.guests.dtos import GuestStatus
from src.guests.repository.orm_models import Guest
from src.models.user import User

logger = logging.getLogger(__name__)

# Guests a reminder still makes sense for
AWAITING_ANSWER = (GuestStatus.PENDING, GuestStatus.INVITED)


class SendInvitationsWriteModel(ABC):
    @abstractmethod
    async def send_invitations(
        self,
        event_id: UUID,
        user: SessionUser,
        guest_ids: list[UUID] | None = None,
        kind: InvitationKind = InvitationKind.INVITATION,
    ) -> SendInvitationsResultDTO:
        """
        Without ``guest_ids`` invitations go to every guest never invited and
        reminders to invited guests who have not answered yet.
        """
        raise NotImplementedError


class SqlSendInvitationsWriteModel(SendInvitationsWriteModel):
    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        email_service: EmailServiceBase | None = None,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.invitation_sender = InvitationSender(email_service)

    async def send_invitations(
        self,
        event_id: UUID,
        user: SessionUser,
        guest_ids: list[UUID] | None = None,
        kind: InvitationKind = InvitationKind.INVITATION,
    ) -> SendInvitationsResultDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await session.get(Event, event_id)
            if event is None or event.is_trashed:
                raise EventNotFoundError(event_id)
            ensure_can_manage_event(user, event.created_by_user_id, "send invitations for")

            stmt = select(Guest).where(Guest.event_id == event_id).order_by(Guest.created_at)
            if guest_ids:
                stmt = stmt.where(Guest.uuid.in_(guest_ids))
            elif kind == InvitationKind.INVITATION:
                stmt = stmt.where(Guest.invited_at.is_(None))
            else:
                stmt = stmt.where(Guest.invited_at.is_not(None)).where(Guest.status.in_(AWAITING_ANSWER))
            guests = list((await session.execute(stmt)).scalars())

            if not guests:
                return SendInvitationsResultDTO(
                    message="No guests found to send invitations to",
                    results=[],
                    summary=SendInvitationsSummaryDTO(total=0, successful=0, failed=0),
                )

            host = await session.get(User, event.created_by_user_id)
            host_name = host.name if host else None

            results = []
            for guest in guests:
                result = await self.invitation_sender.send(event, guest, host_name=host_name)
                if result.success:
                    guest.invited_at = datetime.now(UTC)
                    if guest.status == GuestStatus.PENDING:
                        guest.status = GuestStatus.INVITED
                results.append(result)
            await session.flush()

        successful = sum(1 for result in results if result.success)
        failed = len(results) - successful
        message = f"Sent {kind.value}s to {successful} guests"
        if failed:
            message += f", {failed} failed"
            logger.warning("Failed to send %s %ss for event %s", failed, kind.value, event_id)

        return SendInvitationsResultDTO(
            message=message,
            results=results,
            summary=SendInvitationsSummaryDTO(total=len(guests), successful=successful, failed=failed),
        )
