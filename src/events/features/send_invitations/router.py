from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.auth.dependencies import require_roles
from src.auth.dtos import RoleGroups, SessionUser
from src.email_service import get_email_service
from src.events.dtos import EventNotFoundError, EventPermissionError, InvitationKind
from src.events.features.send_invitations.write_model import (
    SendInvitationsWriteModel,
    SqlSendInvitationsWriteModel,
)
from src.events.schemas import InvitationResultOut, SendInvitationsSummaryOut
from src.events.urls import SEND_INVITATIONS_URL

router = APIRouter()


class SendInvitationsRequest(BaseModel):
    guest_ids: list[UUID] | None = None
    type: InvitationKind = InvitationKind.INVITATION


class SendInvitationsResponse(BaseModel):
    success: bool = True
    message: str
    results: list[InvitationResultOut]
    summary: SendInvitationsSummaryOut


def get_send_invitations_write_model() -> SendInvitationsWriteModel:
    return SqlSendInvitationsWriteModel(email_service=get_email_service())


@router.post(SEND_INVITATIONS_URL, response_model=SendInvitationsResponse)
async def send_invitations(
    event_id: UUID,
    request: SendInvitationsRequest | None = None,
    write_model: SendInvitationsWriteModel = Depends(get_send_invitations_write_model),
    user: SessionUser = Depends(require_roles(RoleGroups.EVENT_MANAGERS, "send invitations")),
) -> SendInvitationsResponse:
    """Send invitations or reminders and report the outcome per guest."""
    request = request or SendInvitationsRequest()
    try:
        outcome = await write_model.send_invitations(
            event_id,
            user,
            guest_ids=request.guest_ids,
            kind=request.type,
        )
    except EventNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except EventPermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

    return SendInvitationsResponse(
        message=outcome.message,
        results=[InvitationResultOut.model_validate(result) for result in outcome.results],
        summary=SendInvitationsSummaryOut.model_validate(outcome.summary),
    )
