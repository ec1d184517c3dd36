import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.auth.dependencies import get_current_user
from src.auth.dtos import InvalidCredentialsError, SessionUser, UserNotFoundError
from src.auth.features.change_password.write_model import (
    ChangePasswordWriteModel,
    SqlChangePasswordWriteModel,
)
from src.auth.urls import CHANGE_PASSWORD_URL
from src.responses import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()

MIN_PASSWORD_LENGTH = 8


class ChangePasswordRequest(BaseModel):
    current_password: str = ""
    new_password: str = ""
    confirm_password: str = ""


def get_change_password_write_model() -> ChangePasswordWriteModel:
    return SqlChangePasswordWriteModel()


@router.post(CHANGE_PASSWORD_URL, response_model=MessageResponse)
async def change_password(
    user_id: UUID,
    request: ChangePasswordRequest,
    write_model: ChangePasswordWriteModel = Depends(get_change_password_write_model),
    user: SessionUser = Depends(get_current_user),
) -> MessageResponse:
    if user_id != user.id:
        raise HTTPException(status_code=403, detail="You can only change your own password.")
    if not request.current_password or not request.new_password or not request.confirm_password:
        raise HTTPException(status_code=400, detail="All password fields are required.")
    if request.new_password != request.confirm_password:
        raise HTTPException(status_code=400, detail="New password and confirmation do not match.")
    if len(request.new_password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.",
        )

    try:
        await write_model.change_password(user_id, request.current_password, request.new_password)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidCredentialsError:
        raise HTTPException(status_code=401, detail="Current password is incorrect.")

    logger.info("Password changed for user %s", user_id)
    return MessageResponse(message="Password changed successfully.")
