from fastapi import APIRouter, Depends, HTTPException

from src.auth.dtos import InvalidTokenError, UserNotFoundError
from src.auth.features.verify_email.write_model import (
    SqlVerifyEmailWriteModel,
    VerifyEmailWriteModel,
)
from src.auth.urls import VERIFY_EMAIL_URL
from src.responses import MessageResponse

router = APIRouter()


def get_verify_email_write_model() -> VerifyEmailWriteModel:
    return SqlVerifyEmailWriteModel()


@router.get(VERIFY_EMAIL_URL, response_model=MessageResponse)
async def verify_email(
    token: str,
    write_model: VerifyEmailWriteModel = Depends(get_verify_email_write_model),
) -> MessageResponse:
    try:
        await write_model.verify_email(token)
    except InvalidTokenError:
        raise HTTPException(status_code=400, detail="Invalid or expired verification link")
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return MessageResponse(message="Email verified. Your account is now active.")
