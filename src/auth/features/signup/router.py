from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr, Field

from src.auth.dtos import EmailAlreadyRegisteredError, NoDefaultRoleError
from src.auth.features.signup.write_model import SignupWriteModel, SqlSignupWriteModel
from src.auth.urls import SIGNUP_URL
from src.email_service import get_email_service
from src.responses import MessageResponse

router = APIRouter()


class SignupRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)
    name: str = Field(min_length=1, max_length=255)
    is_host: bool = False
    callback_url: str | None = None


def get_signup_write_model() -> SignupWriteModel:
    """Dependency to get signup write model instance."""
    return SqlSignupWriteModel(email_service=get_email_service())


@router.post(SIGNUP_URL, response_model=MessageResponse)
async def signup(
    request: SignupRequest,
    write_model: SignupWriteModel = Depends(get_signup_write_model),
) -> MessageResponse:
    """
    Register a new account.

    The account stays inactive until the emailed verification link is opened.
    Signing up again with an inactive email re-sends the link.
    """
    try:
        result = await write_model.signup(
            email=request.email,
            password=request.password,
            name=request.name,
            is_host=request.is_host,
            callback_url=request.callback_url,
        )
    except EmailAlreadyRegisteredError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except NoDefaultRoleError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return MessageResponse(message=result.message)
