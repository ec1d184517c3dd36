import time

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.auth.dtos import (
    AccountNotActiveError,
    InvalidCredentialsError,
    SessionUser,
    UserNotFoundError,
)
from src.auth.features.signin.write_model import SigninWriteModel, SqlSigninWriteModel
from src.auth.security import create_access_token
from src.auth.urls import SIGNIN_URL

router = APIRouter()


class SigninRequest(BaseModel):
    email: str = ""
    password: str = ""


class SessionUserResponse(BaseModel):
    id: str
    email: str
    name: str
    status: str
    role_id: str | None = None
    role_slug: str | None = None
    role_name: str | None = None
    last_fetch: float

    @classmethod
    def from_session_user(cls, user: SessionUser) -> "SessionUserResponse":
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            status=user.status.value,
            role_id=str(user.role_id) if user.role_id else None,
            role_slug=user.role_slug,
            role_name=user.role_name,
            last_fetch=user.last_fetch,
        )


class SigninData(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: SessionUserResponse


class SigninResponse(BaseModel):
    success: bool = True
    data: SigninData


def get_signin_write_model() -> SigninWriteModel:
    return SqlSigninWriteModel()


@router.post(SIGNIN_URL, response_model=SigninResponse)
async def signin(
    credentials: SigninRequest,
    write_model: SigninWriteModel = Depends(get_signin_write_model),
) -> SigninResponse:
    """Exchange email and password for a bearer token."""
    if not credentials.email or not credentials.password:
        raise HTTPException(status_code=400, detail="Please enter both email and password.")

    try:
        user = await write_model.authenticate(
            email=credentials.email,
            password=credentials.password,
            now=time.time(),
        )
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except AccountNotActiveError as e:
        raise HTTPException(status_code=403, detail=str(e))

    return SigninResponse(
        data=SigninData(
            access_token=create_access_token(user),
            user=SessionUserResponse.from_session_user(user),
        )
    )
