import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.auth.dependencies import get_session_refresher, get_token_user
from src.auth.dtos import SessionUser, UserNotFoundError
from src.auth.features.signin.router import SessionUserResponse
from src.auth.security import create_access_token
from src.auth.session_cache import SessionRefresher
from src.auth.urls import REFRESH_SESSION_URL

logger = logging.getLogger(__name__)

router = APIRouter()


class RefreshSessionRequest(BaseModel):
    force: bool = False


class RefreshSessionResponse(BaseModel):
    success: bool = True
    message: str
    from_cache: bool
    user: SessionUserResponse
    # Only set when the claims were re-read and a new token was issued
    access_token: str | None = None


@router.post(REFRESH_SESSION_URL, response_model=RefreshSessionResponse)
async def refresh_session(
    request: RefreshSessionRequest | None = None,
    token_user: SessionUser | None = Depends(get_token_user),
    refresher: SessionRefresher = Depends(get_session_refresher),
) -> RefreshSessionResponse:
    """
    Refresh the role and status carried by the session token.

    Claims fetched less than five minutes ago are returned as they are unless
    ``force`` is set.
    """
    if token_user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")

    force = request.force if request else False
    try:
        user, from_cache = await refresher.refresh(token_user, force=force)
    except UserNotFoundError as e:
        logger.info("User %s not found or inactive during session refresh", token_user.id)
        raise HTTPException(status_code=404, detail=str(e))

    if from_cache:
        return RefreshSessionResponse(
            message="Session data from cache",
            from_cache=True,
            user=SessionUserResponse.from_session_user(user),
        )

    return RefreshSessionResponse(
        message="Session force refreshed successfully" if force else "Session refreshed successfully",
        from_cache=False,
        user=SessionUserResponse.from_session_user(user),
        access_token=create_access_token(user),
    )
