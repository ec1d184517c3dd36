import logging

from fastapi import Depends, HTTPException, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.auth.dtos import ROLE_DISPLAY_NAMES, InvalidTokenError, RoleSlug, SessionUser, UserNotFoundError
from src.auth.repository.read_models import SqlUserReadModel, UserReadModel
from src.auth.security import create_access_token, decode_access_token
from src.auth.session_cache import SessionRefresher

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

# Carries a re-issued session token after the claims were re-read from the database
SESSION_TOKEN_HEADER = "X-Session-Token"


def get_user_read_model() -> UserReadModel:
    """Dependency to get user read model instance."""
    return SqlUserReadModel()


def get_session_refresher(
    read_model: UserReadModel = Depends(get_user_read_model),
) -> SessionRefresher:
    return SessionRefresher(read_model=read_model)


def get_token_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> SessionUser | None:
    """Decode the bearer token without touching the database."""
    if credentials is None:
        return None
    try:
        return decode_access_token(credentials.credentials)
    except InvalidTokenError as e:
        logger.info("Rejected session token: %s", e)
        raise HTTPException(status_code=401, detail="Unauthorized")


async def get_optional_user(
    response: Response,
    token_user: SessionUser | None = Depends(get_token_user),
    refresher: SessionRefresher = Depends(get_session_refresher),
) -> SessionUser | None:
    """
    The signed-in user, or None for visitors.

    A session whose account was deactivated since the token was issued counts
    as a visitor; endpoints that need a user answer 401 through get_current_user.
    """
    if token_user is None:
        return None
    try:
        user, from_cache = await refresher.refresh(token_user)
    except UserNotFoundError:
        logger.info("Session of user %s is no longer active", token_user.id)
        return None
    if not from_cache:
        response.headers[SESSION_TOKEN_HEADER] = create_access_token(user)
    return user


async def get_current_user(
    user: SessionUser | None = Depends(get_optional_user),
) -> SessionUser:
    if user is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


def require_roles(allowed_roles: tuple[RoleSlug, ...], operation: str = "access this resource"):
    """Build a dependency that lets only ``allowed_roles`` through."""

    async def dependency(user: SessionUser = Depends(get_current_user)) -> SessionUser:
        if not user.has_role(allowed_roles):
            role_names = ", ".join(ROLE_DISPLAY_NAMES[role] for role in allowed_roles)
            raise HTTPException(
                status_code=403,
                detail=f"Forbidden: Only {role_names} can {operation}",
            )
        return user

    return dependency
