from abc import ABC, abstractmethod
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dtos import (
    AccountNotActiveError,
    InvalidCredentialsError,
    SessionUser,
    UserNotFoundError,
    UserStatus,
)
from src.auth.security import verify_password
from src.config.database import async_session_manager
from src.models.user import User, UserRole


class SigninWriteModel(ABC):
    @abstractmethod
    async def authenticate(self, email: str, password: str, now: float) -> SessionUser:
        """Check credentials and record the sign-in. Returns the session claims."""
        raise NotImplementedError


class SqlSigninWriteModel(SigninWriteModel):
    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def authenticate(self, email: str, password: str, now: float) -> SessionUser:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            stmt = (
                select(User, UserRole)
                .outerjoin(UserRole, User.role_id == UserRole.uuid)
                .where(User.email == email)
                .where(User.is_trashed.is_(False))
            )
            row = (await session.execute(stmt)).one_or_none()
            if row is None:
                raise UserNotFoundError()

            user, role = row
            if not verify_password(password, user.hashed_password):
                raise InvalidCredentialsError()
            if user.status != UserStatus.ACTIVE:
                raise AccountNotActiveError()

            user.last_sign_in_at = datetime.now(UTC)
            await session.flush()

            return SessionUser(
                id=user.uuid,
                email=user.email,
                name=user.name or "Anonymous",
                status=user.status,
                role_id=user.role_id,
                role_slug=role.slug if role else None,
                role_name=role.name if role else None,
                last_fetch=now,
            )
