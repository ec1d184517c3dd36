from abc import ABC, abstractmethod
from datetime import UTC, datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dtos import UserNotFoundError, UserStatus
from src.auth.security import decode_verification_token
from src.config.database import async_session_manager
from src.models.user import User


class VerifyEmailWriteModel(ABC):
    @abstractmethod
    async def verify_email(self, token: str) -> str:
        """Activate the account the token was issued for. Returns the account email."""
        raise NotImplementedError


class SqlVerifyEmailWriteModel(VerifyEmailWriteModel):
    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def verify_email(self, token: str) -> str:
        user_id = decode_verification_token(token)

        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            user = (
                await session.execute(
                    select(User).where(User.uuid == user_id).where(User.is_trashed.is_(False))
                )
            ).scalar_one_or_none()
            if user is None:
                raise UserNotFoundError()

            user.status = UserStatus.ACTIVE
            if user.email_verified_at is None:
                user.email_verified_at = datetime.now(UTC)
            await session.flush()
            return user.email
