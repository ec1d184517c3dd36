from abc import ABC, abstractmethod
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dtos import InvalidCredentialsError, UserNotFoundError
from src.auth.security import hash_password, verify_password
from src.config.database import async_session_manager
from src.models.user import User


class ChangePasswordWriteModel(ABC):
    @abstractmethod
    async def change_password(self, user_id: UUID, current_password: str, new_password: str) -> None:
        """
        Replace the password after checking the current one.
        Raises UserNotFoundError or InvalidCredentialsError.
        """
        raise NotImplementedError


class SqlChangePasswordWriteModel(ChangePasswordWriteModel):
    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def change_password(self, user_id: UUID, current_password: str, new_password: str) -> None:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            user = (
                await session.execute(select(User).where(User.uuid == user_id).where(User.is_trashed.is_(False)))
            ).scalar_one_or_none()
            if user is None or not user.hashed_password:
                raise UserNotFoundError("User not found or password not set.")
            if not verify_password(current_password, user.hashed_password):
                raise InvalidCredentialsError()

            user.hashed_password = hash_password(new_password)
            await session.flush()
