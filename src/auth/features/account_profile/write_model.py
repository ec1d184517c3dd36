from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dtos import UserNotFoundError, UserProfileDTO
from src.config.database import async_session_manager
from src.models.user import User, UserRole


class AccountProfileWriteModel(ABC):
    @abstractmethod
    async def get_profile(self, user_id: UUID) -> UserProfileDTO:
        raise NotImplementedError

    @abstractmethod
    async def update_profile(self, user_id: UUID, changes: dict[str, Any]) -> UserProfileDTO:
        """
        Apply ``changes`` (name, timezone, avatar) to a non-trashed user.
        Raises UserNotFoundError when there is no such account.
        """
        raise NotImplementedError


class SqlAccountProfileWriteModel(AccountProfileWriteModel):
    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def get_profile(self, user_id: UUID) -> UserProfileDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            user = await self._get_user(session, user_id)
            return await self._to_profile(session, user)

    async def update_profile(self, user_id: UUID, changes: dict[str, Any]) -> UserProfileDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            user = await self._get_user(session, user_id)
            for name, value in changes.items():
                setattr(user, name, value)
            await session.flush()
            return await self._to_profile(session, user)

    @staticmethod
    async def _get_user(session, user_id: UUID) -> User:
        user = (
            await session.execute(select(User).where(User.uuid == user_id).where(User.is_trashed.is_(False)))
        ).scalar_one_or_none()
        if user is None:
            raise UserNotFoundError("User account not found.")
        return user

    @staticmethod
    async def _to_profile(session, user: User) -> UserProfileDTO:
        role = await session.get(UserRole, user.role_id) if user.role_id else None
        return UserProfileDTO(
            id=user.uuid,
            email=user.email,
            name=user.name,
            avatar=user.avatar,
            timezone=user.timezone,
            status=user.status,
            role_slug=role.slug if role else None,
            email_verified_at=user.email_verified_at,
            last_sign_in_at=user.last_sign_in_at,
        )
