import abc
from uuid import UUID

from sqlalchemy import select

from src.auth.dtos import SessionUser, UserStatus
from src.config.database import async_session_manager
from src.models.user import User, UserRole


class UserReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_active_session_user(self, user_id: UUID, last_fetch: float) -> SessionUser | None:
        """
        Get the session claims of an active, non-trashed user.
        Returns None when the user is gone, trashed or inactive.
        """
        raise NotImplementedError


class SqlUserReadModel(UserReadModel):
    async def get_active_session_user(self, user_id: UUID, last_fetch: float) -> SessionUser | None:
        async with async_session_manager() as session:
            stmt = (
                select(User, UserRole)
                .outerjoin(UserRole, User.role_id == UserRole.uuid)
                .where(User.uuid == user_id)
                .where(User.is_trashed.is_(False))
                .where(User.status == UserStatus.ACTIVE)
            )
            row = (await session.execute(stmt)).one_or_none()
            if row is None:
                return None

            user, role = row
            return SessionUser(
                id=user.uuid,
                email=user.email,
                name=user.name or "Anonymous",
                status=user.status,
                role_id=user.role_id,
                role_slug=role.slug if role else None,
                role_name=role.name if role else None,
                last_fetch=last_fetch,
            )
