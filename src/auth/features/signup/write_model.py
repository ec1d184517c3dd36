"""Write model for account sign-up.

New accounts start INACTIVE and are activated through the emailed
verification link.
"""

import logging
from abc import ABC, abstractmethod
from urllib.parse import quote

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dtos import (
    EmailAlreadyRegisteredError,
    NoDefaultRoleError,
    RoleSlug,
    SignupResultDTO,
    UserStatus,
)
from src.auth.security import create_verification_token, hash_password
from src.config.database import async_session_manager
from src.config.settings import settings
from src.email_service.base import EmailServiceBase
from src.models.user import User, UserRole

logger = logging.getLogger(__name__)

DEFAULT_CALLBACK_URL = "/templates"


class SignupWriteModel(ABC):
    @abstractmethod
    async def signup(
        self,
        email: str,
        password: str,
        name: str,
        is_host: bool = False,
        callback_url: str | None = None,
    ) -> SignupResultDTO:
        raise NotImplementedError


class SqlSignupWriteModel(SignupWriteModel):
    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        email_service: EmailServiceBase | None = None,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.email_service = email_service

    async def signup(
        self,
        email: str,
        password: str,
        name: str,
        is_host: bool = False,
        callback_url: str | None = None,
    ) -> SignupResultDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            existing_user = (
                await session.execute(select(User).where(User.email == email))
            ).scalar_one_or_none()

            if existing_user is not None:
                if existing_user.status == UserStatus.INACTIVE:
                    await self._send_verification_email(existing_user, callback_url)
                    return SignupResultDTO(
                        message="Verification email resent. Please check your email.",
                        verification_resent=True,
                    )
                raise EmailAlreadyRegisteredError(email)

            role = await self._pick_role(session, is_host)

            user = User(
                email=email,
                name=name,
                hashed_password=hash_password(password),
                status=UserStatus.INACTIVE,
                role_id=role.uuid,
            )
            session.add(user)
            await session.flush()

            await self._send_verification_email(user, callback_url)

        return SignupResultDTO(
            message="Registration successful. Check your email to verify your account.",
        )

    async def _pick_role(self, session, is_host: bool) -> UserRole:
        role = None
        if is_host:
            role = (
                await session.execute(select(UserRole).where(UserRole.slug == RoleSlug.HOST.value))
            ).scalar_one_or_none()
        if role is None:
            role = (
                await session.execute(select(UserRole).where(UserRole.is_default.is_(True)))
            ).scalars().first()
        if role is None:
            raise NoDefaultRoleError()
        return role

    async def _send_verification_email(self, user: User, callback_url: str | None) -> None:
        if not self.email_service:
            logger.warning("No email service configured, verification email for %s not sent", user.email)
            return

        token = create_verification_token(user.uuid)
        verification_url = (
            f"{settings.frontend_url}/verify-email?token={token}"
            f"&callbackUrl={quote(callback_url or DEFAULT_CALLBACK_URL, safe='')}"
        )
        await self.email_service.send_verification(
            to_address=user.email,
            user_name=user.name or "there",
            verification_url=verification_url,
        )
