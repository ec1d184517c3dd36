from abc import ABC, abstractmethod
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dtos import SessionUser
from src.config.database import async_session_manager
from src.invitation_templates.dtos import TemplateNotFoundError
from src.invitation_templates.repository.orm_models import Template
from src.invitation_templates.visibility import deletable_templates_clause


class TemplateDeleteWriteModel(ABC):
    @abstractmethod
    async def trash_template(self, template_id: UUID, user: SessionUser) -> None:
        raise NotImplementedError


class SqlTemplateDeleteWriteModel(TemplateDeleteWriteModel):
    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def trash_template(self, template_id: UUID, user: SessionUser) -> None:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            template = (
                await session.execute(
                    select(Template)
                    .where(Template.uuid == template_id)
                    .where(Template.is_trashed.is_(False))
                    .where(deletable_templates_clause(user))
                )
            ).scalar_one_or_none()
            if template is None:
                raise TemplateNotFoundError()

            template.is_trashed = True
            await session.flush()
