from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dtos import SessionUser
from src.config.database import async_session_manager
from src.invitation_templates.category_lookup import category_id_for_slug
from src.invitation_templates.dtos import TemplateDTO, TemplateNotFoundError
from src.invitation_templates.repository.orm_models import Template
from src.invitation_templates.visibility import check_template_flags, visible_templates_clause


class TemplateUpdateWriteModel(ABC):
    @abstractmethod
    async def update_template(self, template_id: UUID, user: SessionUser, changes: dict[str, Any]) -> TemplateDTO:
        """
        Apply ``changes`` (column name to new value) to a template ``user`` can see.
        Raises TemplateNotFoundError or TemplatePermissionError.
        """
        raise NotImplementedError


class SqlTemplateUpdateWriteModel(TemplateUpdateWriteModel):
    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def update_template(self, template_id: UUID, user: SessionUser, changes: dict[str, Any]) -> TemplateDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            template = (
                await session.execute(
                    select(Template)
                    .where(Template.uuid == template_id)
                    .where(Template.is_trashed.is_(False))
                    .where(visible_templates_clause(user))
                )
            ).scalar_one_or_none()
            if template is None:
                raise TemplateNotFoundError()

            check_template_flags(
                user,
                is_system_template=changes.get("is_system_template"),
                is_premium=changes.get("is_premium"),
            )

            for name, value in changes.items():
                setattr(template, name, value)
            if "category" in changes:
                template.category_id = await category_id_for_slug(session, changes["category"])

            await session.flush()
            await session.refresh(template)
            return TemplateDTO.from_template(template)
