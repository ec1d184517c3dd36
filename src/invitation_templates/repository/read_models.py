import abc
import logging
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import DBAPIError

from src.auth.dtos import SessionUser
from src.config.database import async_session_manager
from src.invitation_templates.dtos import TemplateCategoryDTO, TemplateDTO
from src.invitation_templates.repository.orm_models import Template, TemplateCategory
from src.invitation_templates.visibility import visible_templates_clause
from src.models.search import LIKE_ESCAPE, contains_pattern
from src.responses import is_missing_relation_error

logger = logging.getLogger(__name__)


class TemplateReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_templates(
        self,
        category: str | None = None,
        is_premium: bool | None = None,
        search: str | None = None,
    ) -> list[TemplateDTO]:
        raise NotImplementedError

    @abc.abstractmethod
    async def get_visible_template(self, template_id: UUID, user: SessionUser | None) -> TemplateDTO | None:
        """Get a non-trashed template, or None when it does not exist for ``user``'s role."""
        raise NotImplementedError


class TemplateCategoryReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_categories(self, is_active: bool = True) -> list[TemplateCategoryDTO]:
        raise NotImplementedError

    @abc.abstractmethod
    async def get_category(self, category_id: UUID) -> TemplateCategoryDTO | None:
        raise NotImplementedError


class SqlTemplateReadModel(TemplateReadModel):
    async def list_templates(
        self,
        category: str | None = None,
        is_premium: bool | None = None,
        search: str | None = None,
    ) -> list[TemplateDTO]:
        stmt = select(Template).where(Template.is_trashed.is_(False))
        if category:
            stmt = stmt.where(Template.category == category)
        if is_premium is not None:
            stmt = stmt.where(Template.is_premium.is_(is_premium))
        if search:
            pattern = contains_pattern(search)
            stmt = stmt.where(
                or_(
                    Template.name.ilike(pattern, escape=LIKE_ESCAPE),
                    Template.category.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )
        stmt = stmt.order_by(Template.created_at.desc())

        try:
            async with async_session_manager() as session:
                templates = (await session.execute(stmt)).scalars().all()
        except DBAPIError as e:
            if is_missing_relation_error(e):
                logger.warning("Templates table is missing, returning no templates: %s", e.orig)
                return []
            raise

        return [TemplateDTO.from_template(template) for template in templates]

    async def get_visible_template(self, template_id: UUID, user: SessionUser | None) -> TemplateDTO | None:
        async with async_session_manager() as session:
            template = (
                await session.execute(
                    select(Template)
                    .where(Template.uuid == template_id)
                    .where(Template.is_trashed.is_(False))
                    .where(visible_templates_clause(user))
                )
            ).scalar_one_or_none()

        return TemplateDTO.from_template(template) if template else None


class SqlTemplateCategoryReadModel(TemplateCategoryReadModel):
    async def list_categories(self, is_active: bool = True) -> list[TemplateCategoryDTO]:
        stmt = (
            select(TemplateCategory)
            .where(TemplateCategory.is_active.is_(is_active))
            .order_by(TemplateCategory.sort_order, TemplateCategory.name)
        )
        try:
            async with async_session_manager() as session:
                categories = (await session.execute(stmt)).scalars().all()
        except DBAPIError as e:
            if is_missing_relation_error(e):
                logger.warning("Template categories table is missing, returning none: %s", e.orig)
                return []
            raise

        return [TemplateCategoryDTO.from_category(category) for category in categories]

    async def get_category(self, category_id: UUID) -> TemplateCategoryDTO | None:
        async with async_session_manager() as session:
            category = await session.get(TemplateCategory, category_id)
        return TemplateCategoryDTO.from_category(category) if category else None
