from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.invitation_templates.dtos import (
    CategoryInUseError,
    CategoryNotFoundError,
    DuplicateCategorySlugError,
    NewCategoryDTO,
    TemplateCategoryDTO,
)
from src.invitation_templates.repository.orm_models import Template, TemplateCategory


class TemplateCategoryWriteModel(ABC):
    @abstractmethod
    async def create_category(self, category: NewCategoryDTO) -> TemplateCategoryDTO:
        raise NotImplementedError

    @abstractmethod
    async def update_category(self, category_id: UUID, changes: dict[str, Any]) -> TemplateCategoryDTO:
        raise NotImplementedError

    @abstractmethod
    async def delete_category(self, category_id: UUID) -> None:
        """Delete a category no live template uses."""
        raise NotImplementedError


class SqlTemplateCategoryWriteModel(TemplateCategoryWriteModel):
    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def create_category(self, category: NewCategoryDTO) -> TemplateCategoryDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            await self._ensure_slug_free(session, category.slug)

            new_category = TemplateCategory(
                name=category.name,
                slug=category.slug,
                description=category.description,
                thumbnail_url=category.thumbnail_url,
                color=category.color,
                sort_order=category.sort_order,
                is_active=True,
            )
            session.add(new_category)
            await session.flush()
            return TemplateCategoryDTO.from_category(new_category)

    async def update_category(self, category_id: UUID, changes: dict[str, Any]) -> TemplateCategoryDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            category = await session.get(TemplateCategory, category_id)
            if category is None:
                raise CategoryNotFoundError()

            new_slug = changes.get("slug")
            slug_changed = bool(new_slug) and new_slug != category.slug
            if slug_changed:
                await self._ensure_slug_free(session, new_slug)

            for name, value in changes.items():
                setattr(category, name, value)
            if slug_changed:
                # Linked templates carry the slug too
                await session.execute(
                    update(Template).where(Template.category_id == category.uuid).values(category=new_slug)
                )
            await session.flush()
            return TemplateCategoryDTO.from_category(category)

    async def delete_category(self, category_id: UUID) -> None:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            category = await session.get(TemplateCategory, category_id)
            if category is None:
                raise CategoryNotFoundError()

            templates_using_category = (
                await session.execute(
                    select(func.count())
                    .select_from(Template)
                    .where(or_(Template.category_id == category.uuid, Template.category == category.slug))
                    .where(Template.is_trashed.is_(False))
                )
            ).scalar_one()
            if templates_using_category:
                raise CategoryInUseError()

            await session.delete(category)
            await session.flush()

    @staticmethod
    async def _ensure_slug_free(session, slug: str) -> None:
        existing = (
            await session.execute(select(TemplateCategory.uuid).where(TemplateCategory.slug == slug))
        ).scalar_one_or_none()
        if existing is not None:
            raise DuplicateCategorySlugError(slug)
