from uuid import UUID

from sqlalchemy import select

from src.invitation_templates.repository.orm_models import TemplateCategory


async def category_id_for_slug(session, slug: str) -> UUID | None:
    """Templates keep the slug as given; the foreign key is set when the category exists."""
    return (
        await session.execute(select(TemplateCategory.uuid).where(TemplateCategory.slug == slug))
    ).scalar_one_or_none()
