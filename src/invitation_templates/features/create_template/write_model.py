from abc import ABC, abstractmethod

from sqlalchemy.ext.asyncio import AsyncSession

from src.auth.dtos import SessionUser
from src.config.database import async_session_manager
from src.invitation_templates.category_lookup import category_id_for_slug
from src.invitation_templates.dtos import NewTemplateDTO, TemplateDTO
from src.invitation_templates.repository.orm_models import Template


class TemplateCreateWriteModel(ABC):
    @abstractmethod
    async def create_template(self, template: NewTemplateDTO, user: SessionUser) -> TemplateDTO:
        raise NotImplementedError


class SqlTemplateCreateWriteModel(TemplateCreateWriteModel):
    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def create_template(self, template: NewTemplateDTO, user: SessionUser) -> TemplateDTO:
        async with async_session_manager(session_overwrite=self.session_overwrite) as session:
            new_template = Template(
                name=template.name,
                category=template.category,
                category_id=await category_id_for_slug(session, template.category),
                json_content=template.json_content,
                background_style=template.background_style,
                image_path=template.image_path,
                is_premium=template.is_premium,
                price=template.price,
                is_system_template=template.is_system_template,
                created_by_user_id=user.id,
            )
            session.add(new_template)
            await session.flush()
            await session.refresh(new_template)
            return TemplateDTO.from_template(new_template)
