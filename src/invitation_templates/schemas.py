from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel


class TemplateOut(BaseModel):
    id: UUID
    name: str
    category: str
    category_id: UUID | None = None
    json_content: Any = None
    background_style: Any = None
    image_path: str | None = None
    is_premium: bool = False
    price: float = 0.0
    is_system_template: bool = False
    created_by_user_id: UUID | None = None
    is_trashed: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class TemplateEnvelope(BaseModel):
    success: bool = True
    data: TemplateOut


class TemplateListEnvelope(BaseModel):
    success: bool = True
    data: list[TemplateOut]


class TemplateCategoryOut(BaseModel):
    id: UUID
    name: str
    slug: str
    description: str | None = None
    thumbnail_url: str | None = None
    color: str | None = None
    sort_order: int = 0
    is_active: bool = True

    class Config:
        from_attributes = True


class TemplateCategoryEnvelope(BaseModel):
    success: bool = True
    data: TemplateCategoryOut


class TemplateCategoryListEnvelope(BaseModel):
    success: bool = True
    data: list[TemplateCategoryOut]
