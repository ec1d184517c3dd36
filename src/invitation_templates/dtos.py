from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID

if TYPE_CHECKING:
    from src.invitation_templates.repository.orm_models import Template, TemplateCategory


class TemplateNotFoundError(Exception):
    def __init__(self, message: str = "Template not found or access denied") -> None:
        super().__init__(message)


class TemplatePermissionError(Exception):
    """Raised when the caller's role may not perform a template change."""


class CategoryNotFoundError(Exception):
    def __init__(self) -> None:
        super().__init__("Category not found")


class DuplicateCategorySlugError(Exception):
    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__("Category with this slug already exists")


class CategoryInUseError(Exception):
    def __init__(self) -> None:
        super().__init__("Cannot delete category that is being used by templates")


@dataclass(frozen=True)
class TemplateDTO:
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

    @classmethod
    def from_template(cls, template: "Template") -> "TemplateDTO":
        return cls(
            id=template.uuid,
            name=template.name,
            category=template.category,
            category_id=template.category_id,
            json_content=template.json_content,
            background_style=template.background_style,
            image_path=template.image_path,
            is_premium=template.is_premium,
            price=float(template.price or 0),
            is_system_template=template.is_system_template,
            created_by_user_id=template.created_by_user_id,
            is_trashed=template.is_trashed,
            created_at=template.created_at,
            updated_at=template.updated_at,
        )


@dataclass(frozen=True)
class NewTemplateDTO:
    name: str
    category: str
    json_content: Any = None
    background_style: Any = None
    image_path: str | None = None
    is_premium: bool = False
    price: float = 0.0
    is_system_template: bool = False


@dataclass(frozen=True)
class TemplateCategoryDTO:
    id: UUID
    name: str
    slug: str
    description: str | None = None
    thumbnail_url: str | None = None
    color: str | None = None
    sort_order: int = 0
    is_active: bool = True

    @classmethod
    def from_category(cls, category: "TemplateCategory") -> "TemplateCategoryDTO":
        return cls(
            id=category.uuid,
            name=category.name,
            slug=category.slug,
            description=category.description,
            thumbnail_url=category.thumbnail_url,
            color=category.color,
            sort_order=category.sort_order,
            is_active=category.is_active,
        )


@dataclass(frozen=True)
class NewCategoryDTO:
    name: str
    slug: str
    description: str | None = None
    thumbnail_url: str | None = None
    color: str | None = None
    sort_order: int = 0
