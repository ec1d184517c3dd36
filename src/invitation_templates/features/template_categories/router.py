from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.auth.dependencies import require_roles
from src.auth.dtos import RoleGroups, SessionUser
from src.invitation_templates.dtos import (
    CategoryInUseError,
    CategoryNotFoundError,
    DuplicateCategorySlugError,
    NewCategoryDTO,
)
from src.invitation_templates.features.template_categories.write_model import (
    SqlTemplateCategoryWriteModel,
    TemplateCategoryWriteModel,
)
from src.invitation_templates.repository.read_models import (
    SqlTemplateCategoryReadModel,
    TemplateCategoryReadModel,
)
from src.invitation_templates.schemas import (
    TemplateCategoryEnvelope,
    TemplateCategoryListEnvelope,
    TemplateCategoryOut,
)
from src.invitation_templates.urls import TEMPLATE_CATEGORIES_URL, TEMPLATE_CATEGORY_URL
from src.responses import MessageResponse

router = APIRouter()

require_super_admin = require_roles(RoleGroups.SUPER_ADMINS, "manage template categories")


class CategoryCreateRequest(BaseModel):
    name: str | None = None
    slug: str | None = None
    description: str | None = None
    thumbnail_url: str | None = None
    color: str | None = None
    sort_order: int | None = None


class CategoryUpdateRequest(BaseModel):
    name: str | None = None
    slug: str | None = None
    description: str | None = None
    thumbnail_url: str | None = None
    color: str | None = None
    sort_order: int | None = None
    is_active: bool | None = None

    def to_changes(self) -> dict:
        changes = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if name in {"name", "slug"} and not value:
                continue
            if name in {"sort_order", "is_active"} and value is None:
                continue
            changes[name] = value
        return changes


def get_category_read_model() -> TemplateCategoryReadModel:
    return SqlTemplateCategoryReadModel()


def get_category_write_model() -> TemplateCategoryWriteModel:
    return SqlTemplateCategoryWriteModel()


@router.get(TEMPLATE_CATEGORIES_URL, response_model=TemplateCategoryListEnvelope)
async def list_categories(
    is_active: bool = True,
    read_model: TemplateCategoryReadModel = Depends(get_category_read_model),
) -> TemplateCategoryListEnvelope:
    """Categories ordered by sort order, then name."""
    categories = await read_model.list_categories(is_active=is_active)
    return TemplateCategoryListEnvelope(data=[TemplateCategoryOut.model_validate(c) for c in categories])


@router.post(TEMPLATE_CATEGORIES_URL, response_model=TemplateCategoryEnvelope)
async def create_category(
    request: CategoryCreateRequest,
    write_model: TemplateCategoryWriteModel = Depends(get_category_write_model),
    _: SessionUser = Depends(require_super_admin),
) -> TemplateCategoryEnvelope:
    if not request.name or not request.slug:
        raise HTTPException(status_code=400, detail="Name and slug are required")

    try:
        category = await write_model.create_category(
            NewCategoryDTO(
                name=request.name,
                slug=request.slug,
                description=request.description,
                thumbnail_url=request.thumbnail_url,
                color=request.color,
                sort_order=request.sort_order or 0,
            )
        )
    except DuplicateCategorySlugError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return TemplateCategoryEnvelope(data=TemplateCategoryOut.model_validate(category))


@router.get(TEMPLATE_CATEGORY_URL, response_model=TemplateCategoryEnvelope)
async def get_category(
    category_id: UUID,
    read_model: TemplateCategoryReadModel = Depends(get_category_read_model),
) -> TemplateCategoryEnvelope:
    category = await read_model.get_category(category_id)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return TemplateCategoryEnvelope(data=TemplateCategoryOut.model_validate(category))


@router.put(TEMPLATE_CATEGORY_URL, response_model=TemplateCategoryEnvelope)
async def update_category(
    category_id: UUID,
    request: CategoryUpdateRequest,
    write_model: TemplateCategoryWriteModel = Depends(get_category_write_model),
    _: SessionUser = Depends(require_super_admin),
) -> TemplateCategoryEnvelope:
    try:
        category = await write_model.update_category(category_id, request.to_changes())
    except CategoryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DuplicateCategorySlugError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return TemplateCategoryEnvelope(data=TemplateCategoryOut.model_validate(category))


@router.delete(TEMPLATE_CATEGORY_URL, response_model=MessageResponse)
async def delete_category(
    category_id: UUID,
    write_model: TemplateCategoryWriteModel = Depends(get_category_write_model),
    _: SessionUser = Depends(require_super_admin),
) -> MessageResponse:
    try:
        await write_model.delete_category(category_id)
    except CategoryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CategoryInUseError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return MessageResponse(message="Category deleted successfully")
