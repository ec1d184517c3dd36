from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from src.auth.dependencies import get_current_user
from src.auth.dtos import SessionUser
from src.invitation_templates.dtos import NewTemplateDTO
from src.invitation_templates.features.create_template.write_model import (
    SqlTemplateCreateWriteModel,
    TemplateCreateWriteModel,
)
from src.invitation_templates.schemas import TemplateEnvelope, TemplateOut
from src.invitation_templates.urls import CREATE_TEMPLATE_URL

router = APIRouter()


class TemplateCreateRequest(BaseModel):
    name: str | None = None
    category: str | None = None
    json_content: Any = None
    background_style: Any = None
    image_path: str | None = None
    is_premium: bool = False
    price: float = Field(default=0.0, ge=0)
    is_system_template: bool = False


def get_template_create_write_model() -> TemplateCreateWriteModel:
    return SqlTemplateCreateWriteModel()


@router.post(CREATE_TEMPLATE_URL, response_model=TemplateEnvelope, status_code=201)
async def create_template(
    request: TemplateCreateRequest,
    write_model: TemplateCreateWriteModel = Depends(get_template_create_write_model),
    user: SessionUser = Depends(get_current_user),
) -> TemplateEnvelope:
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Unauthorized - Admin access required")
    if not request.name or not request.category:
        raise HTTPException(status_code=400, detail="Name and category are required")

    template = await write_model.create_template(
        NewTemplateDTO(
            name=request.name,
            category=request.category,
            json_content=request.json_content,
            background_style=request.background_style,
            image_path=request.image_path,
            is_premium=request.is_premium,
            price=request.price,
            is_system_template=request.is_system_template,
        ),
        user,
    )
    return TemplateEnvelope(data=TemplateOut.model_validate(template))
