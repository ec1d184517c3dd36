from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from src.auth.dependencies import get_current_user
from src.auth.dtos import SessionUser
from src.invitation_templates.dtos import TemplateNotFoundError, TemplatePermissionError
from src.invitation_templates.features.update_template.write_model import (
    SqlTemplateUpdateWriteModel,
    TemplateUpdateWriteModel,
)
from src.invitation_templates.schemas import TemplateEnvelope, TemplateOut
from src.invitation_templates.urls import TEMPLATE_URL
from src.invitation_templates.visibility import can_change_templates

router = APIRouter()


class TemplateUpdateRequest(BaseModel):
    name: str | None = None
    category: str | None = None
    json_content: Any = None
    background_style: Any = None
    image_path: str | None = None
    is_premium: bool | None = None
    price: float | None = Field(default=None, ge=0)
    is_system_template: bool | None = None

    def to_changes(self) -> dict[str, Any]:
        changes = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            # Blank names and categories and explicit nulls on flags keep the stored value
            if name in {"name", "category"} and not value:
                continue
            if name in {"is_premium", "price", "is_system_template"} and value is None:
                continue
            changes[name] = value
        return changes


def get_template_update_write_model() -> TemplateUpdateWriteModel:
    return SqlTemplateUpdateWriteModel()


@router.put(TEMPLATE_URL, response_model=TemplateEnvelope)
async def update_template(
    template_id: UUID,
    request: TemplateUpdateRequest,
    write_model: TemplateUpdateWriteModel = Depends(get_template_update_write_model),
    user: SessionUser = Depends(get_current_user),
) -> TemplateEnvelope:
    """
    Update a template the caller can see.

    Hosts cannot make templates system or premium ones, application admins
    cannot make them premium.
    """
    if not can_change_templates(user):
        raise HTTPException(status_code=403, detail="Insufficient permissions to update templates")

    try:
        template = await write_model.update_template(template_id, user, request.to_changes())
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except TemplatePermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

    return TemplateEnvelope(data=TemplateOut.model_validate(template))
