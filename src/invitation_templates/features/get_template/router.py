from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from src.auth.dependencies import get_optional_user
from src.auth.dtos import SessionUser
from src.invitation_templates.repository.read_models import SqlTemplateReadModel, TemplateReadModel
from src.invitation_templates.schemas import TemplateEnvelope, TemplateOut
from src.invitation_templates.urls import TEMPLATE_URL

router = APIRouter()


def get_template_detail_read_model() -> TemplateReadModel:
    return SqlTemplateReadModel()


@router.get(TEMPLATE_URL, response_model=TemplateEnvelope)
async def get_template(
    template_id: UUID,
    user: SessionUser | None = Depends(get_optional_user),
    read_model: TemplateReadModel = Depends(get_template_detail_read_model),
) -> TemplateEnvelope:
    template = await read_model.get_visible_template(template_id, user)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found or access denied")
    return TemplateEnvelope(data=TemplateOut.model_validate(template))
