from fastapi import APIRouter, Depends

from src.invitation_templates.repository.read_models import SqlTemplateReadModel, TemplateReadModel
from src.invitation_templates.schemas import TemplateListEnvelope, TemplateOut
from src.invitation_templates.urls import TEMPLATES_URL

router = APIRouter()


def get_template_read_model() -> TemplateReadModel:
    return SqlTemplateReadModel()


@router.get(TEMPLATES_URL, response_model=TemplateListEnvelope)
async def list_templates(
    category: str | None = None,
    is_premium: bool | None = None,
    search: str | None = None,
    read_model: TemplateReadModel = Depends(get_template_read_model),
) -> TemplateListEnvelope:
    """Template gallery, newest first. Trashed templates are left out."""
    templates = await read_model.list_templates(category=category, is_premium=is_premium, search=search)
    return TemplateListEnvelope(data=[TemplateOut.model_validate(template) for template in templates])
