from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from src.auth.dependencies import get_current_user
from src.auth.dtos import SessionUser
from src.invitation_templates.dtos import TemplateNotFoundError
from src.invitation_templates.features.delete_template.write_model import (
    SqlTemplateDeleteWriteModel,
    TemplateDeleteWriteModel,
)
from src.invitation_templates.urls import TEMPLATE_URL
from src.invitation_templates.visibility import can_change_templates
from src.responses import MessageResponse

router = APIRouter()


def get_template_delete_write_model() -> TemplateDeleteWriteModel:
    return SqlTemplateDeleteWriteModel()


@router.delete(TEMPLATE_URL, response_model=MessageResponse)
async def delete_template(
    template_id: UUID,
    write_model: TemplateDeleteWriteModel = Depends(get_template_delete_write_model),
    user: SessionUser = Depends(get_current_user),
) -> MessageResponse:
    """Move a template to the trash. Hosts can only trash their own templates."""
    if not can_change_templates(user):
        raise HTTPException(status_code=403, detail="Insufficient permissions to delete templates")

    try:
        await write_model.trash_template(template_id, user)
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return MessageResponse(message="Template deleted successfully")
