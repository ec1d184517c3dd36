from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from src.auth.dependencies import require_roles
from src.auth.dtos import RoleGroups, SessionUser
from src.events.dtos import EventNotFoundError, EventPermissionError
from src.events.features.delete_event.write_model import EventDeleteWriteModel, SqlEventDeleteWriteModel
from src.events.schemas import EventEnvelope, EventOut
from src.events.urls import EVENT_URL

router = APIRouter()


def get_event_delete_write_model() -> EventDeleteWriteModel:
    return SqlEventDeleteWriteModel()


@router.delete(EVENT_URL, response_model=EventEnvelope)
async def delete_event(
    event_id: UUID,
    write_model: EventDeleteWriteModel = Depends(get_event_delete_write_model),
    user: SessionUser = Depends(require_roles(RoleGroups.EVENT_MANAGERS, "delete events")),
) -> EventEnvelope:
    try:
        event = await write_model.trash_event(event_id, user)
    except EventNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except EventPermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

    return EventEnvelope(data=EventOut.model_validate(event), message="Event deleted successfully")
