from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from src.events.repository.read_models import EventReadModel, SqlEventReadModel
from src.events.schemas import EventEnvelope, EventOut
from src.events.urls import EVENT_URL

router = APIRouter()


def get_event_detail_read_model() -> EventReadModel:
    return SqlEventReadModel()


@router.get(EVENT_URL, response_model=EventEnvelope)
async def get_event(
    event_id: UUID,
    read_model: EventReadModel = Depends(get_event_detail_read_model),
) -> EventEnvelope:
    event = await read_model.get_event(event_id)
    if event is None:
        raise HTTPException(status_code=404, detail="Event not found")
    return EventEnvelope(data=EventOut.model_validate(event))
