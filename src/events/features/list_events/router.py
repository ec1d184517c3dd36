from uuid import UUID

from fastapi import APIRouter, Depends

from src.events.dtos import EventStatus
from src.events.repository.read_models import EventReadModel, SqlEventReadModel
from src.events.schemas import EventListEnvelope, EventOut
from src.events.urls import EVENTS_URL

router = APIRouter()


def get_event_read_model() -> EventReadModel:
    """Dependency to get event read model instance."""
    return SqlEventReadModel()


@router.get(EVENTS_URL, response_model=EventListEnvelope)
async def list_events(
    status: EventStatus | None = None,
    search: str | None = None,
    created_by_user_id: UUID | None = None,
    read_model: EventReadModel = Depends(get_event_read_model),
) -> EventListEnvelope:
    """
    List events, newest first. Trashed events are never returned.
    ``search`` matches title, description and location, ignoring case.
    """
    events = await read_model.list_events(
        status=status,
        search=search,
        created_by_user_id=created_by_user_id,
    )
    return EventListEnvelope(data=[EventOut.model_validate(event) for event in events])
