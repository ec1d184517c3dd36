from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from src.auth.dependencies import get_current_user
from src.auth.dtos import SessionUser
from src.events.dtos import EventFeaturesDTO, EventNotFoundError, EventPermissionError
from src.events.features.update_features.write_model import (
    EventFeaturesWriteModel,
    SqlEventFeaturesWriteModel,
)
from src.events.schemas import EventFeaturesOut
from src.events.urls import EVENT_FEATURES_URL

router = APIRouter()


class EventFeaturesRequest(BaseModel):
    private_guest_list: bool = False
    allow_plus_ones: bool = False
    max_plus_ones: int | None = Field(default=None, ge=0)
    allow_maybe_rsvp: bool = True
    allow_family_headcount: bool = False
    limit_event_capacity: bool = False
    max_event_capacity: int | None = Field(default=None, ge=0)


class UpdateFeaturesRequest(BaseModel):
    features: EventFeaturesRequest


class EventFeaturesEnvelope(BaseModel):
    success: bool = True
    data: EventFeaturesOut


def get_event_features_write_model() -> EventFeaturesWriteModel:
    return SqlEventFeaturesWriteModel()


@router.patch(EVENT_FEATURES_URL, response_model=EventFeaturesEnvelope)
async def update_event_features(
    event_id: UUID,
    request: UpdateFeaturesRequest,
    write_model: EventFeaturesWriteModel = Depends(get_event_features_write_model),
    user: SessionUser = Depends(get_current_user),
) -> EventFeaturesEnvelope:
    """Replace the guest policy switches of an event."""
    try:
        features = await write_model.update_features(
            event_id,
            user,
            EventFeaturesDTO(**request.features.model_dump()),
        )
    except EventNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except EventPermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

    return EventFeaturesEnvelope(data=EventFeaturesOut.model_validate(features))
