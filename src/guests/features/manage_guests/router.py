from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from src.auth.dependencies import require_roles
from src.auth.dtos import RoleGroups, SessionUser
from src.events.dtos import EventNotFoundError
from src.guests.dtos import (
    GuestChangesDTO,
    GuestNotFoundError,
    GuestStatus,
    NewGuestDTO,
    normalize_response,
)
from src.guests.features.manage_guests.write_model import GuestWriteModel, SqlGuestWriteModel
from src.guests.repository.read_models import GuestReadModel, SqlGuestReadModel
from src.guests.schemas import GuestEnvelope, GuestListEnvelope, GuestOut
from src.guests.urls import GUEST_URL, GUESTS_URL

router = APIRouter()


class GuestCreateRequest(BaseModel):
    event_id: UUID
    name: str = Field(min_length=1, max_length=255)
    email: str | None = None
    phone: str | None = None
    status: GuestStatus = GuestStatus.PENDING
    response: str | None = None


class GuestUpdateRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    status: GuestStatus | None = None
    response: str | None = None


def get_guest_read_model() -> GuestReadModel:
    return SqlGuestReadModel()


def get_guest_write_model() -> GuestWriteModel:
    return SqlGuestWriteModel()


@router.get(GUESTS_URL, response_model=GuestListEnvelope)
async def list_guests(
    event_id: UUID | None = None,
    status: GuestStatus | None = None,
    search: str | None = None,
    read_model: GuestReadModel = Depends(get_guest_read_model),
    _: SessionUser = Depends(require_roles(RoleGroups.EVENT_MANAGERS, "view guests")),
) -> GuestListEnvelope:
    guests = await read_model.list_guests(event_id=event_id, status=status, search=search)
    return GuestListEnvelope(data=[GuestOut.model_validate(guest) for guest in guests])


@router.post(GUESTS_URL, response_model=GuestEnvelope)
async def create_guest(
    request: GuestCreateRequest,
    write_model: GuestWriteModel = Depends(get_guest_write_model),
    _: SessionUser = Depends(require_roles(RoleGroups.EVENT_MANAGERS, "create guests")),
) -> GuestEnvelope:
    try:
        guest = await write_model.create_guest(
            NewGuestDTO(
                event_id=request.event_id,
                name=request.name,
                email=request.email,
                phone=request.phone,
                status=request.status,
                response=normalize_response(request.response),
            )
        )
    except EventNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return GuestEnvelope(data=GuestOut.model_validate(guest))


@router.get(GUEST_URL, response_model=GuestEnvelope)
async def get_guest(
    guest_id: UUID,
    read_model: GuestReadModel = Depends(get_guest_read_model),
    _: SessionUser = Depends(require_roles(RoleGroups.EVENT_MANAGERS, "view guests")),
) -> GuestEnvelope:
    guest = await read_model.get_guest(guest_id)
    if guest is None:
        raise HTTPException(status_code=404, detail="Guest not found")
    return GuestEnvelope(data=GuestOut.model_validate(guest))


@router.put(GUEST_URL, response_model=GuestEnvelope)
async def update_guest(
    guest_id: UUID,
    request: GuestUpdateRequest,
    write_model: GuestWriteModel = Depends(get_guest_write_model),
    _: SessionUser = Depends(require_roles(RoleGroups.EVENT_MANAGERS, "update guests")),
) -> GuestEnvelope:
    """
    Update a guest's details. The response accepts yes/no/maybe in any case;
    setting one stamps ``responded_at``.
    """
    changes = GuestChangesDTO(
        name=request.name,
        email=request.email,
        phone=request.phone,
        status=request.status,
        response=normalize_response(request.response),
    )
    try:
        guest = await write_model.update_guest(guest_id, changes)
    except GuestNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return GuestEnvelope(data=GuestOut.model_validate(guest))


@router.delete(GUEST_URL, response_model=GuestEnvelope)
async def delete_guest(
    guest_id: UUID,
    write_model: GuestWriteModel = Depends(get_guest_write_model),
    _: SessionUser = Depends(require_roles(RoleGroups.EVENT_MANAGERS, "delete guests")),
) -> GuestEnvelope:
    try:
        guest = await write_model.delete_guest(guest_id)
    except GuestNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return GuestEnvelope(data=GuestOut.model_validate(guest), message="Guest deleted successfully")
