from datetime import datetime
from typing import Any
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from src.auth.dependencies import get_current_user
from src.auth.dtos import SessionUser, UserNotFoundError, UserStatus
from src.auth.features.account_profile.write_model import (
    AccountProfileWriteModel,
    SqlAccountProfileWriteModel,
)
from src.auth.urls import ACCOUNT_PROFILE_URL, USER_PROFILE_URL

router = APIRouter()


def is_known_timezone(name: str) -> bool:
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


class ProfileUpdateRequest(BaseModel):
    name: str | None = None
    timezone: str | None = None
    remove_avatar: bool = False

    def to_changes(self) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        # Blank values keep the stored ones
        if self.name and self.name.strip():
            changes["name"] = self.name.strip()
        if self.timezone and self.timezone.strip():
            changes["timezone"] = self.timezone.strip()
        if self.remove_avatar:
            changes["avatar"] = None
        return changes


class ProfileOut(BaseModel):
    id: UUID
    email: str
    name: str | None = None
    avatar: str | None = None
    timezone: str | None = None
    status: UserStatus
    role_slug: str | None = None
    email_verified_at: datetime | None = None
    last_sign_in_at: datetime | None = None

    class Config:
        from_attributes = True


class ProfileEnvelope(BaseModel):
    success: bool = True
    data: ProfileOut


def get_account_profile_write_model() -> AccountProfileWriteModel:
    return SqlAccountProfileWriteModel()


@router.get(ACCOUNT_PROFILE_URL, response_model=ProfileEnvelope)
async def get_account_profile(
    write_model: AccountProfileWriteModel = Depends(get_account_profile_write_model),
    user: SessionUser = Depends(get_current_user),
) -> ProfileEnvelope:
    try:
        profile = await write_model.get_profile(user.id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ProfileEnvelope(data=ProfileOut.model_validate(profile))


@router.put(ACCOUNT_PROFILE_URL, response_model=ProfileEnvelope)
async def update_account_profile(
    request: ProfileUpdateRequest,
    write_model: AccountProfileWriteModel = Depends(get_account_profile_write_model),
    user: SessionUser = Depends(get_current_user),
) -> ProfileEnvelope:
    """Update the signed-in user's name, timezone or avatar."""
    return await _update_profile(write_model, user.id, request)


@router.post(USER_PROFILE_URL, response_model=ProfileEnvelope)
async def update_user_profile(
    user_id: UUID,
    request: ProfileUpdateRequest,
    write_model: AccountProfileWriteModel = Depends(get_account_profile_write_model),
    user: SessionUser = Depends(get_current_user),
) -> ProfileEnvelope:
    """Same as the account update, for a given user. Admins may edit anyone."""
    if user_id != user.id and not user.is_admin:
        raise HTTPException(status_code=403, detail="You can only update your own profile.")
    return await _update_profile(write_model, user_id, request)


async def _update_profile(
    write_model: AccountProfileWriteModel, user_id: UUID, request: ProfileUpdateRequest
) -> ProfileEnvelope:
    changes = request.to_changes()
    if "timezone" in changes and not is_known_timezone(changes["timezone"]):
        raise HTTPException(status_code=400, detail=f"Unknown timezone: {changes['timezone']}")
    try:
        profile = await write_model.update_profile(user_id, changes)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return ProfileEnvelope(data=ProfileOut.model_validate(profile))
