from uuid import UUID

from src.auth.dtos import SessionUser
from src.events.dtos import EventPermissionError


def can_manage_event(user: SessionUser, created_by_user_id: UUID) -> bool:
    """Admins manage every event, everybody else only the ones they created."""
    return user.is_admin or user.id == created_by_user_id


def ensure_can_manage_event(user: SessionUser, created_by_user_id: UUID, operation: str) -> None:
    if not can_manage_event(user, created_by_user_id):
        raise EventPermissionError(operation)
