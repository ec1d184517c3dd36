from fastapi import APIRouter

from .features.attendee_events.router import router as attendee_events_router
from .features.attendee_guests.router import router as attendee_guests_router
from .features.manage_guests.router import router as manage_guests_router
from .features.public_invitation.router import router as public_invitation_router

router = APIRouter()

router.include_router(manage_guests_router)
router.include_router(attendee_guests_router)
router.include_router(attendee_events_router)
router.include_router(public_invitation_router)
