from fastapi import APIRouter

from .features.send_message.router import router as send_message_router

router = APIRouter()

router.include_router(send_message_router)
