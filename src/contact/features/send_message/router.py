import logging
import smtplib

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr

from src.config.settings import settings
from src.contact.sanitize import sanitize_text
from src.contact.urls import CONTACT_URL
from src.email_service import EmailServiceBase, get_email_service
from src.responses import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


class ContactRequest(BaseModel):
    name: str = ""
    email: EmailStr
    subject: str = ""
    message: str = ""
    inquiry_type: str = ""


def get_contact_email_service() -> EmailServiceBase:
    return get_email_service()


@router.post(CONTACT_URL, response_model=MessageResponse)
async def send_contact_message(
    request: ContactRequest,
    email_service: EmailServiceBase = Depends(get_contact_email_service),
) -> MessageResponse:
    """Forward a contact form submission to the support inbox."""
    fields = {
        "sender_name": sanitize_text(request.name),
        "subject": sanitize_text(request.subject),
        "message": sanitize_text(request.message),
        "inquiry_type": sanitize_text(request.inquiry_type),
    }
    if not all(fields.values()):
        raise HTTPException(status_code=400, detail="All fields are required.")

    try:
        await email_service.send_contact_message(
            to_address=settings.contact_form_to_email,
            sender_email=request.email.lower(),
            **fields,
        )
    except (smtplib.SMTPException, OSError):
        logger.exception("Failed to forward contact message from %s", request.email)
        raise HTTPException(status_code=500, detail="Failed to send message.")

    return MessageResponse(message="Message sent successfully.")
