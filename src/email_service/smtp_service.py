import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from src.config.settings import settings
from src.email_service.base import EmailServiceBase
from src.email_service.templates import EmailTemplates

logger = logging.getLogger(__name__)


class SMTPEmailService(EmailServiceBase):
    def __init__(self):
        self.host = settings.smtp_host
        self.port = settings.smtp_port
        self.username = settings.smtp_user
        self.password = settings.smtp_password
        self.from_address = settings.emails_from

    def _create_message(
        self,
        to_address: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.from_address
        msg["To"] = to_address

        part1 = MIMEText(text_body, "plain")
        part2 = MIMEText(html_body, "html")
        msg.attach(part1)
        msg.attach(part2)

        return msg

    def _send(self, msg: MIMEMultipart) -> None:
        if self.username and self.password:
            with smtplib.SMTP(self.host, self.port) as server:
                server.starttls()
                server.login(self.username, self.password)
                server.send_message(msg)
        else:
            with smtplib.SMTP(self.host, self.port) as server:
                server.send_message(msg)
        logger.info("Sent '%s' to %s", msg["Subject"], msg["To"])

    async def send_invitation(
        self,
        to_address: str,
        guest_name: str,
        event_title: str,
        event_date: str,
        event_location: str,
        host_name: str,
        invitation_url: str,
    ) -> None:
        context = {
            "guest_name": guest_name,
            "event_title": event_title,
            "event_date": event_date,
            "event_location": event_location,
            "host_name": host_name,
            "invitation_url": invitation_url,
        }
        msg = self._create_message(
            to_address=to_address,
            subject=EmailTemplates.INVITATION_SUBJECT.format(**context),
            html_body=EmailTemplates.INVITATION_HTML.format(**context),
            text_body=EmailTemplates.INVITATION_TEXT.format(**context),
        )

        await asyncio.to_thread(self._send, msg)

    async def send_verification(
        self,
        to_address: str,
        user_name: str,
        verification_url: str,
    ) -> None:
        context = {"user_name": user_name, "verification_url": verification_url}
        msg = self._create_message(
            to_address=to_address,
            subject=EmailTemplates.VERIFICATION_SUBJECT,
            html_body=EmailTemplates.VERIFICATION_HTML.format(**context),
            text_body=EmailTemplates.VERIFICATION_TEXT.format(**context),
        )

        await asyncio.to_thread(self._send, msg)

    async def send_contact_message(
        self,
        to_address: str,
        sender_name: str,
        sender_email: str,
        subject: str,
        message: str,
        inquiry_type: str,
    ) -> None:
        context = {
            "sender_name": sender_name,
            "sender_email": sender_email,
            "subject": subject,
            "message": message,
            "message_html": message.replace("\n", "<br/>"),
            "inquiry_type": inquiry_type,
        }
        msg = self._create_message(
            to_address=to_address,
            subject=EmailTemplates.CONTACT_SUBJECT.format(**context),
            html_body=EmailTemplates.CONTACT_HTML.format(**context),
            text_body=EmailTemplates.CONTACT_TEXT.format(**context),
        )
        msg["Reply-To"] = sender_email

        await asyncio.to_thread(self._send, msg)
