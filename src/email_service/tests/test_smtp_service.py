from unittest.mock import MagicMock

import pytest

from src.email_service import smtp_service
from src.email_service.smtp_service import SMTPEmailService


@pytest.fixture
def smtp(monkeypatch):
    smtp_class = MagicMock()
    monkeypatch.setattr(smtp_service.smtplib, "SMTP", smtp_class)
    return smtp_class.return_value.__enter__.return_value


async def test_send_invitation(smtp):
    service = SMTPEmailService()

    await service.send_invitation(
        to_address="ann@example.com",
        guest_name="Ann",
        event_title="Garden Party",
        event_date="June 01, 2030 at 06:00 PM",
        event_location="1 Garden Lane",
        host_name="Hosting Host",
        invitation_url="http://localhost:3000/invitation/abc",
    )

    [message] = smtp.send_message.call_args.args
    assert message["To"] == "ann@example.com"
    assert message["Subject"] == "You're invited to Garden Party!"
    html = message.get_payload()[1].get_payload(decode=True).decode()
    assert "http://localhost:3000/invitation/abc" in html
    assert "Dear Ann" in html


async def test_send_verification_logs_in_with_credentials(smtp, monkeypatch):
    service = SMTPEmailService()
    monkeypatch.setattr(service, "username", "mailer")
    monkeypatch.setattr(service, "password", "secret")

    await service.send_verification(
        to_address="host@example.com",
        user_name="Hosting Host",
        verification_url="http://localhost:3000/verify-email?token=t",
    )

    smtp.starttls.assert_called_once()
    smtp.login.assert_called_once_with("mailer", "secret")
    [message] = smtp.send_message.call_args.args
    assert message["To"] == "host@example.com"


async def test_send_contact_message_replies_to_sender(smtp):
    service = SMTPEmailService()

    await service.send_contact_message(
        to_address="support@example.com",
        sender_name="Ann",
        sender_email="ann@example.com",
        subject="Pricing",
        message="Line one\nLine two",
        inquiry_type="sales",
    )

    [message] = smtp.send_message.call_args.args
    assert message["To"] == "support@example.com"
    assert message["Reply-To"] == "ann@example.com"
    assert message["Subject"] == "[Contact] Pricing"
    html = message.get_payload()[1].get_payload(decode=True).decode()
    assert "Line one<br/>Line two" in html
