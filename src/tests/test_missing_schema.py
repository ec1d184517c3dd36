"""Listing endpoints answer with nothing instead of failing before migrations have run."""

from uuid import uuid4

from src.events.repository.read_models import SqlEventReadModel
from src.guests.repository.read_models import SqlAttendeeReadModel, SqlGuestReadModel
from src.invitation_templates.repository.read_models import SqlTemplateCategoryReadModel, SqlTemplateReadModel


async def test_event_reads(missing_schema):
    read_model = SqlEventReadModel()

    assert await read_model.list_events() == []
    assert await read_model.get_event(uuid4()) is None


async def test_guest_reads(missing_schema):
    attendee_read_model = SqlAttendeeReadModel()

    assert await SqlGuestReadModel().list_guests() == []
    assert await attendee_read_model.list_invitations(email="ann@example.com") == []
    assert await attendee_read_model.list_invited_events(email="ann@example.com") == []


async def test_template_reads(missing_schema):
    assert await SqlTemplateReadModel().list_templates() == []
    assert await SqlTemplateCategoryReadModel().list_categories() == []
