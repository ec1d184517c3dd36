"""Imports every ORM module so the shared metadata knows all tables.

Used by Alembic autogenerate and by the test schema setup.
"""

from src.events.repository import orm_models as event_models  # noqa: F401
from src.guests.repository import orm_models as guest_models  # noqa: F401
from src.invitation_templates.repository import orm_models as template_models  # noqa: F401
from src.models import user  # noqa: F401
from src.models.base import BaseModel

metadata = BaseModel.metadata
