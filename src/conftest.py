import contextlib
import os
from datetime import UTC, datetime
from uuid import uuid4

os.environ.setdefault("DB_DSN", "sqlite+aiosqlite:///./invitations.db")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from src.auth.dtos import RoleSlug, SessionUser, UserStatus  # noqa: E402
from src.config.database import async_session_maker, engine  # noqa: E402
from src.events.repository.orm_models import Event  # noqa: E402
from src.invitation_templates.repository.orm_models import Template, TemplateCategory  # noqa: E402
from src.main import app  # noqa: E402
from src.models.registry import metadata  # noqa: E402
from src.models.user import User  # noqa: E402


def make_session_user(role: RoleSlug | None = RoleSlug.HOST, **kwargs) -> SessionUser:
    """Build the claims a signed-in user of ``role`` carries."""
    values = {
        "id": uuid4(),
        "email": f"{role.value if role else 'nobody'}@example.com",
        "name": "Test User",
        "status": UserStatus.ACTIVE,
        "role_id": uuid4() if role else None,
        "role_slug": role.value if role else None,
        "role_name": role.value.title() if role else None,
    }
    values.update(kwargs)
    return SessionUser(**values)


@pytest.fixture
def client_factory():
    @contextlib.asynccontextmanager
    async def factory(overrides: dict | None = None):
        app.dependency_overrides.update(overrides or {})
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                yield client
        finally:
            app.dependency_overrides.clear()

    return factory


@pytest.fixture
async def client(client_factory):
    async with client_factory() as client:
        yield client


@pytest.fixture
async def db():
    """A session on a freshly created test schema."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)


@pytest.fixture
def user_factory():
    return make_session_user


@pytest.fixture
def add_user(db):
    async def factory(email: str = "host@example.com", name: str | None = "Hosting Host", **kwargs) -> User:
        user = User(email=email, name=name, status=UserStatus.ACTIVE, **kwargs)
        db.add(user)
        await db.flush()
        return user

    return factory


@pytest.fixture
def add_event(db, add_user):
    async def factory(owner: User | None = None, **kwargs) -> Event:
        if owner is None:
            owner = await add_user(email=f"owner-{uuid4().hex[:8]}@example.com")
        values = {
            "title": "Garden Party",
            "start_date_time": datetime(2030, 6, 1, 18, 0, tzinfo=UTC),
            "location_address": "1 Garden Lane",
            "created_by_user_id": owner.uuid,
        }
        values.update(kwargs)
        event = Event(**values)
        db.add(event)
        await db.flush()
        return event

    return factory


@pytest.fixture
def add_category(db):
    async def factory(slug: str = "wedding", **kwargs) -> TemplateCategory:
        category = TemplateCategory(slug=slug, name=kwargs.pop("name", slug.title()), **kwargs)
        db.add(category)
        await db.flush()
        return category

    return factory


@pytest.fixture
def add_template(db):
    async def factory(name: str = "Classic", category: str = "wedding", **kwargs) -> Template:
        template = Template(name=name, category=category, **kwargs)
        db.add(template)
        await db.flush()
        return template

    return factory


@pytest.fixture
async def missing_schema():
    """A test database with none of the application tables."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
