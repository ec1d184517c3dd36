from dataclasses import replace
from uuid import UUID

import pytest

from src.auth.dtos import RoleSlug, SessionUser, UserNotFoundError
from src.auth.repository.read_models import UserReadModel
from src.auth.session_cache import SessionRefresher, is_session_fresh


class InMemoryUserReadModel(UserReadModel):
    def __init__(self, users: dict[UUID, SessionUser]):
        self._users = users
        self.calls = 0

    async def get_active_session_user(self, user_id: UUID, last_fetch: float) -> SessionUser | None:
        self.calls += 1
        user = self._users.get(user_id)
        if user is None:
            return None
        return replace(user, last_fetch=last_fetch)


def test_is_session_fresh():
    assert is_session_fresh(1000.0, now=1100.0, ttl_seconds=300)
    assert not is_session_fresh(1000.0, now=1300.0, ttl_seconds=300)
    assert not is_session_fresh(0.0, now=1000.0, ttl_seconds=300)
    assert not is_session_fresh(None, now=1000.0, ttl_seconds=300)


async def test_fresh_claims_come_from_cache(user_factory):
    user = user_factory(RoleSlug.HOST, last_fetch=1000.0)
    read_model = InMemoryUserReadModel({user.id: user})
    refresher = SessionRefresher(read_model, ttl_seconds=300, clock=lambda: 1100.0)

    refreshed, from_cache = await refresher.refresh(user)

    assert from_cache is True
    assert refreshed is user
    assert read_model.calls == 0


async def test_stale_claims_are_reread(user_factory):
    user = user_factory(RoleSlug.ATTENDEE, last_fetch=1000.0)
    promoted = replace(user, role_slug=RoleSlug.HOST.value)
    read_model = InMemoryUserReadModel({user.id: promoted})
    refresher = SessionRefresher(read_model, ttl_seconds=300, clock=lambda: 2000.0)

    refreshed, from_cache = await refresher.refresh(user)

    assert from_cache is False
    assert refreshed.role_slug == RoleSlug.HOST.value
    assert refreshed.last_fetch == 2000.0


async def test_forced_refresh_skips_cache(user_factory):
    user = user_factory(RoleSlug.HOST, last_fetch=1000.0)
    read_model = InMemoryUserReadModel({user.id: user})
    refresher = SessionRefresher(read_model, ttl_seconds=300, clock=lambda: 1001.0)

    _, from_cache = await refresher.refresh(user, force=True)

    assert from_cache is False
    assert read_model.calls == 1


async def test_missing_user_raises(user_factory):
    user = user_factory(RoleSlug.HOST)
    refresher = SessionRefresher(InMemoryUserReadModel({}), ttl_seconds=300, clock=lambda: 1.0)

    with pytest.raises(UserNotFoundError):
        await refresher.refresh(user)
