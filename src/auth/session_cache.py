import time
from collections.abc import Callable

from src.auth.dtos import SessionUser, UserNotFoundError
from src.auth.repository.read_models import UserReadModel
from src.config.settings import settings


def is_session_fresh(last_fetch: float | None, now: float, ttl_seconds: int) -> bool:
    """A session read from the database less than ``ttl_seconds`` ago is reused as is."""
    if not last_fetch:
        return False
    return now - last_fetch < ttl_seconds


class SessionRefresher:
    """Read-through cache over the user's role and status.

    Claims stay in the token until they age past the TTL; after that, or when
    a refresh is forced, they are re-read from the database.
    """

    def __init__(
        self,
        read_model: UserReadModel,
        ttl_seconds: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._read_model = read_model
        self._ttl_seconds = settings.session_cache_ttl_seconds if ttl_seconds is None else ttl_seconds
        self._clock = clock

    async def refresh(self, session_user: SessionUser, force: bool = False) -> tuple[SessionUser, bool]:
        """Return the current claims and whether they came from the cache."""
        now = self._clock()
        if not force and is_session_fresh(session_user.last_fetch, now, self._ttl_seconds):
            return session_user, True

        fresh_user = await self._read_model.get_active_session_user(session_user.id, last_fetch=now)
        if fresh_user is None:
            raise UserNotFoundError("User not found or inactive")
        return fresh_user, False
