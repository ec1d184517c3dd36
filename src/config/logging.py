import logging
import sys
from logging import StreamHandler

from src.config.settings import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that drown out request handling at DEBUG
NOISY_LOGGERS = ("aiosqlite", "asyncio", "multipart", "httpx")


def resolve_log_level() -> int:
    if settings.LOG_LEVEL:
        return logging.getLevelName(settings.LOG_LEVEL.upper())
    return logging.DEBUG if settings.debug else logging.INFO


def setup_logging() -> None:
    level = resolve_log_level()
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[StreamHandler(sys.stdout)],
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))
    # SQL echo is driven by LOG_DB on the engine
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.LOG_DB else logging.WARNING)
