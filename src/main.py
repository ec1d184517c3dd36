import asyncio
import logging
from contextlib import asynccontextmanager

import sentry_sdk
from alembic import command
from alembic.config import Config
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from src.auth.dependencies import SESSION_TOKEN_HEADER
from src.auth.routers import router as auth_router
from src.config.logging import setup_logging
from src.config.settings import settings
from src.contact.routers import router as contact_router
from src.events.routers import router as events_router
from src.guests.routers import router as guests_router
from src.invitation_templates.routers import router as templates_router
from src.responses import register_exception_handlers
from src.routers.healthz.router import router as healthz_router

setup_logging()
logger = logging.getLogger(__name__)


async def run_migrations():
    alembic_cfg = Config("alembic.ini")
    await asyncio.to_thread(command.upgrade, alembic_cfg, "head")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        logger.info("Running database migrations")
        await run_migrations()
    yield


if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        profiles_sample_rate=settings.SENTRY_PROFILES_SAMPLE_RATE,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
        send_default_pii=False,
    )

app = FastAPI(
    title="Event Invitations API",
    description="API for invitation templates, events, guest lists and RSVPs",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[SESSION_TOKEN_HEADER],
)

register_exception_handlers(app)

# Include routers. Guests go before events: /api/events/guests must win over /api/events/{event_id}
app.include_router(healthz_router, prefix="/healthz", tags=["Healthz"])
app.include_router(auth_router, tags=["Auth"])
app.include_router(guests_router, tags=["Guests"])
app.include_router(events_router, tags=["Events"])
app.include_router(templates_router, tags=["Templates"])
app.include_router(contact_router, tags=["Contact"])


@app.get("/", tags=["Root"])
async def root():
    return {"message": "Welcome to the Event Invitations API"}
