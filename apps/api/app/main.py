import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Settings, get_settings
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.db.session import Database
from app.monitoring import MetricsMiddleware, router as monitoring_router
from app.routers import auth, events, health
from app.services.credentials import CredentialStore
from app.services.sweeper import SessionSweeper


logger = logging.getLogger(__name__)


def seed_admin(database: Database, settings: Settings) -> bool:
    """Create the bootstrap administrator when it does not exist yet."""

    if not settings.seed_admin_enabled:
        return False

    with database.session() as session:
        store = CredentialStore(session, hash_rounds=settings.password_hash_rounds)
        return store.bootstrap_admin(
            username=settings.seed_admin_username,
            password=settings.seed_admin_password,
            email=settings.seed_admin_email,
            full_name=settings.seed_admin_full_name,
        )


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the API around an explicitly owned store handle."""

    settings = settings or get_settings()
    database = database or Database(settings.database_url, echo=settings.database_echo)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level)
        database.create_all()
        seed_admin(database, settings)

        sweeper: SessionSweeper | None = None
        if settings.session_sweep_enabled:
            sweeper = SessionSweeper(
                database, interval_seconds=settings.session_sweep_interval_seconds
            )
            sweeper.start()
        app.state.sweeper = sweeper
        logger.info("%s %s started", settings.app_name, settings.app_version)

        try:
            yield
        finally:
            if sweeper is not None:
                await sweeper.stop()
            database.dispose()

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.sweeper = None

    register_exception_handlers(app)

    app.add_middleware(MetricsMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.resolved_cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth.router)
    app.include_router(events.router)
    app.include_router(health.router)
    app.include_router(monitoring_router)

    return app


app = create_app()
