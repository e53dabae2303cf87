import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from notifier.application.use_cases.notifications import create_dispatcher
from notifier.application.use_cases.reminders import (
    DatabaseEventSource,
    create_reminder_scheduler,
)
from notifier.config import get_settings
from notifier.infrastructure.database import SessionLocal, engine, initialize_database
from notifier.infrastructure.notifications import create_push_sender
from notifier.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Wire the notification services on startup and release them on shutdown."""

    settings = get_settings()
    initialize_database()
    push_sender = create_push_sender(settings)
    dispatcher = create_dispatcher(
        settings, session_factory=SessionLocal, push_sender=push_sender
    )
    scheduler = create_reminder_scheduler(
        settings,
        dispatcher=dispatcher,
        event_source=DatabaseEventSource(SessionLocal),
    )
    app.state.dispatcher = dispatcher
    app.state.reminder_scheduler = scheduler
    if settings.reminder_scheduler_enabled:
        scheduler.start()
    else:
        logger.info("Event reminder scheduler disabled by configuration")
    try:
        yield
    finally:
        await scheduler.stop()
        await push_sender.aclose()
        engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(title="Connection Notifier", lifespan=lifespan)
    register_routes(app)
    return app


app = create_app()
