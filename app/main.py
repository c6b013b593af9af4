"""
FastAPI Main Application
Statutory deadline calculator and session agenda
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional
import logging
import os
import time

from app.config import settings
from app.core.logging import setup_logging
from app.domain.models import LegalCalendar
from app.domain.services.calendar_config_engine import load_legal_calendar
from app.domain.services.deadline_engine import DeadlineEngine
from app.infrastructure.session.saved_deadline_store import SavedDeadlineStore

# Configure logging
setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Set process timezone for logging
os.environ["TZ"] = settings.TIMEZONE
if hasattr(time, "tzset"):
    time.tzset()

DEFAULT_CALENDAR_FILE = Path(__file__).parent.parent / "config" / "legal_calendar.yml"


# Global instances
deadline_engine: DeadlineEngine | None = None
saved_deadline_store: SavedDeadlineStore | None = None


def resolve_calendar_file() -> Optional[Path]:
    """
    Calendar file from settings, else the bundled one, else None (built-in table)
    """
    if settings.LEGAL_CALENDAR_FILE:
        return Path(settings.LEGAL_CALENDAR_FILE)
    if DEFAULT_CALENDAR_FILE.exists():
        return DEFAULT_CALENDAR_FILE
    return None


def build_services(legal_calendar: LegalCalendar) -> None:
    global deadline_engine, saved_deadline_store

    deadline_engine = DeadlineEngine(legal_calendar)
    saved_deadline_store = SavedDeadlineStore(
        max_entries_per_session=settings.MAX_SAVED_DEADLINES_PER_SESSION
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    """
    logger.info("=" * 60)
    logger.info("Starting Legal Deadline Assistant")
    logger.info("=" * 60)

    calendar_file = resolve_calendar_file()
    legal_calendar = load_legal_calendar(calendar_file)
    build_services(legal_calendar)

    logger.info("Legal calendar: %s", calendar_file or "built-in")
    logger.info("   Official holidays: %s", len(legal_calendar.holidays))
    recess_start, recess_end = legal_calendar.recess.window(2000)
    logger.info(
        "   Judicial recess: %s - %s",
        recess_start.strftime("%m-%d"),
        recess_end.strftime("%m-%d"),
    )
    logger.info("API Server: http://%s:%s", settings.API_HOST, settings.API_PORT)

    yield

    logger.info("Shutting down Legal Deadline Assistant")
    if saved_deadline_store is not None:
        logger.info("Discarding %s session agendas", saved_deadline_store.session_count())


# Create FastAPI app
app = FastAPI(
    title="Legal Deadline Assistant",
    description="Statutory deadline calculation under HMK / İYUK rules",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Süreli İş Takvimi ve Hesaplayıcı",
        "version": "1.0.0",
        "docs": "/docs",
    }


# Import and include routers
from app.api.routes import deadlines, health

app.include_router(health.router, tags=["Health"])
app.include_router(deadlines.router, prefix="/api/v1/deadlines", tags=["Deadlines"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
