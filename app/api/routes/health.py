from fastapi import APIRouter

from app.config import settings

router = APIRouter()


@router.get("/health")
def health():
    return {
        "status": "ok",
        "service": "legal-deadline-assistant",
        "environment": settings.APP_ENV,
    }


@router.get("/ready")
def ready():
    from app.main import deadline_engine, saved_deadline_store

    engine_ready = deadline_engine is not None
    store_ready = saved_deadline_store is not None

    return {
        "status": "ready" if engine_ready and store_ready else "not_ready",
        "deadline_engine": engine_ready,
        "saved_deadline_store": store_ready,
        "official_holidays": (
            len(deadline_engine.legal_calendar.holidays) if engine_ready else 0
        ),
    }
