from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from app.api.routes import deadlines, health
from app.domain.services.calendar_config_engine import DEFAULT_LEGAL_CALENDAR
import app.main as app_main


@pytest.fixture()
def app() -> FastAPI:
    app = FastAPI()
    app.include_router(health.router, tags=["Health"])
    app.include_router(deadlines.router, prefix="/api/v1/deadlines", tags=["Deadlines"])

    # Fresh engine and empty agenda per test
    app_main.build_services(DEFAULT_LEGAL_CALENDAR)

    yield app

    app_main.deadline_engine = None
    app_main.saved_deadline_store = None


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
