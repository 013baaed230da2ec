"""Integration-test fixtures.

The app runs in-process over ASGITransport. The polling controller and the
catalog are swapped for instances backed by the in-memory fakes from
tests/conftest.py, so no request leaves the process.
"""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.pm_gateway.dependencies import get_catalog_service, get_polling_controller
from src.pm_market.application.service import MarketCatalogService
from src.pm_polling.controller import PollingController


@pytest_asyncio.fixture
async def client(controller: PollingController, catalog: MarketCatalogService) -> AsyncClient:  # type: ignore[override]
    transport = ASGITransport(app=app)
    app.dependency_overrides[get_polling_controller] = lambda: controller
    app.dependency_overrides[get_catalog_service] = lambda: catalog
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    await controller.aclose()
