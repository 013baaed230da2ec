"""FastAPI dependencies: shared upstream client, polling controller, catalog.

Usage in any router:
    from src.pm_gateway.dependencies import get_polling_controller

    @router.get("/book")
    async def book(controller: PollingController = Depends(get_polling_controller)):
        ...

One controller per process: it owns the current selection. Tests replace
these via ``app.dependency_overrides``.
"""

from fastapi import Depends

from src.pm_feed.infrastructure.fliq_client import FliqClient, close_fliq_client, get_fliq_client
from src.pm_market.application.service import MarketCatalogService
from src.pm_polling.controller import PollingController

_controller: PollingController | None = None
_catalog: MarketCatalogService | None = None


async def get_polling_controller(
    client: FliqClient = Depends(get_fliq_client),
) -> PollingController:
    global _controller  # noqa: PLW0603
    if _controller is None:
        _controller = PollingController(source=client)
    return _controller


async def get_catalog_service(
    client: FliqClient = Depends(get_fliq_client),
) -> MarketCatalogService:
    global _catalog  # noqa: PLW0603
    if _catalog is None:
        _catalog = MarketCatalogService(questions=client, levels=client)
    return _catalog


async def shutdown_dependencies() -> None:
    """Stop polling and close the HTTP pool."""
    global _controller, _catalog  # noqa: PLW0603
    if _controller is not None:
        await _controller.aclose()
        _controller = None
    _catalog = None
    await close_fliq_client()
