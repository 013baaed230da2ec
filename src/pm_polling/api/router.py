"""Polling controller endpoints.

POST /polling/select        — switch market (restarts polling, clears the book)
POST /polling/resume        — re-enable auto-refresh + one immediate fetch
POST /polling/auto-refresh  — toggle auto-refresh
POST /polling/stop          — drop the selection
GET  /polling/status        — observable state
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.pm_common.response import ApiResponse, success_response
from src.pm_gateway.dependencies import get_catalog_service, get_polling_controller
from src.pm_market.application.service import MarketCatalogService
from src.pm_polling.application.schemas import (
    AutoRefreshRequest,
    PollingStatusResponse,
    SelectMarketRequest,
)
from src.pm_polling.controller import PollingController

router = APIRouter(prefix="/polling", tags=["polling"])


def _status(request: Request, controller: PollingController) -> ApiResponse:
    result = PollingStatusResponse.from_domain(controller.status())
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/select")
async def select_market(
    body: SelectMarketRequest,
    request: Request,
    controller: Annotated[PollingController, Depends(get_polling_controller)],
    catalog: Annotated[MarketCatalogService, Depends(get_catalog_service)],
) -> ApiResponse:
    market = await catalog.get_market(body.question_id)
    await controller.select_market(market)
    return _status(request, controller)


@router.post("/resume")
async def resume(
    request: Request,
    controller: Annotated[PollingController, Depends(get_polling_controller)],
) -> ApiResponse:
    await controller.resume()
    return _status(request, controller)


@router.post("/auto-refresh")
async def auto_refresh(
    body: AutoRefreshRequest,
    request: Request,
    controller: Annotated[PollingController, Depends(get_polling_controller)],
) -> ApiResponse:
    await controller.set_auto_refresh(body.enabled)
    return _status(request, controller)


@router.post("/stop")
async def stop(
    request: Request,
    controller: Annotated[PollingController, Depends(get_polling_controller)],
) -> ApiResponse:
    await controller.stop()
    return _status(request, controller)


@router.get("/status")
async def status(
    request: Request,
    controller: Annotated[PollingController, Depends(get_polling_controller)],
) -> ApiResponse:
    return _status(request, controller)
