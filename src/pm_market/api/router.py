"""pm_market REST endpoints.

GET /markets                                — live markets (fresh catalog fetch)
GET /markets/groups/{group_key}/liquidity   — merged tier over a parent event
GET /markets/{question_id}                  — single market detail
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.pm_common.response import ApiResponse, success_response
from src.pm_gateway.dependencies import get_catalog_service
from src.pm_market.application.service import MarketCatalogService

router = APIRouter(prefix="/markets", tags=["markets"])


@router.get("")
async def list_markets(
    request: Request,
    catalog: Annotated[MarketCatalogService, Depends(get_catalog_service)],
) -> ApiResponse:
    result = await catalog.list_live()
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/groups/{group_key}/liquidity")
async def group_liquidity(
    group_key: str,
    request: Request,
    catalog: Annotated[MarketCatalogService, Depends(get_catalog_service)],
) -> ApiResponse:
    result = await catalog.group_liquidity(group_key)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{question_id}")
async def get_market(
    question_id: str,
    request: Request,
    catalog: Annotated[MarketCatalogService, Depends(get_catalog_service)],
) -> ApiResponse:
    result = await catalog.describe(question_id)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
