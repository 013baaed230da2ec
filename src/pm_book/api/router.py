"""Book view endpoint.

GET /book?outcome=YES|NO — crossed + accumulated book from the latest snapshot
"""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query, Request

from src.pm_book.application.service import BookApplicationService
from src.pm_common.enums import Outcome
from src.pm_common.response import ApiResponse, success_response
from src.pm_gateway.dependencies import get_polling_controller
from src.pm_polling.controller import PollingController

router = APIRouter(prefix="/book", tags=["book"])

_service = BookApplicationService()


@router.get("")
async def get_book(
    request: Request,
    controller: Annotated[PollingController, Depends(get_polling_controller)],
    outcome: Literal["YES", "NO"] = Query("YES"),
) -> ApiResponse:
    result = _service.get_book(controller, Outcome(outcome))
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
