"""Trade simulation endpoint.

POST /simulate — fill estimate against the current crossed asks (nothing is submitted)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from src.pm_common.response import ApiResponse, success_response
from src.pm_gateway.dependencies import get_polling_controller
from src.pm_polling.controller import PollingController
from src.pm_simulation.application.schemas import SimulateRequest
from src.pm_simulation.application.service import SimulationApplicationService

router = APIRouter(prefix="/simulate", tags=["simulation"])

_service = SimulationApplicationService()


@router.post("")
async def simulate_trade(
    body: SimulateRequest,
    request: Request,
    controller: Annotated[PollingController, Depends(get_polling_controller)],
) -> ApiResponse:
    result = _service.simulate(controller, body)
    resp = success_response(result.model_dump(mode="json"))
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
