import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ..core.errors import MethodNotAllowedError
from ..core.metrics import VALUATION_OUTCOMES
from ..schemas import OkResponse, ErrorResponse
from ..services.validator import validate_request
from ..services.valuation_service import ValuationService

logger = logging.getLogger(__name__)

router = APIRouter()

SERVER_ERROR = {"error": "Server error"}

def service_dep(request: Request) -> ValuationService:
    # Built once in create_app; tests swap it via create_app(service=...)
    return request.app.state.valuation_service

async def _read_body(request: Request) -> Any:
    """Parsed JSON body, or None when the body is empty or not JSON."""
    try:
        return await request.json()
    except ValueError:
        return None

@router.post(
    "/valuation",
    response_model=OkResponse,
    responses={400: {"model": ErrorResponse}, 405: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def post_valuation(request: Request, svc: ValuationService = Depends(service_dep)):
    # ValidationError propagates to the 400 handler registered in create_app
    req = validate_request(await _read_body(request))

    try:
        result = await svc.run(req)
    except Exception:
        logger.exception("valuation failed for business type %r", req.businessType)
        VALUATION_OUTCOMES.labels(outcome="error").inc()
        return JSONResponse(status_code=500, content=SERVER_ERROR)

    # Email delivery failures still count as success for the caller
    VALUATION_OUTCOMES.labels(outcome="ok" if result.ok else "ok_email_failed").inc()
    return OkResponse()

@router.api_route("/valuation", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def reject_valuation_method(request: Request):
    raise MethodNotAllowedError(request.method)
