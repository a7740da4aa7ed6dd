# ==============================================================================
# ESTIMATE ENDPOINTS - Live Price Calculation
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter

from quotecalc.api.dependencies import QuoteServiceDep
from quotecalc.schemas.base import APIResponse
from quotecalc.schemas.quote import EstimateRequest, EstimateResponse

router = APIRouter(prefix="/estimates", tags=["Estimates"])


@router.post(
    "",
    response_model=APIResponse[EstimateResponse],
    summary="Calculate estimate",
    description="Price a project type with selected features and pages without saving.",
)
async def calculate_estimate(
    request: EstimateRequest,
    service: QuoteServiceDep,
) -> APIResponse[EstimateResponse]:
    """Price a selection."""
    estimate = await service.estimate(request)
    return APIResponse.ok(data=estimate)
