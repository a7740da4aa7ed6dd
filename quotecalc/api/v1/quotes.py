# ==============================================================================
# QUOTE ENDPOINTS - Saved Quote Routes
# ==============================================================================
# Create, read, list, status/notes updates and delete
# ==============================================================================

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, status

from quotecalc.api.dependencies import QuoteServiceDep
from quotecalc.schemas.base import APIResponse
from quotecalc.schemas.quote import (
    Quote,
    QuoteCreateRequest,
    QuoteDetail,
    QuoteNotesUpdate,
    QuoteStatusUpdate,
)

router = APIRouter(prefix="/quotes", tags=["Quotes"])


@router.post(
    "",
    response_model=APIResponse[QuoteDetail],
    status_code=status.HTTP_201_CREATED,
    summary="Create quote",
    description="Price the selection and save it with the client details.",
)
async def create_quote(
    request: QuoteCreateRequest,
    service: QuoteServiceDep,
) -> APIResponse[QuoteDetail]:
    """Create a new quote."""
    detail = await service.create_quote(request)
    return APIResponse.ok(data=detail, message="Quote created successfully")


@router.get(
    "",
    response_model=APIResponse[List[Quote]],
    summary="List quotes",
    description="Saved quotes, newest first.",
)
async def list_quotes(
    service: QuoteServiceDep,
    created_by: Optional[str] = Query(None, description="Only quotes by this user"),
) -> APIResponse[List[Quote]]:
    """List quotes."""
    quotes = await service.list_quotes(created_by)
    return APIResponse.ok(data=quotes)


@router.get(
    "/{quote_id}",
    response_model=APIResponse[QuoteDetail],
    summary="Get quote",
    description="A quote with its feature and page lines.",
)
async def get_quote(
    quote_id: int,
    service: QuoteServiceDep,
) -> APIResponse[QuoteDetail]:
    """Get a quote by ID."""
    detail = await service.get_quote_detail(quote_id)
    return APIResponse.ok(data=detail)


@router.patch(
    "/{quote_id}/status",
    response_model=APIResponse[Quote],
    summary="Update lead status",
)
async def update_status(
    quote_id: int,
    update: QuoteStatusUpdate,
    service: QuoteServiceDep,
) -> APIResponse[Quote]:
    quote = await service.update_status(quote_id, update)
    return APIResponse.ok(data=quote, message="Status updated")


@router.patch(
    "/{quote_id}/notes",
    response_model=APIResponse[Quote],
    summary="Update notes and contact fields",
    description="Partial update; prices and line items cannot be changed.",
)
async def update_notes(
    quote_id: int,
    update: QuoteNotesUpdate,
    service: QuoteServiceDep,
) -> APIResponse[Quote]:
    quote = await service.update_notes(quote_id, update)
    return APIResponse.ok(data=quote, message="Quote updated")


@router.delete(
    "/{quote_id}",
    response_model=APIResponse[None],
    summary="Delete quote",
    description="Delete a quote together with its line items.",
)
async def delete_quote(
    quote_id: int,
    service: QuoteServiceDep,
) -> APIResponse[None]:
    """Delete a quote."""
    await service.delete_quote(quote_id)
    return APIResponse.ok(data=None, message="Quote deleted successfully")
