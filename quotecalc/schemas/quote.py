# ==============================================================================
# QUOTE SCHEMAS - Request/Response Models
# ==============================================================================
# Pydantic schemas for quote headers, line items and quote requests
# ==============================================================================

from __future__ import annotations

from typing import List, Optional

from pydantic import EmailStr, Field

from quotecalc.core.constants import LeadStatus
from quotecalc.schemas.base import BaseSchema
from quotecalc.schemas.catalog import ProjectType
from quotecalc.schemas.estimate import Estimate


class ClientInfo(BaseSchema):
    """Client/contact fields entered on the calculator form."""

    client_name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Client's name"
    )
    email: EmailStr = Field(
        ...,
        description="Client's email address"
    )
    business_name: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = None
    internal_notes: Optional[str] = None
    lead_status: LeadStatus = Field(
        default=LeadStatus.IN_PROGRESS,
        description="Initial pipeline status"
    )
    close_date: Optional[str] = None


class QuoteHeader(ClientInfo):
    """
    Everything the quotes row needs at creation time.

    ``total_price`` comes from the pricing engine and is never edited.
    """

    project_type_id: Optional[int] = None
    total_price: float = Field(..., ge=0)
    created_by: Optional[str] = Field(None, max_length=255)


class Quote(BaseSchema):
    """Stored quote header."""

    id: int
    project_type_id: Optional[int] = None
    client_name: str
    business_name: Optional[str] = None
    email: str
    phone: Optional[str] = None
    notes: Optional[str] = None
    internal_notes: Optional[str] = None
    lead_status: str
    close_date: Optional[str] = None
    total_price: float
    created_at: str
    updated_at: str
    created_by: Optional[str] = None
    updated_by: Optional[str] = None


class QuoteFeature(BaseSchema):
    """Stored feature line with its snapshot price."""

    id: int
    quote_id: int
    feature_id: int
    quantity: int
    price: float


class QuotePage(BaseSchema):
    """Stored page line with its snapshot price."""

    id: int
    quote_id: int
    page_id: int
    quantity: int
    price: float


class QuoteDetail(BaseSchema):
    """Quote header with its line items."""

    quote: Quote
    features: List[QuoteFeature] = Field(default_factory=list)
    pages: List[QuotePage] = Field(default_factory=list)


# ==============================================================================
# UPDATES
# ==============================================================================

class QuoteStatusUpdate(BaseSchema):
    """Lead status change."""

    lead_status: LeadStatus
    updated_by: Optional[str] = Field(None, max_length=255)


class QuoteNotesUpdate(BaseSchema):
    """
    Partial update of the editable header columns.

    Only fields explicitly set are written.
    """

    notes: Optional[str] = None
    internal_notes: Optional[str] = None
    business_name: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    close_date: Optional[str] = None
    updated_by: Optional[str] = Field(None, max_length=255)


# ==============================================================================
# CALCULATOR REQUESTS
# ==============================================================================

class SelectionItem(BaseSchema):
    """Catalog id plus requested quantity."""

    id: int
    quantity: int = 1


class EstimateRequest(BaseSchema):
    """Project type and selections to price."""

    project_type_id: int
    features: List[SelectionItem] = Field(default_factory=list)
    pages: List[SelectionItem] = Field(default_factory=list)


class QuoteCreateRequest(EstimateRequest):
    """Selections plus client details for a saved quote."""

    client: ClientInfo
    created_by: Optional[str] = Field(None, max_length=255)


class EstimateResponse(BaseSchema):
    """Priced estimate together with the project type it was based on."""

    project_type: ProjectType
    estimate: Estimate
