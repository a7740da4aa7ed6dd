# ==============================================================================
# SCHEMAS PACKAGE
# ==============================================================================
# Pydantic models for catalog rows, estimates and quotes
# ==============================================================================

from quotecalc.schemas.base import APIResponse, BaseSchema, HealthResponse
from quotecalc.schemas.catalog import (
    Feature,
    FixedPricing,
    HourlyPricing,
    Page,
    ProjectType,
    SelectedFeature,
    SelectedPage,
)
from quotecalc.schemas.estimate import Estimate, FeatureLine, PageLine
from quotecalc.schemas.install import InstallRequest, InstallStatus
from quotecalc.schemas.quote import (
    ClientInfo,
    EstimateRequest,
    EstimateResponse,
    Quote,
    QuoteCreateRequest,
    QuoteDetail,
    QuoteFeature,
    QuoteHeader,
    QuoteNotesUpdate,
    QuotePage,
    QuoteStatusUpdate,
    SelectionItem,
)

__all__ = [
    "APIResponse",
    "BaseSchema",
    "HealthResponse",
    "Feature",
    "FixedPricing",
    "HourlyPricing",
    "Page",
    "ProjectType",
    "SelectedFeature",
    "SelectedPage",
    "Estimate",
    "FeatureLine",
    "PageLine",
    "InstallRequest",
    "InstallStatus",
    "ClientInfo",
    "EstimateRequest",
    "EstimateResponse",
    "Quote",
    "QuoteCreateRequest",
    "QuoteDetail",
    "QuoteFeature",
    "QuoteHeader",
    "QuoteNotesUpdate",
    "QuotePage",
    "QuoteStatusUpdate",
    "SelectionItem",
]
