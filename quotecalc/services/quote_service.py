# ==============================================================================
# QUOTE SERVICE - Estimate and Quote-Save Flow
# ==============================================================================
# Loads catalog rows, prices the selection and persists the result
# ==============================================================================

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from quotecalc.core.constants import LeadStatus
from quotecalc.core.exceptions import NotFoundError
from quotecalc.database.repositories.catalog_repository import CatalogRepository
from quotecalc.database.repositories.quote_repository import QuoteRepository
from quotecalc.database.service import DatabaseService
from quotecalc.pricing.engine import PricingEngine
from quotecalc.schemas.catalog import ProjectType, SelectedFeature, SelectedPage
from quotecalc.schemas.quote import (
    EstimateRequest,
    EstimateResponse,
    Quote,
    QuoteCreateRequest,
    QuoteDetail,
    QuoteHeader,
    QuoteNotesUpdate,
    QuoteStatusUpdate,
)

logger = logging.getLogger(__name__)


class QuoteService:
    """
    Quote business operations.

    The estimate shown to the user and the quote that gets saved come
    from the same pricing run, so the stored line prices are exactly the
    ones displayed.

    Example:
        >>> quotes = QuoteService(DatabaseService.get_instance())
        >>> response = await quotes.estimate(EstimateRequest(project_type_id=1))
        >>> detail = await quotes.create_quote(request)
    """

    def __init__(
        self,
        db: DatabaseService,
        engine: Optional[PricingEngine] = None,
    ) -> None:
        self._catalog = CatalogRepository(db)
        self._quotes = QuoteRepository(db)
        self._engine = engine or PricingEngine()

    @property
    def catalog(self) -> CatalogRepository:
        return self._catalog

    @property
    def quotes(self) -> QuoteRepository:
        return self._quotes

    # ==========================================================================
    # PRICING
    # ==========================================================================

    async def _load_selection(
        self,
        request: EstimateRequest,
    ) -> Tuple[ProjectType, List[SelectedFeature], List[SelectedPage]]:
        project_type = await self._catalog.get_project_type(request.project_type_id)
        if project_type is None:
            raise NotFoundError(
                f"Project type {request.project_type_id} not found",
                resource_type="project_type",
                resource_id=request.project_type_id,
            )

        features = await self._catalog.get_features(i.id for i in request.features)
        features_by_id = {f.id: f for f in features}
        selected_features = []
        for item in request.features:
            feature = features_by_id.get(item.id)
            if feature is None:
                raise NotFoundError(
                    f"Feature {item.id} not found",
                    resource_type="feature",
                    resource_id=item.id,
                )
            selected_features.append(
                SelectedFeature(**feature.model_dump(), quantity=item.quantity)
            )

        pages = await self._catalog.get_pages(i.id for i in request.pages)
        pages_by_id = {p.id: p for p in pages}
        selected_pages = []
        for item in request.pages:
            page = pages_by_id.get(item.id)
            if page is None:
                raise NotFoundError(
                    f"Page {item.id} not found",
                    resource_type="page",
                    resource_id=item.id,
                )
            selected_pages.append(
                SelectedPage(**page.model_dump(), quantity=item.quantity)
            )

        return project_type, selected_features, selected_pages

    async def estimate(self, request: EstimateRequest) -> EstimateResponse:
        """
        Price a selection without saving it.

        Raises:
            NotFoundError: Unknown project type, feature or page id
            InvalidQuantityError: Quantity below one
            IncompletePricingDefinitionError: Catalog row lacks price fields
        """
        project_type, features, pages = await self._load_selection(request)
        estimate = self._engine.calculate(project_type.base_price, features, pages)
        return EstimateResponse(project_type=project_type, estimate=estimate)

    # ==========================================================================
    # QUOTES
    # ==========================================================================

    async def create_quote(self, request: QuoteCreateRequest) -> QuoteDetail:
        """
        Price a selection and save it as a quote.

        Raises:
            NotFoundError: Unknown project type, feature or page id
            QuoteWriteFailedError: The write was rolled back
        """
        priced = await self.estimate(request)
        estimate = priced.estimate

        header = QuoteHeader(
            **request.client.model_dump(),
            project_type_id=priced.project_type.id,
            total_price=estimate.total_price,
            created_by=request.created_by,
        )
        quote_id = await self._quotes.create_quote(
            header, estimate.feature_lines, estimate.page_lines
        )
        return await self.get_quote_detail(quote_id)

    async def get_quote_detail(self, quote_id: int) -> QuoteDetail:
        quote = await self._require_quote(quote_id)
        return QuoteDetail(
            quote=quote,
            features=await self._quotes.get_quote_features(quote_id),
            pages=await self._quotes.get_quote_pages(quote_id),
        )

    async def list_quotes(self, created_by: Optional[str] = None) -> List[Quote]:
        return await self._quotes.list_quotes(created_by)

    async def update_status(self, quote_id: int, update: QuoteStatusUpdate) -> Quote:
        quote = await self._quotes.update_status(
            quote_id, LeadStatus(update.lead_status), update.updated_by
        )
        if quote is None:
            raise self._not_found(quote_id)
        logger.info(f"Quote {quote_id} moved to {quote.lead_status!r}")
        return quote

    async def update_notes(self, quote_id: int, update: QuoteNotesUpdate) -> Quote:
        quote = await self._quotes.update_notes(
            quote_id, update.model_dump(exclude_unset=True)
        )
        if quote is None:
            raise self._not_found(quote_id)
        return quote

    async def delete_quote(self, quote_id: int) -> None:
        if not await self._quotes.delete_quote(quote_id):
            raise self._not_found(quote_id)

    # ==========================================================================
    # HELPERS
    # ==========================================================================

    async def _require_quote(self, quote_id: int) -> Quote:
        quote = await self._quotes.get_quote(quote_id)
        if quote is None:
            raise self._not_found(quote_id)
        return quote

    @staticmethod
    def _not_found(quote_id: int) -> NotFoundError:
        return NotFoundError(
            f"Quote {quote_id} not found",
            resource_type="quote",
            resource_id=quote_id,
        )
