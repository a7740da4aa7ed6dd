# ==============================================================================
# QUOTE REPOSITORY - Quote Persistence
# ==============================================================================
# Atomic create of header + snapshot line items, reads, partial updates
# and delete (line items removed by ON DELETE CASCADE)
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence

from quotecalc.core.constants import DatabaseConstants, LeadStatus, QuoteConstants
from quotecalc.core.exceptions import QuoteWriteFailedError, ValidationError
from quotecalc.database.repositories.base_repository import BaseRepository
from quotecalc.schemas.estimate import FeatureLine, PageLine
from quotecalc.schemas.quote import Quote, QuoteFeature, QuoteHeader, QuotePage
from quotecalc.utils.helpers import utc_now_iso

logger = logging.getLogger(__name__)

QUOTES = DatabaseConstants.QUOTES_TABLE
QUOTE_FEATURES = DatabaseConstants.QUOTE_FEATURES_TABLE
QUOTE_PAGES = DatabaseConstants.QUOTE_PAGES_TABLE

QUOTE_COLUMNS = (
    "project_type_id",
    "client_name",
    "business_name",
    "email",
    "phone",
    "notes",
    "internal_notes",
    "lead_status",
    "close_date",
    "total_price",
    "created_at",
    "updated_at",
    "created_by",
    "updated_by",
)
LINE_COLUMNS = ("quote_id", "quantity", "price")


class QuoteRepository(BaseRepository):
    """
    Data access for quotes and their line items.

    Line prices are written exactly as computed by the pricing engine and
    are never recomputed from the catalog afterwards.

    Example:
        >>> repo = QuoteRepository(DatabaseService.get_instance())
        >>> quote_id = await repo.create_quote(header, estimate.feature_lines,
        ...                                    estimate.page_lines)
        >>> await repo.get_quote_pages(quote_id)
    """

    # ==========================================================================
    # CREATE
    # ==========================================================================

    async def create_quote(
        self,
        header: QuoteHeader,
        feature_lines: Sequence[FeatureLine] = (),
        page_lines: Sequence[PageLine] = (),
    ) -> int:
        """
        Insert a quote and all of its line items in one transaction.

        Args:
            header: Client fields, project type and engine total
            feature_lines: Priced feature lines from the engine
            page_lines: Priced page lines from the engine

        Returns:
            The new quote id

        Raises:
            QuoteWriteFailedError: If any insert fails; nothing is written
        """
        now = utc_now_iso()
        data = header.model_dump()
        data.update(created_at=now, updated_at=now, updated_by=header.created_by)

        try:
            async with self._db.transaction() as tx:
                quote_id = await self._insert_row(QUOTES, data, QUOTE_COLUMNS, tx)
                for line in feature_lines:
                    await self._insert_row(
                        QUOTE_FEATURES,
                        {"quote_id": quote_id, **line.model_dump()},
                        ("feature_id",) + LINE_COLUMNS,
                        tx,
                    )
                for line in page_lines:
                    await self._insert_row(
                        QUOTE_PAGES,
                        {"quote_id": quote_id, **line.model_dump()},
                        ("page_id",) + LINE_COLUMNS,
                        tx,
                    )
        except Exception as e:
            logger.error(f"Quote for {header.client_name!r} rolled back: {e}")
            raise QuoteWriteFailedError(cause=e) from e

        logger.info(
            f"Created quote {quote_id} ({len(feature_lines)} feature line(s), "
            f"{len(page_lines)} page line(s), total {header.total_price})"
        )
        return quote_id

    # ==========================================================================
    # READ
    # ==========================================================================

    async def get_quote(self, quote_id: int) -> Optional[Quote]:
        row = await self._db.query_one(
            f"SELECT * FROM {QUOTES} WHERE id = $1", [quote_id]
        )
        return Quote.model_validate(row) if row else None

    async def get_quote_features(self, quote_id: int) -> List[QuoteFeature]:
        rows = await self._db.query(
            f"SELECT * FROM {QUOTE_FEATURES} WHERE quote_id = $1 ORDER BY id",
            [quote_id],
        )
        return [QuoteFeature.model_validate(r) for r in rows]

    async def get_quote_pages(self, quote_id: int) -> List[QuotePage]:
        rows = await self._db.query(
            f"SELECT * FROM {QUOTE_PAGES} WHERE quote_id = $1 ORDER BY id",
            [quote_id],
        )
        return [QuotePage.model_validate(r) for r in rows]

    async def list_quotes(self, created_by: Optional[str] = None) -> List[Quote]:
        """
        List quotes, newest first.

        Args:
            created_by: Only quotes created by this user
        """
        if created_by is None:
            rows = await self._db.query(
                f"SELECT * FROM {QUOTES} ORDER BY created_at DESC, id DESC"
            )
        else:
            rows = await self._db.query(
                f"SELECT * FROM {QUOTES} WHERE created_by = $1 "
                f"ORDER BY created_at DESC, id DESC",
                [created_by],
            )
        return [Quote.model_validate(r) for r in rows]

    # ==========================================================================
    # UPDATE
    # ==========================================================================

    async def update_status(
        self,
        quote_id: int,
        status: LeadStatus,
        updated_by: Optional[str] = None,
    ) -> Optional[Quote]:
        """
        Change the lead status.

        Returns:
            The updated quote, or None if it does not exist

        Raises:
            ValidationError: If ``status`` is not a known lead status
        """
        try:
            value = LeadStatus(status).value
        except ValueError:
            raise ValidationError(
                f"Unknown lead status: {status!r}",
                errors={"lead_status": [s.value for s in LeadStatus]},
            ) from None
        return await self._update_columns(
            quote_id, {"lead_status": value, "updated_by": updated_by}
        )

    async def update_notes(
        self,
        quote_id: int,
        fields: Mapping[str, Any],
    ) -> Optional[Quote]:
        """
        Update editable header columns.

        Only notes, internal notes, business name, phone, close date and
        updated_by may change; prices and line items are immutable.

        Raises:
            ValidationError: If ``fields`` names any other column
        """
        rejected = sorted(set(fields) - QuoteConstants.EDITABLE_FIELDS)
        if rejected:
            raise ValidationError(
                "These quote fields cannot be edited",
                errors={"fields": rejected},
            )
        return await self._update_columns(quote_id, dict(fields))

    async def _update_columns(
        self,
        quote_id: int,
        values: Mapping[str, Any],
    ) -> Optional[Quote]:
        values = {k: v for k, v in values.items() if k != "updated_by" or v is not None}
        values["updated_at"] = utc_now_iso()

        assignments = ", ".join(
            f"{column} = ${i}" for i, column in enumerate(values, start=1)
        )
        await self._db.query(
            f"UPDATE {QUOTES} SET {assignments} WHERE id = ${len(values) + 1}",
            [*values.values(), quote_id],
        )
        return await self.get_quote(quote_id)

    # ==========================================================================
    # DELETE
    # ==========================================================================

    async def delete_quote(self, quote_id: int) -> bool:
        """
        Delete a quote; its line items go with it through the cascade.

        Returns:
            True if a quote was deleted
        """
        async with self._db.transaction() as tx:
            existing = await tx.query_one(
                f"SELECT id FROM {QUOTES} WHERE id = $1", [quote_id]
            )
            if existing is None:
                return False
            await tx.query(f"DELETE FROM {QUOTES} WHERE id = $1", [quote_id])

        logger.info(f"Deleted quote {quote_id}")
        return True
