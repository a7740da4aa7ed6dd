# ==============================================================================
# QUOTE MODELS - Saved Estimates
# ==============================================================================
# Quote header plus snapshot line items
# ==============================================================================

from __future__ import annotations

from typing import Optional

from sqlalchemy import Double, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from quotecalc.core.constants import QuoteConstants
from quotecalc.domain_models.base import SQLBase, TimestampMixin


class Quote(SQLBase, TimestampMixin):
    """
    Saved estimate for one client.

    ``total_price`` is fixed at creation. Later edits touch only the
    lead status and the free-text/contact columns.

    Relationships:
        quote_features, quote_pages: owned line items, removed with the quote
    """

    __tablename__ = "quotes"

    project_type_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("project_types.id", ondelete="SET NULL"),
        nullable=True,
    )
    client_name: Mapped[str] = mapped_column(String(255), nullable=False)
    business_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    internal_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    lead_status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=QuoteConstants.DEFAULT_LEAD_STATUS,
        server_default=QuoteConstants.DEFAULT_LEAD_STATUS,
    )
    close_date: Mapped[Optional[str]] = mapped_column(String(40), nullable=True)
    total_price: Mapped[float] = mapped_column(Double, nullable=False)
    created_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    updated_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)


class QuoteFeature(SQLBase):
    """
    Feature line of a quote.

    ``price`` is the line amount computed when the quote was saved; it
    is never recomputed from the features table.
    """

    __tablename__ = "quote_features"

    quote_id: Mapped[int] = mapped_column(
        ForeignKey("quotes.id", ondelete="CASCADE"),
        nullable=False,
    )
    feature_id: Mapped[int] = mapped_column(
        ForeignKey("features.id"),
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    price: Mapped[float] = mapped_column(Double, nullable=False)


class QuotePage(SQLBase):
    """Page line of a quote, same snapshot rule as QuoteFeature."""

    __tablename__ = "quote_pages"

    quote_id: Mapped[int] = mapped_column(
        ForeignKey("quotes.id", ondelete="CASCADE"),
        nullable=False,
    )
    page_id: Mapped[int] = mapped_column(
        ForeignKey("pages.id"),
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    price: Mapped[float] = mapped_column(Double, nullable=False)
