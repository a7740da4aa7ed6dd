# ==============================================================================
# ESTIMATE SCHEMAS - Pricing Engine Output
# ==============================================================================

from __future__ import annotations

from typing import List

from pydantic import Field

from quotecalc.schemas.base import BaseSchema


class FeatureLine(BaseSchema):
    """Priced feature selection; ``price`` is the snapshot stored with a quote."""

    feature_id: int
    quantity: int
    price: float


class PageLine(BaseSchema):
    """Priced page selection."""

    page_id: int
    quantity: int
    price: float


class Estimate(BaseSchema):
    """
    Result of a pricing run.

    Line order matches the order of the selections passed in.
    """

    total_price: float
    feature_lines: List[FeatureLine] = Field(default_factory=list)
    page_lines: List[PageLine] = Field(default_factory=list)
