# ==============================================================================
# PRICING ENGINE - Estimate Computation
# ==============================================================================
# Pure computation: base price + feature lines + page lines
# No I/O, no rounding; callers format currency for display
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, Sequence

from quotecalc.core.constants import PricingConstants
from quotecalc.core.exceptions import (
    IncompletePricingDefinitionError,
    InvalidBasePriceError,
    InvalidQuantityError,
)
from quotecalc.schemas.catalog import (
    FixedPricing,
    HourlyPricing,
    SelectedFeature,
    SelectedPage,
)
from quotecalc.schemas.estimate import Estimate, FeatureLine, PageLine

logger = logging.getLogger(__name__)


def _check_quantity(item_type: str, item_id: Any, quantity: Any) -> int:
    # bool is an int subclass; True must not pass as a quantity of 1
    if (
        isinstance(quantity, bool)
        or not isinstance(quantity, int)
        or quantity < PricingConstants.MIN_QUANTITY
    ):
        raise InvalidQuantityError(item_type, item_id, quantity)
    return quantity


def price_feature(feature: SelectedFeature) -> FeatureLine:
    """
    Price one selected feature.

    Args:
        feature: Feature with its chosen quantity

    Returns:
        FeatureLine with the line amount

    Raises:
        InvalidQuantityError: quantity below one
        IncompletePricingDefinitionError: the feature's pricing columns
            do not cover its pricing type
    """
    quantity = _check_quantity("feature", feature.id, feature.quantity)
    pricing = feature.pricing

    if pricing is None:
        raise IncompletePricingDefinitionError(
            "feature",
            feature.id,
            missing_fields=feature.missing_pricing_fields,
            pricing_type=feature.pricing_type,
        )

    if isinstance(pricing, FixedPricing):
        price = pricing.flat_price * quantity
    elif isinstance(pricing, HourlyPricing):
        price = pricing.hourly_rate * pricing.estimated_hours * quantity
    else:
        raise IncompletePricingDefinitionError(
            "feature", feature.id, pricing_type=feature.pricing_type
        )

    return FeatureLine(feature_id=feature.id, quantity=quantity, price=price)


def price_page(page: SelectedPage) -> PageLine:
    """
    Price one selected page.

    Raises:
        InvalidQuantityError: quantity below one
        IncompletePricingDefinitionError: ``price_per_page`` missing
    """
    quantity = _check_quantity("page", page.id, page.quantity)
    if page.price_per_page is None:
        raise IncompletePricingDefinitionError(
            "page", page.id, missing_fields=["price_per_page"]
        )
    return PageLine(
        page_id=page.id,
        quantity=quantity,
        price=page.price_per_page * quantity,
    )


def calculate_estimate(
    base_price: float,
    selected_features: Sequence[SelectedFeature] = (),
    selected_pages: Sequence[SelectedPage] = (),
) -> Estimate:
    """
    Compute the total and the per-line amounts of an estimate.

    Every line is validated before the total is formed, so an invalid
    selection raises instead of producing a partial total.

    Args:
        base_price: Project type base price, zero or greater
        selected_features: Features with quantities, in display order
        selected_pages: Pages with quantities, in display order

    Returns:
        Estimate with ``total_price`` and lines in input order

    Raises:
        InvalidBasePriceError: negative base price
        InvalidQuantityError: any quantity below one
        IncompletePricingDefinitionError: any catalog row missing the
            price fields its pricing type requires

    Example:
        >>> estimate = calculate_estimate(2000, features, pages)
        >>> estimate.total_price
        3700.0
    """
    if base_price is None or base_price < 0:
        raise InvalidBasePriceError(base_price)

    feature_lines = [price_feature(f) for f in selected_features]
    page_lines = [price_page(p) for p in selected_pages]

    total = base_price
    for line in feature_lines:
        total += line.price
    for line in page_lines:
        total += line.price

    logger.debug(
        f"Estimated {total} from base {base_price}, "
        f"{len(feature_lines)} feature line(s), {len(page_lines)} page line(s)"
    )

    return Estimate(
        total_price=total,
        feature_lines=feature_lines,
        page_lines=page_lines,
    )


class PricingEngine:
    """
    Stateless facade over the pricing functions.

    Held by services that want an injectable collaborator; all state
    lives in the arguments.

    Example:
        >>> engine = PricingEngine()
        >>> engine.calculate(project_type.base_price, features, pages)
    """

    def calculate(
        self,
        base_price: float,
        selected_features: Sequence[SelectedFeature] = (),
        selected_pages: Sequence[SelectedPage] = (),
    ) -> Estimate:
        return calculate_estimate(base_price, selected_features, selected_pages)

    def price_feature(self, feature: SelectedFeature) -> FeatureLine:
        return price_feature(feature)

    def price_page(self, page: SelectedPage) -> PageLine:
        return price_page(page)
