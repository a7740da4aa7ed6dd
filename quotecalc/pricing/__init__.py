"""Estimate computation."""

from quotecalc.pricing.engine import (
    PricingEngine,
    calculate_estimate,
    price_feature,
    price_page,
)

__all__ = [
    "PricingEngine",
    "calculate_estimate",
    "price_feature",
    "price_page",
]
