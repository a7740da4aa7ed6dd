# ==============================================================================
# PRICING ENGINE TESTS
# ==============================================================================

import pytest

from quotecalc.core.exceptions import (
    IncompletePricingDefinitionError,
    InvalidBasePriceError,
    InvalidQuantityError,
)
from quotecalc.pricing.engine import (
    PricingEngine,
    calculate_estimate,
    price_feature,
    price_page,
)
from quotecalc.schemas.catalog import (
    Feature,
    FixedPricing,
    HourlyPricing,
    SelectedFeature,
    SelectedPage,
)


def fixed(feature_id=1, flat_price=500.0, quantity=1):
    return SelectedFeature(
        id=feature_id,
        name=f"Fixed {feature_id}",
        pricing_type="fixed",
        flat_price=flat_price,
        quantity=quantity,
    )


def hourly(feature_id=2, hourly_rate=150.0, estimated_hours=10.0, quantity=1):
    return SelectedFeature(
        id=feature_id,
        name=f"Hourly {feature_id}",
        pricing_type="hourly",
        hourly_rate=hourly_rate,
        estimated_hours=estimated_hours,
        quantity=quantity,
    )


def page(page_id=1, price_per_page=50.0, quantity=1):
    return SelectedPage(
        id=page_id,
        name=f"Page {page_id}",
        price_per_page=price_per_page,
        quantity=quantity,
    )


class TestFeaturePricingColumns:
    """Folding flat catalog columns into the pricing union."""

    def test_fixed_row_becomes_fixed_pricing(self):
        feature = Feature.model_validate(
            {"id": 1, "name": "Design", "pricing_type": "fixed", "flat_price": 500}
        )
        assert isinstance(feature.pricing, FixedPricing)
        assert feature.pricing.flat_price == 500.0

    def test_hourly_row_becomes_hourly_pricing(self):
        feature = Feature.model_validate({
            "id": 2, "name": "Dev", "pricing_type": "hourly",
            "hourly_rate": 150, "estimated_hours": 10, "flat_price": 999,
        })
        assert isinstance(feature.pricing, HourlyPricing)
        assert feature.pricing.hourly_rate == 150.0
        assert feature.pricing.estimated_hours == 10.0

    def test_legacy_flat_spelling_is_fixed(self):
        feature = Feature.model_validate(
            {"id": 3, "pricing_type": "FLAT", "flat_price": 120}
        )
        assert feature.pricing_type == "fixed"
        assert isinstance(feature.pricing, FixedPricing)

    def test_missing_columns_are_recorded(self):
        feature = Feature.model_validate(
            {"id": 4, "pricing_type": "hourly", "hourly_rate": 150}
        )
        assert feature.pricing is None
        assert feature.missing_pricing_fields == ["estimated_hours"]

    def test_mysql_tinyint_flags_decode(self):
        feature = Feature.model_validate({
            "id": 5, "pricing_type": "fixed", "flat_price": 10,
            "supports_quantity": 1, "for_all_project_types": 0,
        })
        assert feature.supports_quantity is True
        assert feature.for_all_project_types is False


class TestLinePricing:
    """Single feature and page lines."""

    def test_fixed_feature_times_quantity(self):
        line = price_feature(fixed(flat_price=500.0, quantity=2))
        assert line.price == 1000.0
        assert line.quantity == 2

    def test_hourly_feature(self):
        line = price_feature(hourly(hourly_rate=150.0, estimated_hours=10.0))
        assert line.price == 1500.0

    def test_hourly_feature_with_zero_hours_is_allowed(self):
        line = price_feature(hourly(estimated_hours=0.0))
        assert line.price == 0.0

    def test_page_times_quantity(self):
        line = price_page(page(price_per_page=50.0, quantity=4))
        assert line.price == 200.0
        assert line.page_id == 1

    def test_fixed_feature_without_flat_price(self):
        feature = SelectedFeature(id=9, pricing_type="fixed")
        with pytest.raises(IncompletePricingDefinitionError) as exc_info:
            price_feature(feature)
        assert exc_info.value.errors["missing_fields"] == ["flat_price"]
        assert exc_info.value.error_code == "INCOMPLETE_PRICING_DEFINITION"

    def test_hourly_feature_without_hours(self):
        feature = SelectedFeature(id=9, pricing_type="hourly", hourly_rate=150)
        with pytest.raises(IncompletePricingDefinitionError):
            price_feature(feature)

    def test_unknown_pricing_type(self):
        feature = SelectedFeature(id=9, pricing_type="per_word", flat_price=10)
        with pytest.raises(IncompletePricingDefinitionError) as exc_info:
            price_feature(feature)
        assert exc_info.value.errors["pricing_type"] == "per_word"

    def test_page_without_price(self):
        with pytest.raises(IncompletePricingDefinitionError):
            price_page(SelectedPage(id=3, price_per_page=None))

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_feature_quantity_below_one(self, quantity):
        with pytest.raises(InvalidQuantityError) as exc_info:
            price_feature(fixed(quantity=quantity))
        assert exc_info.value.status_code == 422

    def test_page_quantity_below_one(self):
        with pytest.raises(InvalidQuantityError):
            price_page(page(quantity=0))


class TestCalculateEstimate:
    """Totals across a whole selection."""

    def test_empty_selection_is_base_price(self):
        estimate = calculate_estimate(2000.0)
        assert estimate.total_price == 2000.0
        assert estimate.feature_lines == []
        assert estimate.page_lines == []

    def test_full_selection_total(self):
        estimate = calculate_estimate(
            2000.0,
            [fixed(flat_price=500.0), hourly(hourly_rate=100.0, estimated_hours=5.0, quantity=2)],
            [page(price_per_page=50.0, quantity=4)],
        )
        assert estimate.total_price == 3700.0
        assert [line.price for line in estimate.feature_lines] == [500.0, 1000.0]
        assert [line.price for line in estimate.page_lines] == [200.0]

    def test_lines_keep_input_order(self):
        estimate = calculate_estimate(0, [hourly(feature_id=7), fixed(feature_id=3)])
        assert [line.feature_id for line in estimate.feature_lines] == [7, 3]

    def test_reordering_does_not_change_total(self):
        features = [fixed(feature_id=1, flat_price=120.5), hourly(feature_id=2),
                    fixed(feature_id=3, flat_price=99.99, quantity=3)]
        pages = [page(page_id=1, quantity=2), page(page_id=2, price_per_page=75.0)]

        forward = calculate_estimate(1000.0, features, pages)
        backward = calculate_estimate(1000.0, features[::-1], pages[::-1])

        assert forward.total_price == pytest.approx(backward.total_price)

    def test_no_rounding(self):
        estimate = calculate_estimate(0.1, [fixed(flat_price=0.2)])
        assert estimate.total_price == 0.1 + 0.2

    def test_zero_base_price_is_valid(self):
        assert calculate_estimate(0).total_price == 0

    def test_negative_base_price(self):
        with pytest.raises(InvalidBasePriceError):
            calculate_estimate(-1.0, [fixed()])

    def test_invalid_line_means_no_total(self):
        with pytest.raises(InvalidQuantityError):
            calculate_estimate(2000.0, [fixed()], [page(quantity=0)])

    def test_engine_facade(self):
        engine = PricingEngine()
        estimate = engine.calculate(100.0, [fixed(flat_price=50.0)], [page()])
        assert estimate.total_price == 200.0
        assert engine.price_feature(fixed(flat_price=5.0, quantity=3)).price == 15.0
        assert engine.price_page(page(price_per_page=10.0)).price == 10.0
