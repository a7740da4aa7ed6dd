# ==============================================================================
# CATALOG SCHEMAS - Pricing Inputs
# ==============================================================================
# Project types, features and pages as read from the catalog tables,
# plus the quantity-carrying selections handed to the pricing engine
# ==============================================================================

from __future__ import annotations

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import Field, field_validator, model_validator

from quotecalc.core.constants import PricingConstants, PricingType
from quotecalc.schemas.base import BaseSchema
from quotecalc.utils.helpers import to_bool

# Price columns each pricing type needs
REQUIRED_PRICING_FIELDS = {
    PricingType.FIXED.value: ("flat_price",),
    PricingType.HOURLY.value: ("hourly_rate", "estimated_hours"),
}


def normalize_pricing_type(value: Any) -> str:
    """Lower-case the pricing type and map legacy spellings."""
    raw = str(value or "").strip().lower()
    return PricingConstants.PRICING_TYPE_ALIASES.get(raw, raw)


class ProjectType(BaseSchema):
    """Project type with its base price."""

    id: int
    name: str
    base_price: float = Field(..., description="Starting amount of every quote")
    description: Optional[str] = None


# ==============================================================================
# FEATURE PRICING
# ==============================================================================

class FixedPricing(BaseSchema):
    """Line amount is ``flat_price * quantity``."""

    pricing_type: Literal["fixed"] = "fixed"
    flat_price: float


class HourlyPricing(BaseSchema):
    """Line amount is ``hourly_rate * estimated_hours * quantity``."""

    pricing_type: Literal["hourly"] = "hourly"
    hourly_rate: float
    estimated_hours: float


FeaturePricing = Annotated[
    Union[FixedPricing, HourlyPricing],
    Field(discriminator="pricing_type"),
]


class Feature(BaseSchema):
    """
    Priced add-on.

    Catalog rows store pricing as flat nullable columns. On validation
    those columns are folded into ``pricing`` (a FixedPricing or an
    HourlyPricing). When a row lacks a column its pricing type needs,
    ``pricing`` stays ``None`` and the gap is listed in
    ``missing_pricing_fields`` so the engine can reject the row.

    Example:
        >>> f = Feature.model_validate(
        ...     {"id": 1, "name": "SEO", "pricing_type": "hourly",
        ...      "hourly_rate": 150, "estimated_hours": 10})
        >>> f.pricing
        HourlyPricing(pricing_type='hourly', hourly_rate=150.0, estimated_hours=10.0)
    """

    id: int
    name: str = ""
    description: Optional[str] = None
    category: Optional[str] = ""
    project_type_id: Optional[int] = None
    project_type_ids: List[int] = Field(default_factory=list)
    supports_quantity: bool = False
    for_all_project_types: bool = False
    pricing_type: str
    pricing: Optional[FeaturePricing] = None
    missing_pricing_fields: List[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def fold_pricing_columns(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        data = dict(data)
        pricing = data.get("pricing")
        if pricing is not None:
            declared = (
                pricing.get("pricing_type")
                if isinstance(pricing, dict)
                else getattr(pricing, "pricing_type", None)
            )
            data["pricing_type"] = normalize_pricing_type(declared)
            return data

        pricing_type = normalize_pricing_type(data.get("pricing_type"))
        data["pricing_type"] = pricing_type
        if data.get("missing_pricing_fields"):
            # Already folded, e.g. a dumped Feature
            return data

        required = REQUIRED_PRICING_FIELDS.get(pricing_type)
        if required is None:
            # Unknown type: nothing to fold, engine reports it
            return data

        missing = [name for name in required if data.get(name) is None]
        if missing:
            data["missing_pricing_fields"] = missing
        else:
            data["pricing"] = {
                "pricing_type": pricing_type,
                **{name: data[name] for name in required},
            }
        return data

    @field_validator("supports_quantity", "for_all_project_types", mode="before")
    @classmethod
    def decode_flag(cls, v: Any) -> bool:
        return False if v is None else to_bool(v)


class Page(BaseSchema):
    """Priced page; ``price_per_page`` of ``None`` marks an incomplete row."""

    id: int
    name: str = ""
    description: Optional[str] = None
    price_per_page: Optional[float] = None
    project_type_id: Optional[int] = None
    default_quantity: int = 1
    is_active: bool = True
    supports_quantity: bool = True

    @field_validator("is_active", "supports_quantity", mode="before")
    @classmethod
    def decode_flag(cls, v: Any) -> bool:
        return True if v is None else to_bool(v)

    @field_validator("default_quantity", mode="before")
    @classmethod
    def default_to_one(cls, v: Any) -> Any:
        return 1 if v is None else v


# ==============================================================================
# SELECTIONS
# ==============================================================================

class SelectedFeature(Feature):
    """A feature chosen for an estimate, with how many units."""

    quantity: int = 1


class SelectedPage(Page):
    """A page chosen for an estimate, with how many pages."""

    quantity: int = 1
