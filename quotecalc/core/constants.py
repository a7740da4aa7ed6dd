# ==============================================================================
# APPLICATION CONSTANTS - Centralized Configuration Values
# ==============================================================================
# Immutable constants used throughout the application
# ==============================================================================

from __future__ import annotations

from enum import Enum
from typing import Final


class LeadStatus(str, Enum):
    """Sales pipeline state of a quote."""
    IN_PROGRESS = "In Progress"
    PROPOSAL_SENT = "Proposal Sent"
    WON = "Won"
    LOST = "Lost"
    ON_HOLD = "On Hold"


class PricingType(str, Enum):
    """How a feature's line amount is derived."""
    FIXED = "fixed"
    HOURLY = "hourly"


# ==============================================================================
# DATABASE CONSTANTS
# ==============================================================================

class DatabaseConstants:
    """Database-related constants."""

    # Table names
    PROJECT_TYPES_TABLE: Final[str] = "project_types"
    FEATURES_TABLE: Final[str] = "features"
    FEATURE_PROJECT_TYPES_TABLE: Final[str] = "feature_project_types"
    PAGES_TABLE: Final[str] = "pages"
    QUOTES_TABLE: Final[str] = "quotes"
    QUOTE_FEATURES_TABLE: Final[str] = "quote_features"
    QUOTE_PAGES_TABLE: Final[str] = "quote_pages"

    # Connection pool
    MIN_POOL_SIZE: Final[int] = 1
    HEALTH_CHECK_QUERY: Final[str] = "SELECT 1"


# ==============================================================================
# PRICING CONSTANTS
# ==============================================================================

class PricingConstants:
    """Pricing-related constants."""

    MIN_QUANTITY: Final[int] = 1
    # Older catalogs wrote "flat" for fixed-price features
    PRICING_TYPE_ALIASES: Final[dict] = {"flat": PricingType.FIXED.value}


# ==============================================================================
# QUOTE CONSTANTS
# ==============================================================================

class QuoteConstants:
    """Quote-related constants."""

    DEFAULT_LEAD_STATUS: Final[str] = LeadStatus.IN_PROGRESS.value

    # Header columns that may change after a quote is created
    EDITABLE_FIELDS: Final[frozenset] = frozenset({
        "notes",
        "internal_notes",
        "business_name",
        "phone",
        "close_date",
        "updated_by",
    })


# ==============================================================================
# DEMO DATA
# ==============================================================================

class DemoData:
    """Catalog rows added by the installer when demo data is requested."""

    PROJECT_TYPES: Final[tuple] = (
        {"name": "New Website", "base_price": 1000.0,
         "description": "Brand new website development"},
        {"name": "Existing Website Redesign", "base_price": 750.0,
         "description": "Redesign of an existing website"},
    )

    PAGES: Final[tuple] = (
        {"name": "Home Page", "description": "Main landing page",
         "price_per_page": 250.0, "default_quantity": 1,
         "supports_quantity": False, "is_active": True},
        {"name": "Standard Page", "description": "Regular content page",
         "price_per_page": 200.0, "default_quantity": 1,
         "supports_quantity": True, "is_active": True},
    )

    FEATURES: Final[tuple] = (
        {"name": "Custom Design", "description": "Unique design tailored to your brand",
         "category": "Design", "pricing_type": "fixed", "flat_price": 500.0,
         "supports_quantity": False, "for_all_project_types": True},
        {"name": "Contact Form", "description": "Form for visitors to reach you",
         "category": "Functionality", "pricing_type": "fixed", "flat_price": 150.0,
         "supports_quantity": True, "for_all_project_types": True},
        {"name": "Custom Development", "description": "Custom programming for specific needs",
         "category": "Development", "pricing_type": "hourly", "hourly_rate": 75.0,
         "estimated_hours": 10.0, "supports_quantity": True,
         "for_all_project_types": True},
    )
