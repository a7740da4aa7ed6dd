# ==============================================================================
# DOMAIN MODELS PACKAGE
# ==============================================================================
# SQLAlchemy table definitions; importing this package registers every
# table on SQLBase.metadata
# ==============================================================================

from quotecalc.domain_models.base import SQLBase, TimestampMixin, metadata
from quotecalc.domain_models.catalog import (
    Feature,
    FeatureProjectType,
    Page,
    ProjectType,
)
from quotecalc.domain_models.quote import Quote, QuoteFeature, QuotePage

__all__ = [
    "SQLBase",
    "TimestampMixin",
    "metadata",
    "ProjectType",
    "Feature",
    "FeatureProjectType",
    "Page",
    "Quote",
    "QuoteFeature",
    "QuotePage",
]
