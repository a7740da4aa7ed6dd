# ==============================================================================
# CATALOG MODELS - Project Types, Features, Pages
# ==============================================================================
# Administrator-maintained pricing inputs
# ==============================================================================

from __future__ import annotations

from typing import Optional

from sqlalchemy import (
    Boolean,
    Double,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    false,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column

from quotecalc.domain_models.base import SQLBase


class ProjectType(SQLBase):
    """
    Kind of project being estimated (new site, redesign, ...).

    ``base_price`` is the starting amount every quote of this type
    carries before features and pages are added.
    """

    __tablename__ = "project_types"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    base_price: Mapped[float] = mapped_column(
        Double, nullable=False, default=0, server_default="0"
    )
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class Feature(SQLBase):
    """
    Priced add-on.

    ``pricing_type`` decides which price columns are meaningful:
    ``fixed`` uses ``flat_price``; ``hourly`` uses ``hourly_rate``
    times ``estimated_hours``.

    Attributes:
        project_type_id: Legacy single association, optional
        for_all_project_types: Offered regardless of project type
    """

    __tablename__ = "features"

    project_type_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("project_types.id", ondelete="SET NULL"),
        nullable=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, default="")
    pricing_type: Mapped[str] = mapped_column(String(50), nullable=False)
    flat_price: Mapped[Optional[float]] = mapped_column(Double, nullable=True)
    hourly_rate: Mapped[Optional[float]] = mapped_column(Double, nullable=True)
    estimated_hours: Mapped[Optional[float]] = mapped_column(Double, nullable=True)
    supports_quantity: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    for_all_project_types: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )


class FeatureProjectType(SQLBase):
    """Many-to-many link between features and project types."""

    __tablename__ = "feature_project_types"
    __table_args__ = (
        UniqueConstraint("feature_id", "project_type_id"),
    )

    feature_id: Mapped[int] = mapped_column(
        ForeignKey("features.id", ondelete="CASCADE"),
        nullable=False,
    )
    project_type_id: Mapped[int] = mapped_column(
        ForeignKey("project_types.id", ondelete="CASCADE"),
        nullable=False,
    )


class Page(SQLBase):
    """Priced page, billed per page."""

    __tablename__ = "pages"

    project_type_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("project_types.id", ondelete="SET NULL"),
        nullable=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    price_per_page: Mapped[Optional[float]] = mapped_column(Double, nullable=True)
    default_quantity: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1, server_default="1"
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )
    supports_quantity: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )
