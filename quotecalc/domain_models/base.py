# ==============================================================================
# BASE MODEL - SQLAlchemy Foundation
# ==============================================================================
# Declarative base shared by the catalog and quote tables
# The models define the schema; reads and writes go through the adapters
# ==============================================================================

from __future__ import annotations

from sqlalchemy import Integer, MetaData, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Naming convention for constraints (stable names across backends)
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)


class SQLBase(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Provides:
    - Integer autoincrement primary key (SERIAL / AUTO_INCREMENT)
    - Readable repr

    Example:
        >>> class ProjectType(SQLBase):
        ...     __tablename__ = "project_types"
        ...     name: Mapped[str] = mapped_column(String(255))
    """

    metadata = metadata

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    def __repr__(self) -> str:
        """Generate readable representation."""
        class_name = self.__class__.__name__
        return f"<{class_name}(id={self.id})>"


class TimestampMixin:
    """
    Mixin providing creation/update timestamps.

    Values are ISO-8601 UTC strings written by the repositories, which
    keeps them identical on PostgreSQL and MySQL.
    """

    created_at: Mapped[str] = mapped_column(
        String(40),
        nullable=False,
        default="",
    )

    updated_at: Mapped[str] = mapped_column(
        String(40),
        nullable=False,
        default="",
    )
