"""
Base Model Module
Defines the declarative base and common mixins for all models.
"""

import re
import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    declared_attr,
    mapped_column,
)

# JSONB on PostgreSQL, plain JSON elsewhere (e.g. SQLite in tests)
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Features:
        - Automatic table name generation from class name
        - Common __repr__ method
        - Type annotations support
    """

    @declared_attr.directive
    def __tablename__(cls) -> str:
        """
        Generate table name from class name.
        Converts CamelCase to snake_case and pluralizes.

        Examples:
            Order -> orders
            PurchaseOrder -> purchase_orders
            Product -> products
        """
        name = re.sub(r"(?<!^)(?=[A-Z])", "_", cls.__name__).lower()

        if name.endswith("ics") or name.endswith("sis"):
            return name
        elif name.endswith("s") or name.endswith("x") or name.endswith("ch") or name.endswith("sh"):
            return name + "es"
        elif name.endswith("y") and name[-2] not in "aeiou":
            return name[:-1] + "ies"
        else:
            return name + "s"

    def __repr__(self) -> str:
        """Generate a readable string representation."""
        class_name = self.__class__.__name__
        attrs = []

        if hasattr(self, "id"):
            attrs.append(f"id={self.id}")

        for attr in ["tenant_id", "name", "status"]:
            if hasattr(self, attr):
                value = getattr(self, attr)
                if value is not None:
                    attrs.append(f"{attr}={value!r}")

        return f"<{class_name}({', '.join(attrs)})>"


class TimestampMixin:
    """
    Mixin that adds created_at and updated_at timestamps.

    Usage:
        class Order(Base, DocumentMixin, TimestampMixin):
            ...
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class DocumentMixin:
    """
    Mixin for tenant-scoped business documents.

    Document ids are opaque strings assigned by the producing application;
    a random hex id is generated when none is supplied. Every query must
    filter by tenant_id.
    """

    id: Mapped[str] = mapped_column(
        String(64),
        primary_key=True,
        default=lambda: uuid.uuid4().hex,
    )

    tenant_id: Mapped[str] = mapped_column(
        String(64),
        index=True,
        nullable=False,
    )
