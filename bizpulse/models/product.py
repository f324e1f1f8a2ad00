"""
Product Model
Catalog products with nested inventory and pricing documents.
"""

from typing import Any, Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from bizpulse.database.base import Base, DocumentMixin, JSONDocument, TimestampMixin


class Product(Base, DocumentMixin, TimestampMixin):
    """
    Catalog product.

    Inventory and pricing are stored as nested documents, exactly as the
    producing application writes them:

        inventory: {"stock", "minStockLevel", "reorderQuantity", "status"}
        pricing:   {"costPrice", "sellingPrice", "taxPercentage"}

    Either document may be missing or partial; defaults are applied when
    records are mapped for analytics.
    """

    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    category: Mapped[Optional[str]] = mapped_column(String(128), nullable=True)

    sku: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    supplier_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    inventory: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSONDocument,
        nullable=True,
        default=None,
        comment="Stock position: stock, minStockLevel, reorderQuantity, status",
    )

    pricing: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSONDocument,
        nullable=True,
        default=None,
        comment="Pricing: costPrice, sellingPrice, taxPercentage",
    )

    def to_document(self) -> dict[str, Any]:
        """Document representation consumed by the analytics mappers."""
        return {
            "id": self.id,
            "tenantId": self.tenant_id,
            "name": self.name,
            "category": self.category,
            "sku": self.sku,
            "supplierId": self.supplier_id,
            "inventory": self.inventory,
            "pricing": self.pricing,
        }
