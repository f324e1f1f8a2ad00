"""
Purchase Order Model
Orders raised by the tenant against its suppliers.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import DateTime, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from bizpulse.database.base import Base, DocumentMixin, TimestampMixin


class PurchaseOrder(Base, DocumentMixin, TimestampMixin):
    """
    Purchase order.

    Attributes:
        id: Document id
        tenant_id: Owning tenant
        po_number: Human-facing reference (e.g. PO-1001)
        supplier_id: Supplier document id
        supplier_name: Supplier display name
        date: Order date
        expected_delivery_date: Promised delivery date
        status: Draft, Pending, Confirmed, Sent, Received, Cancelled, ...
        total_amount: Order total in base currency
    """

    po_number: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    supplier_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    supplier_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    expected_delivery_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default="Draft",
    )

    total_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(14, 2), nullable=True)

    __table_args__ = (
        Index("ix_purchase_orders_tenant_id_status", "tenant_id", "status"),
    )

    def to_document(self) -> dict[str, Any]:
        """Document representation consumed by the analytics mappers."""
        return {
            "id": self.id,
            "tenantId": self.tenant_id,
            "status": self.status,
            "totalAmount": self.total_amount,
            "supplierId": self.supplier_id,
            "supplierName": self.supplier_name,
        }
