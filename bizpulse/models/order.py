"""
Order Model
Customer orders captured by the tenant's storefront or sales team.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import DateTime, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from bizpulse.database.base import Base, DocumentMixin, JSONDocument, TimestampMixin


class Order(Base, DocumentMixin, TimestampMixin):
    """
    Customer order.

    Attributes:
        id: Document id
        tenant_id: Owning tenant
        order_number: Human-facing order reference (e.g. ORD-1001)
        customer_name: Customer display name
        order_date: When the order was placed
        total_amount: Order total in base currency
        payment_status: Pending, Paid or Failed
        order_status: Fulfilment status
        items: Order lines as stored by the producing application (JSON)
    """

    order_number: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    customer_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    order_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    total_amount: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(14, 2),
        nullable=True,
    )

    payment_status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default="Pending",
    )

    order_status: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)

    items: Mapped[Optional[list[dict[str, Any]]]] = mapped_column(
        JSONDocument,
        nullable=True,
        default=None,
        comment="Order lines: itemId, name, quantity, total",
    )

    __table_args__ = (
        Index("ix_orders_tenant_id_order_date", "tenant_id", "order_date"),
    )

    def to_document(self) -> dict[str, Any]:
        """Document representation consumed by the analytics mappers."""
        return {
            "id": self.id,
            "tenantId": self.tenant_id,
            "orderDate": self.order_date,
            "totalAmount": self.total_amount,
            "paymentStatus": self.payment_status,
            "customerName": self.customer_name,
            "items": self.items or [],
        }
