"""
Invoice Model
Sales invoices issued to customers.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import DateTime, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from bizpulse.database.base import Base, DocumentMixin, TimestampMixin


class Invoice(Base, DocumentMixin, TimestampMixin):
    """
    Sales invoice.

    Attributes:
        id: Document id
        tenant_id: Owning tenant
        invoice_number: Human-facing invoice reference
        customer_name: Billed customer
        date: Issue date (drives receivables aging)
        due_date: Payment due date
        status: Draft, Sent, Paid, Overdue, ...
        subtotal: Amount before tax
        tax: Tax amount
        total: Invoice total in base currency
    """

    invoice_number: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    customer_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    due_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default="Draft",
    )

    subtotal: Mapped[Optional[Decimal]] = mapped_column(Numeric(14, 2), nullable=True)

    tax: Mapped[Optional[Decimal]] = mapped_column(Numeric(14, 2), nullable=True)

    total: Mapped[Optional[Decimal]] = mapped_column(Numeric(14, 2), nullable=True)

    __table_args__ = (
        Index("ix_invoices_tenant_id_status", "tenant_id", "status"),
    )

    def to_document(self) -> dict[str, Any]:
        """Document representation consumed by the analytics mappers."""
        return {
            "id": self.id,
            "tenantId": self.tenant_id,
            "date": self.date,
            "status": self.status,
            "total": self.total,
            "tax": self.tax,
        }
