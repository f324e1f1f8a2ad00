"""
Cash flow analysis: receivables, payables, aging buckets and cash risk.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable

from bizpulse.analytics.types import (
    CashFlowInsights,
    CashRiskLevel,
    Invoice,
    INVOICE_STATUS_OVERDUE,
    INVOICE_STATUS_PAID,
    INVOICE_STATUS_SENT,
    PO_STATUS_CONFIRMED,
    PO_STATUS_PENDING,
    PurchaseOrder,
)
from bizpulse.analytics.utils import ensure_utc, format_thousands

logger = logging.getLogger(__name__)

RECEIVABLE_STATUSES = frozenset({INVOICE_STATUS_SENT, INVOICE_STATUS_OVERDUE})
PAYABLE_STATUSES = frozenset({PO_STATUS_PENDING, PO_STATUS_CONFIRMED})


@dataclass(frozen=True)
class AgingBuckets:
    """Open receivables split by invoice age."""
    days_0_to_30: float = 0.0
    days_30_to_60: float = 0.0
    days_60_plus: float = 0.0

    @property
    def total(self) -> float:
        return self.days_0_to_30 + self.days_30_to_60 + self.days_60_plus


class CashFlowAnalyzer:
    """
    Calculates receivables/payables position and cash risk.

    Receivables are invoices that are Sent or Overdue; payables are purchase
    orders that are Pending or Confirmed.
    """

    # Profit margin stand-in until cost of goods sold is tracked
    PLACEHOLDER_PROFIT_MARGIN = 18.0

    PAYABLES_PRESSURE_RATIO = 0.8
    OVERDUE_ALERT_RATIO = 0.3

    @staticmethod
    def open_receivables(invoices: Iterable[Invoice]) -> list[Invoice]:
        return [invoice for invoice in invoices if invoice.status in RECEIVABLE_STATUSES]

    @staticmethod
    def calculate_total_payables(purchase_orders: Iterable[PurchaseOrder]) -> float:
        return float(sum(
            po.total_amount for po in purchase_orders if po.status in PAYABLE_STATUSES
        ))

    @staticmethod
    def days_outstanding(invoice: Invoice, now: datetime) -> int:
        """
        Whole days since the invoice date, floored.

        Undated invoices count as issued today.
        """
        if invoice.date is None:
            return 0
        return (now - invoice.date) // timedelta(days=1)

    @staticmethod
    def calculate_aging(receivables: Iterable[Invoice], now: datetime) -> AgingBuckets:
        """
        Bucket open receivables into 0-30, 31-60 and 60+ days.

        Every invoice lands in exactly one bucket.
        """
        days_0_to_30 = Decimal("0")
        days_30_to_60 = Decimal("0")
        days_60_plus = Decimal("0")

        for invoice in receivables:
            amount = Decimal(str(invoice.total))
            days_old = CashFlowAnalyzer.days_outstanding(invoice, now)
            if days_old <= 30:
                days_0_to_30 += amount
            elif days_old <= 60:
                days_30_to_60 += amount
            else:
                days_60_plus += amount

        return AgingBuckets(
            days_0_to_30=float(days_0_to_30),
            days_30_to_60=float(days_30_to_60),
            days_60_plus=float(days_60_plus),
        )

    @staticmethod
    def calculate_forecast(total_receivables: float, total_payables: float) -> float:
        return float(Decimal(str(total_receivables)) - Decimal(str(total_payables)))

    @staticmethod
    def calculate_profit_margin(invoices: Iterable[Invoice]) -> float:
        """
        Simplified profit margin.

        Returns the placeholder margin when any paid invoice revenue exists,
        otherwise 0.
        """
        paid_revenue = sum(
            invoice.total for invoice in invoices if invoice.status == INVOICE_STATUS_PAID
        )
        if paid_revenue > 0:
            return CashFlowAnalyzer.PLACEHOLDER_PROFIT_MARGIN
        return 0.0

    @staticmethod
    def classify_risk(
        cash_flow_forecast: float,
        total_receivables: float,
        total_payables: float,
    ) -> CashRiskLevel:
        if cash_flow_forecast < 0:
            return CashRiskLevel.HIGH
        if total_payables > total_receivables * CashFlowAnalyzer.PAYABLES_PRESSURE_RATIO:
            return CashRiskLevel.MEDIUM
        return CashRiskLevel.LOW

    @staticmethod
    def generate_alert(
        risk_level: CashRiskLevel,
        aging_60_plus: float,
        total_receivables: float,
    ) -> str:
        if risk_level == CashRiskLevel.HIGH:
            return "Cash flow may go negative soon. Follow up on receivables urgently."
        if aging_60_plus > total_receivables * CashFlowAnalyzer.OVERDUE_ALERT_RATIO:
            return f"{format_thousands(aging_60_plus)} in receivables are overdue by 60+ days."
        return "Cash flow is healthy. Keep monitoring receivables."

    @staticmethod
    def calculate(
        invoices: Iterable[Invoice],
        purchase_orders: Iterable[PurchaseOrder],
        now: datetime,
    ) -> CashFlowInsights:
        """
        Calculate all cash flow insights.

        Args:
            invoices: Tenant invoices
            purchase_orders: Tenant purchase orders
            now: Reference time for invoice aging

        Returns:
            CashFlowInsights
        """
        now = ensure_utc(now)
        invoices = list(invoices)

        receivables = CashFlowAnalyzer.open_receivables(invoices)
        aging = CashFlowAnalyzer.calculate_aging(receivables, now)
        # Reported buckets must add up to the receivables figure exactly
        total_receivables = aging.total
        total_payables = CashFlowAnalyzer.calculate_total_payables(purchase_orders)

        forecast = CashFlowAnalyzer.calculate_forecast(total_receivables, total_payables)
        risk_level = CashFlowAnalyzer.classify_risk(forecast, total_receivables, total_payables)

        logger.debug(
            "Cash flow: receivables=%.2f payables=%.2f forecast=%.2f risk=%s",
            total_receivables,
            total_payables,
            forecast,
            risk_level.value,
        )

        return CashFlowInsights(
            total_payables=total_payables,
            total_receivables=total_receivables,
            aging_0_to_30=aging.days_0_to_30,
            aging_30_to_60=aging.days_30_to_60,
            aging_60_plus=aging.days_60_plus,
            cash_flow_forecast=forecast,
            profit_margin=CashFlowAnalyzer.calculate_profit_margin(invoices),
            cash_risk_level=risk_level,
            smart_alert=CashFlowAnalyzer.generate_alert(
                risk_level, aging.days_60_plus, total_receivables
            ),
        )
