"""
Tests for cash flow analysis.
"""

from datetime import timedelta

import pytest

from bizpulse.analytics.cash_flow_analyzer import CashFlowAnalyzer
from bizpulse.analytics.types import CashRiskLevel, Invoice
from tests.factories import (
    make_invoice,
    make_purchase_order,
    invoices,
    purchase_orders,
)


def test_overdue_invoice_scenario(now):
    result = CashFlowAnalyzer.calculate(
        invoices(make_invoice("i1", days_old=75, total=5000, status="Overdue")),
        (),
        now,
    )

    assert result.aging_60_plus == 5000
    assert result.aging_0_to_30 == 0
    assert result.aging_30_to_60 == 0
    assert result.total_receivables == 5000


def test_empty_inputs_are_low_risk(now):
    result = CashFlowAnalyzer.calculate((), (), now)

    assert result.total_receivables == 0
    assert result.total_payables == 0
    assert result.cash_flow_forecast == 0
    assert result.cash_risk_level == CashRiskLevel.LOW
    assert result.profit_margin == 0
    assert result.smart_alert == "Cash flow is healthy. Keep monitoring receivables."


def test_only_open_invoices_and_pos_count(now):
    result = CashFlowAnalyzer.calculate(
        invoices(
            make_invoice("sent", 5, 1000, status="Sent"),
            make_invoice("overdue", 40, 2000, status="Overdue"),
            make_invoice("paid", 5, 7000, status="Paid"),
            make_invoice("draft", 5, 9000, status="Draft"),
        ),
        purchase_orders(
            make_purchase_order("pending", 300, status="Pending"),
            make_purchase_order("confirmed", 200, status="Confirmed"),
            make_purchase_order("received", 5000, status="Received"),
        ),
        now,
    )

    assert result.total_receivables == 3000
    assert result.total_payables == 500
    assert result.cash_flow_forecast == 2500
    assert result.profit_margin == 18


@pytest.mark.parametrize(
    "days_old, bucket",
    [
        (0, "aging_0_to_30"),
        (30, "aging_0_to_30"),
        (31, "aging_30_to_60"),
        (60, "aging_30_to_60"),
        (61, "aging_60_plus"),
    ],
)
def test_aging_bucket_edges(now, days_old, bucket):
    result = CashFlowAnalyzer.calculate(
        invoices(make_invoice("i1", days_old, 100)),
        (),
        now,
    )

    assert getattr(result, bucket) == 100


def test_partial_days_are_floored(now):
    invoice = Invoice(
        id="i1",
        tenant_id="tenant-1",
        date=now - timedelta(days=30, hours=23),
        status="Sent",
        total=100,
    )

    assert CashFlowAnalyzer.days_outstanding(invoice, now) == 30


def test_buckets_sum_to_receivables(now):
    result = CashFlowAnalyzer.calculate(
        invoices(
            make_invoice("a", 1, 1250.5),
            make_invoice("b", 33, 800),
            make_invoice("c", 90, 4000, status="Overdue"),
            make_invoice("d", -3, 600),
            {"id": "undated", "tenantId": "tenant-1", "status": "Sent", "total": 75},
        ),
        (),
        now,
    )

    assert result.aging_0_to_30 + result.aging_30_to_60 + result.aging_60_plus == result.total_receivables
    assert result.aging_0_to_30 == pytest.approx(1250.5 + 600 + 75)


def test_fractional_amounts_sum_exactly(now):
    result = CashFlowAnalyzer.calculate(
        invoices(
            make_invoice("a", 1, 0.1),
            make_invoice("b", 40, 0.2),
            make_invoice("c", 2, 2.675),
        ),
        (),
        now,
    )

    assert result.aging_0_to_30 == 2.775
    assert result.aging_30_to_60 == 0.2
    assert result.aging_0_to_30 + result.aging_30_to_60 + result.aging_60_plus == result.total_receivables


class TestRiskLevel:
    def test_negative_forecast_is_high(self, now):
        result = CashFlowAnalyzer.calculate(
            invoices(make_invoice("i1", 5, 1000)),
            purchase_orders(make_purchase_order("p1", 1500)),
            now,
        )

        assert result.cash_flow_forecast == -500
        assert result.cash_risk_level == CashRiskLevel.HIGH
        assert result.smart_alert == "Cash flow may go negative soon. Follow up on receivables urgently."

    def test_heavy_payables_are_medium(self, now):
        result = CashFlowAnalyzer.calculate(
            invoices(make_invoice("i1", 5, 1000)),
            purchase_orders(make_purchase_order("p1", 850)),
            now,
        )

        assert result.cash_risk_level == CashRiskLevel.MEDIUM

    def test_payables_at_threshold_are_low(self, now):
        result = CashFlowAnalyzer.calculate(
            invoices(make_invoice("i1", 5, 1000)),
            purchase_orders(make_purchase_order("p1", 800)),
            now,
        )

        assert result.cash_risk_level == CashRiskLevel.LOW

    def test_payables_only_is_high(self, now):
        result = CashFlowAnalyzer.calculate(
            (),
            purchase_orders(make_purchase_order("p1", 1)),
            now,
        )

        assert result.cash_risk_level == CashRiskLevel.HIGH


def test_overdue_alert(now):
    result = CashFlowAnalyzer.calculate(
        invoices(
            make_invoice("old", 70, 4000, status="Overdue"),
            make_invoice("new", 3, 6000),
        ),
        (),
        now,
    )

    assert result.cash_risk_level == CashRiskLevel.LOW
    assert result.smart_alert == "₹4.0K in receivables are overdue by 60+ days."
