"""
Tests for rule-based action recommendations.
"""

from dataclasses import replace

import pytest

from bizpulse.analytics.recommendations import generate_recommendations
from bizpulse.analytics.types import (
    CashFlowInsights,
    CashRiskLevel,
    InventoryInsights,
    Priority,
    RecommendationType,
)
from tests.factories import make_product, products

QUIET_INVENTORY = InventoryInsights(
    stock_turnover_ratio=4.5,
    days_inventory_outstanding=81,
    dead_stock=(),
    overstock_items=(),
    fast_moving_products=(),
    slow_moving_products=(),
    capital_blocked=0,
    smart_insight="",
)

QUIET_CASH_FLOW = CashFlowInsights(
    total_payables=0,
    total_receivables=0,
    aging_0_to_30=0,
    aging_30_to_60=0,
    aging_60_plus=0,
    cash_flow_forecast=0,
    profit_margin=0,
    cash_risk_level=CashRiskLevel.LOW,
    smart_alert="",
)


def test_no_rules_fire_for_quiet_business():
    assert generate_recommendations(QUIET_INVENTORY, QUIET_CASH_FLOW) == ()


def test_all_rules_fire_in_order():
    inventory = replace(
        QUIET_INVENTORY,
        fast_moving_products=products(
            make_product("a", stock=1, min_stock_level=5),
            make_product("b", stock=2, min_stock_level=5),
        ),
        capital_blocked=75_000,
    )
    cash_flow = replace(
        QUIET_CASH_FLOW,
        aging_60_plus=12_500,
        cash_risk_level=CashRiskLevel.HIGH,
    )

    recommendations = generate_recommendations(inventory, cash_flow)

    assert [r.title for r in recommendations] == [
        "Restock Fast-Moving Products",
        "Reduce Slow-Moving Inventory",
        "Follow Up on Overdue Payments",
        "Cash Flow Alert",
    ]
    assert [(r.type, r.priority) for r in recommendations] == [
        (RecommendationType.STOCK, Priority.HIGH),
        (RecommendationType.STOCK, Priority.MEDIUM),
        (RecommendationType.CASH_FLOW, Priority.HIGH),
        (RecommendationType.CASH_FLOW, Priority.HIGH),
    ]
    assert [r.action_url for r in recommendations] == [
        "/purchase-orders", "/products", "/invoices", "/payments",
    ]
    assert recommendations[0].description == "2 products are running low. Create purchase orders."
    assert recommendations[1].description == "₹75.0K blocked in slow stock. Consider promotions."
    assert recommendations[2].description == "₹12.5K overdue by 60+ days. Send reminders."


@pytest.mark.parametrize(
    "capital_blocked, fires",
    [(50_000, False), (50_000.01, True)],
)
def test_capital_blocked_threshold_is_strict(capital_blocked, fires):
    inventory = replace(QUIET_INVENTORY, capital_blocked=capital_blocked)

    titles = [r.title for r in generate_recommendations(inventory, QUIET_CASH_FLOW)]

    assert ("Reduce Slow-Moving Inventory" in titles) is fires


@pytest.mark.parametrize(
    "aging_60_plus, fires",
    [(10_000, False), (10_001, True)],
)
def test_overdue_threshold_is_strict(aging_60_plus, fires):
    cash_flow = replace(QUIET_CASH_FLOW, aging_60_plus=aging_60_plus)

    titles = [r.title for r in generate_recommendations(QUIET_INVENTORY, cash_flow)]

    assert ("Follow Up on Overdue Payments" in titles) is fires


@pytest.mark.parametrize("risk", [CashRiskLevel.LOW, CashRiskLevel.MEDIUM])
def test_cash_alert_only_for_high_risk(risk):
    cash_flow = replace(QUIET_CASH_FLOW, cash_risk_level=risk)

    assert generate_recommendations(QUIET_INVENTORY, cash_flow) == ()
