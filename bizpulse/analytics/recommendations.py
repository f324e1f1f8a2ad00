"""
Rule-based action recommendations from inventory and cash flow insights.
"""

from typing import Callable, Optional

from bizpulse.analytics.types import (
    ActionRecommendation,
    CashFlowInsights,
    CashRiskLevel,
    InventoryInsights,
    Priority,
    RecommendationType,
)
from bizpulse.analytics.utils import format_thousands

CAPITAL_BLOCKED_THRESHOLD = 50_000
OVERDUE_60_PLUS_THRESHOLD = 10_000

Rule = Callable[[InventoryInsights, CashFlowInsights], Optional[ActionRecommendation]]


def restock_fast_movers(
    inventory: InventoryInsights, _cash_flow: CashFlowInsights
) -> Optional[ActionRecommendation]:
    count = len(inventory.fast_moving_products)
    if count == 0:
        return None
    return ActionRecommendation(
        type=RecommendationType.STOCK,
        priority=Priority.HIGH,
        title="Restock Fast-Moving Products",
        description=f"{count} products are running low. Create purchase orders.",
        action_url="/purchase-orders",
    )


def reduce_slow_stock(
    inventory: InventoryInsights, _cash_flow: CashFlowInsights
) -> Optional[ActionRecommendation]:
    if inventory.capital_blocked <= CAPITAL_BLOCKED_THRESHOLD:
        return None
    return ActionRecommendation(
        type=RecommendationType.STOCK,
        priority=Priority.MEDIUM,
        title="Reduce Slow-Moving Inventory",
        description=(
            f"{format_thousands(inventory.capital_blocked)} blocked in slow stock. "
            "Consider promotions."
        ),
        action_url="/products",
    )


def chase_overdue_receivables(
    _inventory: InventoryInsights, cash_flow: CashFlowInsights
) -> Optional[ActionRecommendation]:
    if cash_flow.aging_60_plus <= OVERDUE_60_PLUS_THRESHOLD:
        return None
    return ActionRecommendation(
        type=RecommendationType.CASH_FLOW,
        priority=Priority.HIGH,
        title="Follow Up on Overdue Payments",
        description=(
            f"{format_thousands(cash_flow.aging_60_plus)} overdue by 60+ days. "
            "Send reminders."
        ),
        action_url="/invoices",
    )


def negative_cash_flow_alert(
    _inventory: InventoryInsights, cash_flow: CashFlowInsights
) -> Optional[ActionRecommendation]:
    if cash_flow.cash_risk_level != CashRiskLevel.HIGH:
        return None
    return ActionRecommendation(
        type=RecommendationType.CASH_FLOW,
        priority=Priority.HIGH,
        title="Cash Flow Alert",
        description="Negative cash flow projected. Prioritize collections.",
        action_url="/payments",
    )


# Evaluation order is the output order
RULES: tuple[Rule, ...] = (
    restock_fast_movers,
    reduce_slow_stock,
    chase_overdue_receivables,
    negative_cash_flow_alert,
)


def generate_recommendations(
    inventory: InventoryInsights,
    cash_flow: CashFlowInsights,
    rules: tuple[Rule, ...] = RULES,
) -> tuple[ActionRecommendation, ...]:
    """
    Evaluate every rule independently and collect the ones that fire.

    Args:
        inventory: Inventory analyzer output
        cash_flow: Cash flow analyzer output
        rules: Rules to evaluate, in output order

    Returns:
        Matching recommendations in rule order
    """
    recommendations = []
    for rule in rules:
        recommendation = rule(inventory, cash_flow)
        if recommendation is not None:
            recommendations.append(recommendation)
    return tuple(recommendations)
