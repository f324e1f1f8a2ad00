"""
Business Health Score Calculator

Calculates a composite Business Health Score (0-100) from:
- Revenue momentum (30%)
- Inventory efficiency (25%)
- Cash flow risk (25%)
- Supplier reliability (10%)
- Customer quality (10%)

Supplier and customer sub-scores are fixed until supplier and customer
analytics exist.
"""

import logging

from bizpulse.analytics.types import (
    BusinessHealthScore,
    CashFlowInsights,
    CashRiskLevel,
    InventoryInsights,
    RevenueInsights,
)
from bizpulse.analytics.utils import clamp, round_half_up

logger = logging.getLogger(__name__)


class HealthScoreCalculator:
    """Weighted composite of the analyzer outputs."""

    WEIGHTS = {
        "revenue": 0.30,
        "inventory": 0.25,
        "cash_flow": 0.25,
        "supplier": 0.10,
        "customer": 0.10,
    }

    CASH_FLOW_SCORES = {
        CashRiskLevel.LOW: 90,
        CashRiskLevel.MEDIUM: 60,
        CashRiskLevel.HIGH: 30,
    }

    SUPPLIER_SCORE = 85
    CUSTOMER_SCORE = 80

    REVENUE_BASELINE = 50
    REVENUE_GROWTH_MULTIPLIER = 2
    CAPITAL_BLOCKED_PER_POINT = 10_000

    @staticmethod
    def score_revenue(revenue_growth: float) -> float:
        """50 at zero growth, +/-2 points per growth percent."""
        return clamp(
            HealthScoreCalculator.REVENUE_BASELINE
            + revenue_growth * HealthScoreCalculator.REVENUE_GROWTH_MULTIPLIER
        )

    @staticmethod
    def score_inventory(capital_blocked: float) -> float:
        """One point lost per 10,000 blocked in slow-moving stock."""
        return clamp(100 - capital_blocked / HealthScoreCalculator.CAPITAL_BLOCKED_PER_POINT)

    @staticmethod
    def score_cash_flow(risk_level: CashRiskLevel) -> int:
        return HealthScoreCalculator.CASH_FLOW_SCORES[risk_level]

    @staticmethod
    def combine(sub_scores: dict[str, float]) -> int:
        """Weighted sum of sub-scores, rounded and clamped to [0, 100]."""
        weighted = sum(
            sub_scores[name] * weight
            for name, weight in HealthScoreCalculator.WEIGHTS.items()
        )
        return int(clamp(round_half_up(weighted)))

    @staticmethod
    def calculate(
        revenue: RevenueInsights,
        inventory: InventoryInsights,
        cash_flow: CashFlowInsights,
    ) -> BusinessHealthScore:
        """
        Calculate the Business Health Score.

        Args:
            revenue: Revenue analyzer output
            inventory: Inventory analyzer output
            cash_flow: Cash flow analyzer output

        Returns:
            BusinessHealthScore with all values in [0, 100]
        """
        sub_scores = {
            "revenue": HealthScoreCalculator.score_revenue(revenue.revenue_growth),
            "inventory": HealthScoreCalculator.score_inventory(inventory.capital_blocked),
            "cash_flow": HealthScoreCalculator.score_cash_flow(cash_flow.cash_risk_level),
            "supplier": HealthScoreCalculator.SUPPLIER_SCORE,
            "customer": HealthScoreCalculator.CUSTOMER_SCORE,
        }
        overall = HealthScoreCalculator.combine(sub_scores)

        logger.debug("Health score: overall=%d sub_scores=%s", overall, sub_scores)

        return BusinessHealthScore(
            overall_score=overall,
            revenue_score=round_half_up(sub_scores["revenue"]),
            inventory_score=round_half_up(sub_scores["inventory"]),
            cash_flow_score=sub_scores["cash_flow"],
            supplier_score=sub_scores["supplier"],
            customer_score=sub_scores["customer"],
        )
