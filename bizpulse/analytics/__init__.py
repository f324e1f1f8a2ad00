"""
Analytics Module
Calculates revenue, inventory and cash flow insights, the business health
score and action recommendations from a tenant's transactional records.
"""

from bizpulse.analytics.cash_flow_analyzer import CashFlowAnalyzer
from bizpulse.analytics.exceptions import DataFetchError
from bizpulse.analytics.health_score_calculator import HealthScoreCalculator
from bizpulse.analytics.inventory_analyzer import InventoryAnalyzer
from bizpulse.analytics.revenue_analyzer import RevenueAnalyzer
from bizpulse.analytics.service import AnalyticsService

__all__ = [
    "AnalyticsService",
    "CashFlowAnalyzer",
    "DataFetchError",
    "HealthScoreCalculator",
    "InventoryAnalyzer",
    "RevenueAnalyzer",
]
