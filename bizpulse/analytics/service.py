"""
Analytics Service
Orchestrates data retrieval, the analyzers, scoring and recommendations.
"""

import asyncio
import logging
from datetime import datetime, timezone
from functools import partial
from typing import Any, Awaitable, Callable, Optional

from bizpulse.analytics.cash_flow_analyzer import CashFlowAnalyzer
from bizpulse.analytics.data_access import AnalyticsDataSource
from bizpulse.analytics.health_score_calculator import HealthScoreCalculator
from bizpulse.analytics.inventory_analyzer import InventoryAnalyzer
from bizpulse.analytics.recommendations import generate_recommendations
from bizpulse.analytics.revenue_analyzer import RevenueAnalyzer
from bizpulse.analytics.types import (
    AdvancedAnalytics,
    CashFlowInsights,
    InventoryInsights,
    KPIMetrics,
    RevenueInsights,
    TenantRecords,
)
from bizpulse.analytics.utils import add_months, ensure_utc

logger = logging.getLogger(__name__)


async def _gather_or_cancel(*awaitables: Awaitable[Any]) -> list[Any]:
    """
    Run awaitables concurrently; if one fails, cancel the rest and re-raise.
    """
    tasks = [asyncio.ensure_future(awaitable) for awaitable in awaitables]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class AnalyticsService:
    """
    Service for generating the advanced business-health report.

    Takes a data source and returns AdvancedAnalytics computed fresh on
    every call. Nothing is cached or persisted.
    """

    # Stock health KPI scale applied to the turnover ratio
    STOCK_HEALTH_MULTIPLIER = 20
    # Supplier reliability KPI stand-in until supplier analytics exist
    SUPPLIER_RELIABILITY = 88

    def __init__(
        self,
        data_source: AnalyticsDataSource,
        window_months: int = RevenueAnalyzer.WINDOW_MONTHS,
    ):
        """
        Args:
            data_source: Source of tenant records
            window_months: Months of orders fetched, also the span of the
                revenue trend and the average order value
        """
        self.data_source = data_source
        self.window_months = window_months

    async def fetch_records(self, tenant_id: str, now: datetime) -> TenantRecords:
        """
        Fetch all four collections in parallel.

        Raises:
            DataFetchError: If any collection fails to load
        """
        since = add_months(now, -self.window_months)
        orders, invoices, purchase_orders, products = await _gather_or_cancel(
            self.data_source.fetch_orders(tenant_id, since),
            self.data_source.fetch_invoices(tenant_id),
            self.data_source.fetch_purchase_orders(tenant_id),
            self.data_source.fetch_products(tenant_id),
        )

        logger.debug(
            "Fetched tenant %s: orders=%d invoices=%d purchase_orders=%d products=%d",
            tenant_id,
            len(orders),
            len(invoices),
            len(purchase_orders),
            len(products),
        )

        return TenantRecords(
            orders=tuple(orders),
            invoices=tuple(invoices),
            purchase_orders=tuple(purchase_orders),
            products=tuple(products),
        )

    async def run_analyzers(
        self,
        records: TenantRecords,
        now: datetime,
    ) -> tuple[RevenueInsights, InventoryInsights, CashFlowInsights]:
        """
        Run the three independent analyzers concurrently and wait for all of them.
        """
        loop = asyncio.get_running_loop()

        def in_executor(func: Callable[..., Any], *args: Any) -> Awaitable[Any]:
            return loop.run_in_executor(None, partial(func, *args))

        revenue, inventory, cash_flow = await _gather_or_cancel(
            in_executor(
                RevenueAnalyzer.calculate, records.orders, now, records.products, self.window_months
            ),
            in_executor(InventoryAnalyzer.calculate, records.products),
            in_executor(CashFlowAnalyzer.calculate, records.invoices, records.purchase_orders, now),
        )
        return revenue, inventory, cash_flow

    @staticmethod
    def build_kpis(
        revenue: RevenueInsights,
        inventory: InventoryInsights,
        cash_flow: CashFlowInsights,
    ) -> KPIMetrics:
        return KPIMetrics(
            revenue_growth=revenue.revenue_growth,
            profit_margin=cash_flow.profit_margin,
            stock_health=inventory.stock_turnover_ratio * AnalyticsService.STOCK_HEALTH_MULTIPLIER,
            cash_risk=cash_flow.cash_risk_level,
            supplier_reliability=AnalyticsService.SUPPLIER_RELIABILITY,
        )

    async def generate_advanced_analytics(
        self,
        tenant_id: str,
        now: Optional[datetime] = None,
    ) -> AdvancedAnalytics:
        """
        Generate the complete advanced analytics report for a tenant.

        Args:
            tenant_id: Tenant to analyze
            now: Reference time (defaults to the current UTC time)

        Returns:
            AdvancedAnalytics

        Raises:
            DataFetchError: If any source collection cannot be fetched.
                No partial report is produced.
        """
        now = ensure_utc(now) if now is not None else datetime.now(timezone.utc)
        logger.info("Generating advanced analytics for tenant %s", tenant_id)

        records = await self.fetch_records(tenant_id, now)
        revenue, inventory, cash_flow = await self.run_analyzers(records, now)

        health_score = HealthScoreCalculator.calculate(revenue, inventory, cash_flow)
        recommendations = generate_recommendations(inventory, cash_flow)

        logger.info(
            "Advanced analytics ready for tenant %s: score=%d recommendations=%d",
            tenant_id,
            health_score.overall_score,
            len(recommendations),
        )

        return AdvancedAnalytics(
            tenant_id=tenant_id,
            generated_at=now,
            revenue_insights=revenue,
            inventory_insights=inventory,
            cash_flow_insights=cash_flow,
            kpi_metrics=self.build_kpis(revenue, inventory, cash_flow),
            business_health_score=health_score,
            action_recommendations=recommendations,
        )
