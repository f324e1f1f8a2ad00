"""
Revenue analysis: month-over-month revenue, growth, order value and trend.
"""

import logging
from collections import defaultdict
from datetime import datetime
from typing import Iterable, Optional

from bizpulse.analytics.types import (
    CategoryRevenue,
    MonthlyRevenue,
    Order,
    PAYMENT_STATUS_PAID,
    Product,
    RevenueInsights,
    SupplierRevenue,
)
from bizpulse.analytics.utils import add_months, ensure_utc, month_label, month_start

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"
UNASSIGNED_SUPPLIER = "Unassigned"


class RevenueAnalyzer:
    """
    Analyzes paid order revenue over a rolling window of calendar months.

    Only orders with payment status "Paid" count as revenue. All calendar
    boundaries are derived from the explicit `now` argument.
    """

    WINDOW_MONTHS = 6
    STRONG_GROWTH_PCT = 10.0
    SHARP_DECLINE_PCT = -10.0

    @staticmethod
    def _paid_orders_between(
        orders: Iterable[Order],
        start: datetime,
        end: datetime,
    ) -> list[Order]:
        """Paid orders dated in [start, end)."""
        return [
            order for order in orders
            if order.payment_status == PAYMENT_STATUS_PAID
            and order.order_date is not None
            and start <= order.order_date < end
        ]

    @staticmethod
    def _paid_orders_through(
        orders: Iterable[Order],
        start: datetime,
        now: datetime,
    ) -> list[Order]:
        """Paid orders dated in [start, now]."""
        return [
            order for order in orders
            if order.payment_status == PAYMENT_STATUS_PAID
            and order.order_date is not None
            and start <= order.order_date <= now
        ]

    @staticmethod
    def sum_revenue(orders: Iterable[Order]) -> float:
        return float(sum(order.total_amount for order in orders))

    @staticmethod
    def calculate_growth(current: float, previous: float) -> float:
        """
        Percentage change from previous to current.

        Returns 0 when there is no previous revenue to compare against.
        """
        if previous == 0:
            return 0.0
        return (current - previous) / previous * 100

    @staticmethod
    def calculate_average_order_value(paid_orders: list[Order]) -> float:
        if not paid_orders:
            return 0.0
        return RevenueAnalyzer.sum_revenue(paid_orders) / len(paid_orders)

    @staticmethod
    def calculate_trend(
        orders: Iterable[Order],
        now: datetime,
        months: int = WINDOW_MONTHS,
    ) -> tuple[MonthlyRevenue, ...]:
        """
        Paid revenue per calendar month, oldest first, ending at the month of `now`.
        """
        orders = list(orders)
        current_start = month_start(now)
        trend = []

        for offset in range(months - 1, -1, -1):
            start = add_months(current_start, -offset)
            end = add_months(start, 1)
            revenue = RevenueAnalyzer.sum_revenue(
                RevenueAnalyzer._paid_orders_between(orders, start, end)
            )
            trend.append(MonthlyRevenue(month=month_label(start), revenue=revenue))

        return tuple(trend)

    @staticmethod
    def generate_insight(revenue_growth: float) -> str:
        if revenue_growth > RevenueAnalyzer.STRONG_GROWTH_PCT:
            return f"Revenue increased {revenue_growth:.1f}% this month! Strong growth momentum."
        if revenue_growth > 0:
            return f"Revenue grew {revenue_growth:.1f}% this month. Steady progress."
        if revenue_growth < RevenueAnalyzer.SHARP_DECLINE_PCT:
            return f"Revenue declined {abs(revenue_growth):.1f}%. Action needed."
        return f"Revenue is relatively stable with {revenue_growth:.1f}% change."

    @staticmethod
    def calculate_breakdown(
        paid_orders: list[Order],
        products: Iterable[Product],
    ) -> tuple[tuple[CategoryRevenue, ...], tuple[SupplierRevenue, ...]]:
        """
        Split paid order item revenue by product category and by supplier.

        Items are matched to products through their item id; unmatched items
        are grouped under "Uncategorized" / "Unassigned".
        """
        catalog = {product.id: product for product in products}
        by_category: dict[str, float] = defaultdict(float)
        by_supplier: dict[str, float] = defaultdict(float)

        for order in paid_orders:
            for item in order.items:
                product = catalog.get(item.item_id)
                category = product.category if product and product.category else UNCATEGORIZED
                supplier = product.supplier_id if product and product.supplier_id else UNASSIGNED_SUPPLIER
                by_category[category] += item.total
                by_supplier[supplier] += item.total

        categories = tuple(
            CategoryRevenue(category=name, revenue=revenue)
            for name, revenue in sorted(by_category.items(), key=lambda pair: (-pair[1], pair[0]))
        )
        suppliers = tuple(
            SupplierRevenue(supplier=name, revenue=revenue)
            for name, revenue in sorted(by_supplier.items(), key=lambda pair: (-pair[1], pair[0]))
        )
        return categories, suppliers

    @staticmethod
    def calculate(
        orders: Iterable[Order],
        now: datetime,
        products: Optional[Iterable[Product]] = None,
        window_months: int = WINDOW_MONTHS,
    ) -> RevenueInsights:
        """
        Calculate all revenue insights.

        Args:
            orders: Orders fetched for the analysis window
            now: Reference time for calendar bucketing
            products: Optional catalog used for the category/supplier breakdown
            window_months: Months covered by the trend and the average order value

        Returns:
            RevenueInsights
        """
        now = ensure_utc(now)
        orders = list(orders)

        current_start = month_start(now)
        next_month_start = add_months(current_start, 1)
        last_start = add_months(current_start, -1)
        window_start = add_months(now, -window_months)

        current_month_revenue = RevenueAnalyzer.sum_revenue(
            RevenueAnalyzer._paid_orders_between(orders, current_start, next_month_start)
        )
        last_month_revenue = RevenueAnalyzer.sum_revenue(
            RevenueAnalyzer._paid_orders_between(orders, last_start, current_start)
        )
        revenue_growth = RevenueAnalyzer.calculate_growth(current_month_revenue, last_month_revenue)

        paid_in_window = RevenueAnalyzer._paid_orders_through(orders, window_start, now)
        average_order_value = RevenueAnalyzer.calculate_average_order_value(paid_in_window)

        revenue_trend = RevenueAnalyzer.calculate_trend(orders, now, window_months)
        by_category, by_supplier = RevenueAnalyzer.calculate_breakdown(
            paid_in_window, products or ()
        )

        logger.debug(
            "Revenue: current=%.2f last=%.2f growth=%.1f%% paid_orders=%d",
            current_month_revenue,
            last_month_revenue,
            revenue_growth,
            len(paid_in_window),
        )

        return RevenueInsights(
            current_month_revenue=current_month_revenue,
            last_month_revenue=last_month_revenue,
            revenue_growth=revenue_growth,
            average_order_value=average_order_value,
            revenue_trend=revenue_trend,
            smart_insight=RevenueAnalyzer.generate_insight(revenue_growth),
            revenue_by_category=by_category,
            revenue_by_supplier=by_supplier,
        )
