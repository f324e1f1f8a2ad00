"""
Inventory analysis: stock classification and capital tied up in slow stock.
"""

import logging
from typing import Callable, Iterable, Optional

from bizpulse.analytics.types import InventoryInsights, Product, PRODUCT_STATUS_ACTIVE
from bizpulse.analytics.utils import format_thousands

logger = logging.getLogger(__name__)


def _by_capital_at_risk(product: Product) -> tuple[float, str]:
    return (-product.stock_value, product.id)


def _by_shortfall(product: Product) -> tuple[float, str]:
    return (-(product.inventory.min_stock_level - product.inventory.stock), product.id)


class InventoryAnalyzer:
    """
    Classifies products by stock position relative to their minimum level.

    Movement classes are stock-level heuristics: no per-product sales
    velocity is available, so "fast moving" means below minimum stock and
    "slow moving" means more than twice the minimum.
    """

    LIST_CAP = 10
    OVERSTOCK_MULTIPLIER = 3
    SLOW_MOVING_MULTIPLIER = 2

    # Heuristic constants until sales velocity history is tracked
    STOCK_TURNOVER_RATIO = 4.5
    DAYS_INVENTORY_OUTSTANDING = 81

    @staticmethod
    def _select(
        products: list[Product],
        predicate: Callable[[Product], bool],
        sort_key: Callable[[Product], tuple],
        cap: Optional[int] = None,
    ) -> tuple[Product, ...]:
        """Filter, order by an explicit key and optionally cap."""
        selected = sorted((p for p in products if predicate(p)), key=sort_key)
        if cap is not None:
            selected = selected[:cap]
        return tuple(selected)

    @staticmethod
    def find_dead_stock(products: list[Product]) -> tuple[Product, ...]:
        return InventoryAnalyzer._select(
            products,
            lambda p: p.inventory.stock > 0 and p.inventory.status == PRODUCT_STATUS_ACTIVE,
            _by_capital_at_risk,
            InventoryAnalyzer.LIST_CAP,
        )

    @staticmethod
    def find_overstock(products: list[Product]) -> tuple[Product, ...]:
        return InventoryAnalyzer._select(
            products,
            lambda p: p.inventory.stock > p.inventory.min_stock_level * InventoryAnalyzer.OVERSTOCK_MULTIPLIER,
            _by_capital_at_risk,
        )

    @staticmethod
    def find_fast_moving(products: list[Product]) -> tuple[Product, ...]:
        return InventoryAnalyzer._select(
            products,
            lambda p: p.inventory.stock < p.inventory.min_stock_level,
            _by_shortfall,
            InventoryAnalyzer.LIST_CAP,
        )

    @staticmethod
    def find_slow_moving(products: list[Product]) -> tuple[Product, ...]:
        return InventoryAnalyzer._select(
            products,
            lambda p: p.inventory.stock > p.inventory.min_stock_level * InventoryAnalyzer.SLOW_MOVING_MULTIPLIER,
            _by_capital_at_risk,
            InventoryAnalyzer.LIST_CAP,
        )

    @staticmethod
    def calculate_capital_blocked(slow_moving: Iterable[Product]) -> float:
        return float(sum(product.stock_value for product in slow_moving))

    @staticmethod
    def generate_insight(capital_blocked: float) -> str:
        if capital_blocked > 0:
            return f"{format_thousands(capital_blocked)} capital is blocked in slow-moving stock."
        return "Inventory is well-optimized with minimal dead stock."

    @staticmethod
    def calculate(products: Iterable[Product]) -> InventoryInsights:
        """
        Calculate all inventory insights.

        Args:
            products: Tenant product catalog

        Returns:
            InventoryInsights
        """
        products = list(products)

        slow_moving = InventoryAnalyzer.find_slow_moving(products)
        capital_blocked = InventoryAnalyzer.calculate_capital_blocked(slow_moving)
        fast_moving = InventoryAnalyzer.find_fast_moving(products)

        logger.debug(
            "Inventory: products=%d fast=%d slow=%d capital_blocked=%.2f",
            len(products),
            len(fast_moving),
            len(slow_moving),
            capital_blocked,
        )

        return InventoryInsights(
            stock_turnover_ratio=InventoryAnalyzer.STOCK_TURNOVER_RATIO,
            days_inventory_outstanding=InventoryAnalyzer.DAYS_INVENTORY_OUTSTANDING,
            dead_stock=InventoryAnalyzer.find_dead_stock(products),
            overstock_items=InventoryAnalyzer.find_overstock(products),
            fast_moving_products=fast_moving,
            slow_moving_products=slow_moving,
            capital_blocked=capital_blocked,
            smart_insight=InventoryAnalyzer.generate_insight(capital_blocked),
        )
