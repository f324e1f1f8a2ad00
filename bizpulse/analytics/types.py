"""
Analytics Data Types
====================

Typed records consumed by the analyzers and the derived structures they produce.

Design Principles:
- Source records are built once, at the data access boundary, with defaults applied
- All records are frozen dataclasses; collections are tuples
- Monetary values are floats in the tenant's base currency
- Percentages are plain numbers (15.0 means 15 %)
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


# ============================================
# Status values used by the analyzers
# ============================================

PAYMENT_STATUS_PAID = "Paid"

INVOICE_STATUS_SENT = "Sent"
INVOICE_STATUS_OVERDUE = "Overdue"
INVOICE_STATUS_PAID = "Paid"

PO_STATUS_PENDING = "Pending"
PO_STATUS_CONFIRMED = "Confirmed"

PRODUCT_STATUS_ACTIVE = "ACTIVE"


class CashRiskLevel(str, Enum):
    """Cash risk classification."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class RecommendationType(str, Enum):
    """Area of the business a recommendation targets."""
    STOCK = "STOCK"
    CASH_FLOW = "CASH_FLOW"
    CUSTOMER = "CUSTOMER"
    SUPPLIER = "SUPPLIER"


class Priority(str, Enum):
    """Recommendation priority."""
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


# ============================================
# Source records
# ============================================

@dataclass(frozen=True)
class OrderItem:
    """Single line of an order."""
    item_id: str = ""
    name: str = ""
    quantity: float = 0.0
    total: float = 0.0


@dataclass(frozen=True)
class Order:
    """Customer order."""
    id: str
    tenant_id: str
    order_date: Optional[datetime]
    total_amount: float
    payment_status: str
    customer_name: str = ""
    items: tuple[OrderItem, ...] = ()


@dataclass(frozen=True)
class Invoice:
    """Issued sales invoice."""
    id: str
    tenant_id: str
    date: Optional[datetime]
    status: str
    total: float
    tax: float = 0.0


@dataclass(frozen=True)
class PurchaseOrder:
    """Purchase order raised against a supplier."""
    id: str
    tenant_id: str
    status: str
    total_amount: float
    supplier_id: str = ""
    supplier_name: str = ""


@dataclass(frozen=True)
class ProductInventory:
    stock: float = 0.0
    min_stock_level: float = 0.0
    status: str = ""


@dataclass(frozen=True)
class ProductPricing:
    cost_price: float = 0.0
    selling_price: float = 0.0
    tax_percentage: float = 0.0


@dataclass(frozen=True)
class Product:
    """Catalog product with its stock position and pricing."""
    id: str
    tenant_id: str
    name: str = ""
    category: str = ""
    sku: str = ""
    supplier_id: str = ""
    inventory: ProductInventory = field(default_factory=ProductInventory)
    pricing: ProductPricing = field(default_factory=ProductPricing)

    @property
    def stock_value(self) -> float:
        """Capital tied up in this product's stock at cost."""
        return self.inventory.stock * self.pricing.cost_price


@dataclass(frozen=True)
class TenantRecords:
    """Everything fetched for one report."""
    orders: tuple[Order, ...]
    invoices: tuple[Invoice, ...]
    purchase_orders: tuple[PurchaseOrder, ...]
    products: tuple[Product, ...]


# ============================================
# Derived structures
# ============================================

@dataclass(frozen=True)
class MonthlyRevenue:
    month: str
    revenue: float


@dataclass(frozen=True)
class CategoryRevenue:
    category: str
    revenue: float


@dataclass(frozen=True)
class SupplierRevenue:
    supplier: str
    revenue: float


@dataclass(frozen=True)
class RevenueInsights:
    """Month-over-month revenue analysis."""
    current_month_revenue: float
    last_month_revenue: float
    revenue_growth: float
    average_order_value: float
    revenue_trend: tuple[MonthlyRevenue, ...]
    smart_insight: str
    revenue_by_category: tuple[CategoryRevenue, ...] = ()
    revenue_by_supplier: tuple[SupplierRevenue, ...] = ()


@dataclass(frozen=True)
class InventoryInsights:
    """Inventory efficiency analysis."""
    stock_turnover_ratio: float
    days_inventory_outstanding: float
    dead_stock: tuple[Product, ...]
    overstock_items: tuple[Product, ...]
    fast_moving_products: tuple[Product, ...]
    slow_moving_products: tuple[Product, ...]
    capital_blocked: float
    smart_insight: str


@dataclass(frozen=True)
class CashFlowInsights:
    """Receivables, payables, aging and cash risk."""
    total_payables: float
    total_receivables: float
    aging_0_to_30: float
    aging_30_to_60: float
    aging_60_plus: float
    cash_flow_forecast: float
    profit_margin: float
    cash_risk_level: CashRiskLevel
    smart_alert: str


@dataclass(frozen=True)
class BusinessHealthScore:
    """Composite health score; every value is an integer in [0, 100]."""
    overall_score: int
    revenue_score: int
    inventory_score: int
    cash_flow_score: int
    supplier_score: int
    customer_score: int


@dataclass(frozen=True)
class ActionRecommendation:
    type: RecommendationType
    priority: Priority
    title: str
    description: str
    action_url: Optional[str] = None


@dataclass(frozen=True)
class KPIMetrics:
    revenue_growth: float
    profit_margin: float
    stock_health: float
    cash_risk: CashRiskLevel
    supplier_reliability: float


@dataclass(frozen=True)
class AdvancedAnalytics:
    """Complete business-health report for one tenant."""
    tenant_id: str
    generated_at: datetime
    revenue_insights: RevenueInsights
    inventory_insights: InventoryInsights
    cash_flow_insights: CashFlowInsights
    kpi_metrics: KPIMetrics
    business_health_score: BusinessHealthScore
    action_recommendations: tuple[ActionRecommendation, ...]
    # Supplier and customer analytics are not computed yet
    supplier_performance: tuple = ()
    customer_analytics: tuple = ()
