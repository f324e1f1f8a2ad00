"""
Analytics Schemas
Pydantic models for the advanced analytics API response.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bizpulse.analytics.types import CashRiskLevel, Priority, RecommendationType


class CamelModel(BaseModel):
    """Base model: camelCase aliases, readable from dataclass attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ProductInventorySchema(CamelModel):
    stock: float
    min_stock_level: float
    status: str


class ProductPricingSchema(CamelModel):
    cost_price: float
    selling_price: float
    tax_percentage: float


class ProductSchema(CamelModel):
    """Product as listed in inventory insights."""

    id: str
    name: str
    category: str
    sku: str
    supplier_id: str
    inventory: ProductInventorySchema
    pricing: ProductPricingSchema


class MonthlyRevenueSchema(CamelModel):
    month: str = Field(..., description='Month label, e.g. "Oct 2026"')
    revenue: float


class CategoryRevenueSchema(CamelModel):
    category: str
    revenue: float


class SupplierRevenueSchema(CamelModel):
    supplier: str
    revenue: float


class RevenueInsightsSchema(CamelModel):
    current_month_revenue: float
    last_month_revenue: float
    revenue_growth: float = Field(..., description="Month-over-month growth in percent")
    average_order_value: float
    revenue_by_category: list[CategoryRevenueSchema]
    revenue_by_supplier: list[SupplierRevenueSchema]
    revenue_trend: list[MonthlyRevenueSchema] = Field(..., description="Six months, oldest first")
    smart_insight: str


class InventoryInsightsSchema(CamelModel):
    stock_turnover_ratio: float
    days_inventory_outstanding: float
    dead_stock: list[ProductSchema]
    overstock_items: list[ProductSchema]
    fast_moving_products: list[ProductSchema]
    slow_moving_products: list[ProductSchema]
    capital_blocked: float = Field(..., description="Stock value at cost held in slow-moving products")
    smart_insight: str


class CashFlowInsightsSchema(CamelModel):
    total_payables: float
    total_receivables: float
    aging_0_to_30: float = Field(..., alias="aging0to30")
    aging_30_to_60: float = Field(..., alias="aging30to60")
    aging_60_plus: float = Field(..., alias="aging60plus")
    cash_flow_forecast: float
    profit_margin: float = Field(..., description="Profit margin in percent")
    smart_alert: str
    cash_risk_level: CashRiskLevel


class KPIMetricsSchema(CamelModel):
    revenue_growth: float
    profit_margin: float
    stock_health: float
    cash_risk: CashRiskLevel
    supplier_reliability: float


class BusinessHealthScoreSchema(CamelModel):
    overall_score: int = Field(..., ge=0, le=100)
    revenue_score: int = Field(..., ge=0, le=100)
    inventory_score: int = Field(..., ge=0, le=100)
    cash_flow_score: int = Field(..., ge=0, le=100)
    supplier_score: int = Field(..., ge=0, le=100)
    customer_score: int = Field(..., ge=0, le=100)


class ActionRecommendationSchema(CamelModel):
    type: RecommendationType
    priority: Priority
    title: str
    description: str
    action_url: Optional[str] = None


class AdvancedAnalyticsResponse(CamelModel):
    """Complete advanced analytics response."""

    tenant_id: str
    generated_at: datetime = Field(..., description="Reference time the report was computed for")
    revenue_insights: RevenueInsightsSchema
    inventory_insights: InventoryInsightsSchema
    cash_flow_insights: CashFlowInsightsSchema
    supplier_performance: list[dict[str, Any]]
    customer_analytics: list[dict[str, Any]]
    kpi_metrics: KPIMetricsSchema
    business_health_score: BusinessHealthScoreSchema
    action_recommendations: list[ActionRecommendationSchema]
