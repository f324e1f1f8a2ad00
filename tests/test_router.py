"""
Tests for the analytics API endpoint.
"""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from bizpulse.analytics.data_access import InMemoryDataSource
from bizpulse.analytics.exceptions import DataFetchError
from bizpulse.analytics.router import get_analytics_service
from bizpulse.analytics.service import AnalyticsService
from bizpulse.main import app
from tests.factories import (
    NOW,
    TENANT_ID,
    make_invoice,
    make_order,
    make_product,
    make_purchase_order,
)


class FixedClockAnalyticsService(AnalyticsService):
    """Reports as of the shared test reference time."""

    async def generate_advanced_analytics(self, tenant_id, now=None):
        return await super().generate_advanced_analytics(tenant_id, now=NOW)


class BrokenDataSource(InMemoryDataSource):
    async def fetch_products(self, tenant_id):
        raise DataFetchError("password authentication failed for user analytics", "products", tenant_id)


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def _use_source(source) -> None:
    app.dependency_overrides[get_analytics_service] = lambda: FixedClockAnalyticsService(source)


def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_advanced_analytics_uses_camel_case(client):
    _use_source(InMemoryDataSource(
        orders=[make_order("o1", NOW - timedelta(days=1), 2500)],
        invoices=[make_invoice("i1", 90, 15000, status="Overdue")],
        purchase_orders=[make_purchase_order("po1", 1000)],
        products=[make_product("p1", stock=1, min_stock_level=5)],
    ))

    response = client.get("/api/analytics/advanced", params={"tenant_id": TENANT_ID})

    assert response.status_code == 200
    body = response.json()
    assert body["tenantId"] == TENANT_ID
    assert body["generatedAt"].startswith("2026-10-19T12:00:00")
    assert body["supplierPerformance"] == []
    assert body["customerAnalytics"] == []

    revenue = body["revenueInsights"]
    assert revenue["currentMonthRevenue"] == 2500
    assert len(revenue["revenueTrend"]) == 6
    assert revenue["revenueByCategory"] == []

    cash_flow = body["cashFlowInsights"]
    assert cash_flow["aging0to30"] == 0
    assert cash_flow["aging30to60"] == 0
    assert cash_flow["aging60plus"] == 15000
    assert cash_flow["cashRiskLevel"] == "LOW"

    fast_moving = body["inventoryInsights"]["fastMovingProducts"]
    assert fast_moving[0]["inventory"]["minStockLevel"] == 5
    assert fast_moving[0]["pricing"]["costPrice"] == 100

    assert body["kpiMetrics"]["supplierReliability"] == 88
    assert 0 <= body["businessHealthScore"]["overallScore"] <= 100
    assert [r["actionUrl"] for r in body["actionRecommendations"]] == ["/purchase-orders", "/invoices"]


def test_missing_tenant_id_is_rejected(client):
    _use_source(InMemoryDataSource())

    assert client.get("/api/analytics/advanced").status_code == 422
    assert client.get("/api/analytics/advanced", params={"tenant_id": ""}).status_code == 422


def test_fetch_failure_returns_bad_gateway(client):
    _use_source(BrokenDataSource())

    response = client.get("/api/analytics/advanced", params={"tenant_id": TENANT_ID})

    assert response.status_code == 502
    detail = response.json()["detail"]
    assert detail["error_code"] == "data_fetch_failed"
    assert "password" not in detail["message"]
