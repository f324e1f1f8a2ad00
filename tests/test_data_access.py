"""
Tests for document mapping and the analytics data sources.
"""

import asyncio
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from bizpulse import models
from bizpulse.analytics.data_access import (
    InMemoryDataSource,
    SQLAlchemyDataSource,
    invoice_from_document,
    order_from_document,
    product_from_document,
)
from bizpulse.analytics.exceptions import DataFetchError
from bizpulse.database.base import Base
from tests.factories import NOW, TENANT_ID, make_invoice, make_order, make_product


class TestDocumentMapping:
    def test_product_defaults_for_missing_nested_fields(self):
        product = product_from_document({
            "id": "p1",
            "userId": "legacy-tenant",
            "inventory": {"stock": "12"},
            "pricing": None,
        })

        assert product.tenant_id == "legacy-tenant"
        assert product.inventory.stock == 12
        assert product.inventory.min_stock_level == 0
        assert product.inventory.status == ""
        assert product.pricing.cost_price == 0
        assert product.stock_value == 0

    def test_order_parses_iso_dates_and_decimals(self):
        order = order_from_document({
            "id": "o1",
            "tenantId": TENANT_ID,
            "orderDate": "2026-10-05T08:00:00Z",
            "totalAmount": Decimal("1250.50"),
            "paymentStatus": "Paid",
            "items": [{"itemId": "p1", "total": "1,250.50"}, "not-a-line"],
        })

        assert order.order_date == datetime(2026, 10, 5, 8, 0, tzinfo=timezone.utc)
        assert order.total_amount == 1250.5
        assert len(order.items) == 1
        assert order.items[0].total == 1250.5

    def test_naive_dates_are_utc(self):
        invoice = invoice_from_document({
            "id": "i1",
            "tenantId": TENANT_ID,
            "date": datetime(2026, 9, 1, 10, 0),
            "status": "Sent",
            "total": 10,
        })

        assert invoice.date.tzinfo == timezone.utc

    def test_unparsable_values_degrade(self):
        order = order_from_document({"id": "o1", "orderDate": "yesterday", "totalAmount": "n/a"})

        assert order.order_date is None
        assert order.total_amount == 0
        assert order.payment_status == ""


class TestInMemoryDataSource:
    async def test_scopes_by_tenant_and_since(self):
        source = InMemoryDataSource(
            orders=[
                make_order("recent", NOW - timedelta(days=3), 100),
                make_order("old", NOW - timedelta(days=400), 100),
                make_order("other", NOW - timedelta(days=3), 100, tenant_id="tenant-2"),
            ],
            invoices=[make_invoice("i1", 5, 10), make_invoice("i2", 5, 10, tenant_id="tenant-2")],
            products=[make_product("p1", 1, 2)],
        )

        fetched = await source.fetch_orders(TENANT_ID, NOW - timedelta(days=180))

        assert [order.id for order in fetched] == ["recent"]
        assert [invoice.id for invoice in await source.fetch_invoices(TENANT_ID)] == ["i1"]
        assert await source.fetch_purchase_orders(TENANT_ID) == ()
        assert len(await source.fetch_products(TENANT_ID)) == 1


@pytest.fixture
async def session_factory(tmp_path):
    """File-backed SQLite database with the business document tables."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'analytics.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


class TestSQLAlchemyDataSource:
    async def test_fetches_tenant_records(self, session_factory):
        async with session_factory() as session:
            session.add_all([
                models.Order(
                    id="o1", tenant_id=TENANT_ID, order_date=NOW - timedelta(days=2),
                    total_amount=Decimal("300.00"), payment_status="Paid",
                    items=[{"itemId": "p1", "name": "Beans", "quantity": 3, "total": 300}],
                ),
                models.Order(
                    id="o2", tenant_id=TENANT_ID, order_date=NOW - timedelta(days=300),
                    total_amount=Decimal("50.00"), payment_status="Paid",
                ),
                models.Order(
                    id="o3", tenant_id="tenant-2", order_date=NOW - timedelta(days=2),
                    total_amount=Decimal("75.00"), payment_status="Paid",
                ),
                models.Invoice(
                    id="i1", tenant_id=TENANT_ID, date=NOW - timedelta(days=70),
                    status="Overdue", total=Decimal("5000.00"),
                ),
                models.PurchaseOrder(
                    id="po1", tenant_id=TENANT_ID, status="Pending", total_amount=Decimal("800.00"),
                ),
                models.Product(
                    id="p1", tenant_id=TENANT_ID, name="Beans", category="Coffee",
                    inventory={"stock": 4, "minStockLevel": 10, "status": "ACTIVE"},
                    pricing={"costPrice": 120},
                ),
            ])
            await session.commit()

        source = SQLAlchemyDataSource(session_factory, timeout_seconds=5)

        fetched_orders = await source.fetch_orders(TENANT_ID, NOW - timedelta(days=180))
        fetched_invoices = await source.fetch_invoices(TENANT_ID)
        fetched_pos = await source.fetch_purchase_orders(TENANT_ID)
        fetched_products = await source.fetch_products(TENANT_ID)

        assert [order.id for order in fetched_orders] == ["o1"]
        assert fetched_orders[0].total_amount == 300
        assert fetched_orders[0].order_date.tzinfo == timezone.utc
        assert fetched_orders[0].items[0].item_id == "p1"
        assert fetched_invoices[0].total == 5000
        assert fetched_invoices[0].status == "Overdue"
        assert fetched_pos[0].total_amount == 800
        assert fetched_products[0].inventory.min_stock_level == 10
        assert fetched_products[0].pricing.cost_price == 120
        assert fetched_products[0].pricing.selling_price == 0

    async def test_database_errors_become_data_fetch_errors(self, tmp_path):
        # No tables created
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
        source = SQLAlchemyDataSource(async_sessionmaker(engine, class_=AsyncSession))

        with pytest.raises(DataFetchError) as exc_info:
            await source.fetch_invoices(TENANT_ID)

        assert exc_info.value.collection == "invoices"
        assert exc_info.value.tenant_id == TENANT_ID
        assert isinstance(exc_info.value.__cause__, OperationalError)

        await engine.dispose()

    async def test_slow_queries_time_out(self):
        class SlowSession:
            async def __aenter__(self):
                return self

            async def __aexit__(self, *exc_info):
                return False

            async def execute(self, statement):
                await asyncio.sleep(1)

        source = SQLAlchemyDataSource(SlowSession, timeout_seconds=0.01)

        with pytest.raises(DataFetchError) as exc_info:
            await source.fetch_products(TENANT_ID)

        assert exc_info.value.collection == "products"
        assert isinstance(exc_info.value.__cause__, asyncio.TimeoutError)
