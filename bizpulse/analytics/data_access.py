"""
Analytics Data Access
Retrieves tenant-scoped source records and maps them into typed analytics records.

All default substitution for missing or malformed document fields happens
here, in the `*_from_document` mappers. Analyzers only ever see fully
populated records.
"""

import asyncio
import logging
from datetime import datetime
from typing import Any, Iterable, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bizpulse import models
from bizpulse.analytics.exceptions import DataFetchError
from bizpulse.analytics.types import (
    Invoice,
    Order,
    OrderItem,
    Product,
    ProductInventory,
    ProductPricing,
    PurchaseOrder,
)
from bizpulse.analytics.utils import ensure_utc, parse_datetime, safe_float, safe_get, safe_str

logger = logging.getLogger(__name__)


# ============================================
# Document -> record mappers
# ============================================

def _tenant_of(document: dict[str, Any]) -> str:
    # Older documents carry the owner as userId
    return safe_str(safe_get(document, "tenantId", safe_get(document, "userId")))


def order_item_from_document(document: Any) -> OrderItem:
    return OrderItem(
        item_id=safe_str(safe_get(document, "itemId")),
        name=safe_str(safe_get(document, "name")),
        quantity=safe_float(safe_get(document, "quantity")),
        total=safe_float(safe_get(document, "total")),
    )


def order_from_document(document: dict[str, Any]) -> Order:
    items = safe_get(document, "items", [])
    if not isinstance(items, list):
        items = []
    return Order(
        id=safe_str(safe_get(document, "id")),
        tenant_id=_tenant_of(document),
        order_date=parse_datetime(safe_get(document, "orderDate")),
        total_amount=safe_float(safe_get(document, "totalAmount")),
        payment_status=safe_str(safe_get(document, "paymentStatus")),
        customer_name=safe_str(safe_get(document, "customerName")),
        items=tuple(order_item_from_document(item) for item in items if isinstance(item, dict)),
    )


def invoice_from_document(document: dict[str, Any]) -> Invoice:
    return Invoice(
        id=safe_str(safe_get(document, "id")),
        tenant_id=_tenant_of(document),
        date=parse_datetime(safe_get(document, "date")),
        status=safe_str(safe_get(document, "status")),
        total=safe_float(safe_get(document, "total")),
        tax=safe_float(safe_get(document, "tax")),
    )


def purchase_order_from_document(document: dict[str, Any]) -> PurchaseOrder:
    return PurchaseOrder(
        id=safe_str(safe_get(document, "id")),
        tenant_id=_tenant_of(document),
        status=safe_str(safe_get(document, "status")),
        total_amount=safe_float(safe_get(document, "totalAmount")),
        supplier_id=safe_str(safe_get(document, "supplierId")),
        supplier_name=safe_str(safe_get(document, "supplierName")),
    )


def product_from_document(document: dict[str, Any]) -> Product:
    inventory = safe_get(document, "inventory", {})
    pricing = safe_get(document, "pricing", {})
    return Product(
        id=safe_str(safe_get(document, "id")),
        tenant_id=_tenant_of(document),
        name=safe_str(safe_get(document, "name")),
        category=safe_str(safe_get(document, "category")),
        sku=safe_str(safe_get(document, "sku")),
        supplier_id=safe_str(safe_get(document, "supplierId")),
        inventory=ProductInventory(
            stock=safe_float(safe_get(inventory, "stock")),
            min_stock_level=safe_float(safe_get(inventory, "minStockLevel")),
            status=safe_str(safe_get(inventory, "status")),
        ),
        pricing=ProductPricing(
            cost_price=safe_float(safe_get(pricing, "costPrice")),
            selling_price=safe_float(safe_get(pricing, "sellingPrice")),
            tax_percentage=safe_float(safe_get(pricing, "taxPercentage")),
        ),
    )


# ============================================
# Data sources
# ============================================

class AnalyticsDataSource(Protocol):
    """Tenant-scoped record retrieval used by the analytics service."""

    async def fetch_orders(self, tenant_id: str, since: datetime) -> tuple[Order, ...]:
        ...

    async def fetch_invoices(self, tenant_id: str) -> tuple[Invoice, ...]:
        ...

    async def fetch_purchase_orders(self, tenant_id: str) -> tuple[PurchaseOrder, ...]:
        ...

    async def fetch_products(self, tenant_id: str) -> tuple[Product, ...]:
        ...


class SQLAlchemyDataSource:
    """
    Reads source records from the relational store.

    Each fetch opens its own session so the four collections can be loaded
    concurrently. Database errors and timeouts surface as DataFetchError;
    there are no retries.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        timeout_seconds: Optional[float] = None,
    ):
        """
        Args:
            session_factory: Factory producing AsyncSession instances
            timeout_seconds: Per-query timeout (None disables it)
        """
        self.session_factory = session_factory
        self.timeout_seconds = timeout_seconds

    async def _load(self, collection: str, tenant_id: str, statement) -> list[Any]:
        """Run a select statement and return ORM rows."""
        async def run() -> list[Any]:
            async with self.session_factory() as session:
                result = await session.execute(statement)
                return list(result.scalars().all())

        try:
            return await asyncio.wait_for(run(), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as e:
            logger.error("Timed out fetching %s for tenant %s", collection, tenant_id)
            raise DataFetchError(
                f"Timed out fetching {collection}",
                collection=collection,
                tenant_id=tenant_id,
            ) from e
        except SQLAlchemyError as e:
            logger.error("Failed to fetch %s for tenant %s: %s", collection, tenant_id, e)
            raise DataFetchError(
                f"Failed to fetch {collection}: {str(e)}",
                collection=collection,
                tenant_id=tenant_id,
            ) from e

    async def fetch_orders(self, tenant_id: str, since: datetime) -> tuple[Order, ...]:
        statement = select(models.Order).where(
            models.Order.tenant_id == tenant_id,
            models.Order.order_date >= ensure_utc(since),
        )
        rows = await self._load("orders", tenant_id, statement)
        return tuple(order_from_document(row.to_document()) for row in rows)

    async def fetch_invoices(self, tenant_id: str) -> tuple[Invoice, ...]:
        statement = select(models.Invoice).where(models.Invoice.tenant_id == tenant_id)
        rows = await self._load("invoices", tenant_id, statement)
        return tuple(invoice_from_document(row.to_document()) for row in rows)

    async def fetch_purchase_orders(self, tenant_id: str) -> tuple[PurchaseOrder, ...]:
        statement = select(models.PurchaseOrder).where(models.PurchaseOrder.tenant_id == tenant_id)
        rows = await self._load("purchase_orders", tenant_id, statement)
        return tuple(purchase_order_from_document(row.to_document()) for row in rows)

    async def fetch_products(self, tenant_id: str) -> tuple[Product, ...]:
        statement = select(models.Product).where(models.Product.tenant_id == tenant_id)
        rows = await self._load("products", tenant_id, statement)
        return tuple(product_from_document(row.to_document()) for row in rows)


class InMemoryDataSource:
    """
    Serves records from raw documents held in memory.

    Documents use the producing application's camelCase field names and are
    scoped by their tenantId (or legacy userId) field.
    """

    def __init__(
        self,
        orders: Iterable[dict[str, Any]] = (),
        invoices: Iterable[dict[str, Any]] = (),
        purchase_orders: Iterable[dict[str, Any]] = (),
        products: Iterable[dict[str, Any]] = (),
    ):
        self.orders = tuple(order_from_document(doc) for doc in orders)
        self.invoices = tuple(invoice_from_document(doc) for doc in invoices)
        self.purchase_orders = tuple(purchase_order_from_document(doc) for doc in purchase_orders)
        self.products = tuple(product_from_document(doc) for doc in products)

    async def fetch_orders(self, tenant_id: str, since: datetime) -> tuple[Order, ...]:
        since = ensure_utc(since)
        return tuple(
            order for order in self.orders
            if order.tenant_id == tenant_id
            and order.order_date is not None
            and order.order_date >= since
        )

    async def fetch_invoices(self, tenant_id: str) -> tuple[Invoice, ...]:
        return tuple(invoice for invoice in self.invoices if invoice.tenant_id == tenant_id)

    async def fetch_purchase_orders(self, tenant_id: str) -> tuple[PurchaseOrder, ...]:
        return tuple(po for po in self.purchase_orders if po.tenant_id == tenant_id)

    async def fetch_products(self, tenant_id: str) -> tuple[Product, ...]:
        return tuple(product for product in self.products if product.tenant_id == tenant_id)
