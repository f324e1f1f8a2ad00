"""
Document factories for analytics tests.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from bizpulse.analytics.data_access import (
    invoice_from_document,
    order_from_document,
    product_from_document,
    purchase_order_from_document,
)

TENANT_ID = "tenant-1"

# Mid-month reference time so day offsets never cross a month edge by accident
NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def make_order(
    order_id: str,
    order_date: datetime,
    total: float,
    payment_status: str = "Paid",
    tenant_id: str = TENANT_ID,
    items: Optional[list] = None,
) -> dict:
    return {
        "id": order_id,
        "tenantId": tenant_id,
        "orderDate": order_date.isoformat(),
        "totalAmount": total,
        "paymentStatus": payment_status,
        "customerName": "Acme Traders",
        "items": items or [],
    }


def make_invoice(
    invoice_id: str,
    days_old: int,
    total: float,
    status: str = "Sent",
    tenant_id: str = TENANT_ID,
    now: datetime = NOW,
) -> dict:
    return {
        "id": invoice_id,
        "tenantId": tenant_id,
        "date": (now - timedelta(days=days_old)).isoformat(),
        "status": status,
        "total": total,
        "tax": round(total * 0.18, 2),
    }


def make_purchase_order(
    po_id: str,
    total: float,
    status: str = "Pending",
    tenant_id: str = TENANT_ID,
) -> dict:
    return {
        "id": po_id,
        "tenantId": tenant_id,
        "status": status,
        "totalAmount": total,
        "supplierId": "sup-1",
        "supplierName": "Highland Roasters",
    }


def make_product(
    product_id: str,
    stock: float,
    min_stock_level: float,
    cost_price: float = 100.0,
    status: str = "ACTIVE",
    tenant_id: str = TENANT_ID,
    category: str = "Coffee",
    supplier_id: str = "sup-1",
) -> dict:
    return {
        "id": product_id,
        "tenantId": tenant_id,
        "name": f"Product {product_id}",
        "category": category,
        "sku": f"SKU-{product_id}",
        "supplierId": supplier_id,
        "inventory": {"stock": stock, "minStockLevel": min_stock_level, "status": status},
        "pricing": {"costPrice": cost_price, "sellingPrice": cost_price * 1.5, "taxPercentage": 18},
    }


def orders(*documents: dict):
    return tuple(order_from_document(doc) for doc in documents)


def invoices(*documents: dict):
    return tuple(invoice_from_document(doc) for doc in documents)


def purchase_orders(*documents: dict):
    return tuple(purchase_order_from_document(doc) for doc in documents)


def products(*documents: dict):
    return tuple(product_from_document(doc) for doc in documents)
