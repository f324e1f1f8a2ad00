"""
Models Package
SQLAlchemy ORM models for the tenant business documents analytics reads.
"""

from bizpulse.models.order import Order
from bizpulse.models.invoice import Invoice
from bizpulse.models.purchase_order import PurchaseOrder
from bizpulse.models.product import Product

__all__ = [
    "Order",
    "Invoice",
    "PurchaseOrder",
    "Product",
]
