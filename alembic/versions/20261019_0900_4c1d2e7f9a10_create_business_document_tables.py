"""create_business_document_tables

Revision ID: 4c1d2e7f9a10
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# Revision identifiers, used by Alembic
revision: str = '4c1d2e7f9a10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    """Apply migration: create_business_document_tables"""
    op.create_table('orders',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('tenant_id', sa.String(length=64), nullable=False),
        sa.Column('order_number', sa.String(length=64), nullable=True),
        sa.Column('customer_name', sa.String(length=255), nullable=True),
        sa.Column('order_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('total_amount', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('payment_status', sa.String(length=32), nullable=False),
        sa.Column('order_status', sa.String(length=32), nullable=True),
        sa.Column('items', postgresql.JSONB(astext_type=sa.Text()), nullable=True, comment='Order lines: itemId, name, quantity, total'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_orders_tenant_id', 'orders', ['tenant_id'], unique=False)
    op.create_index('ix_orders_tenant_id_order_date', 'orders', ['tenant_id', 'order_date'], unique=False)

    op.create_table('invoices',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('tenant_id', sa.String(length=64), nullable=False),
        sa.Column('invoice_number', sa.String(length=64), nullable=True),
        sa.Column('customer_name', sa.String(length=255), nullable=True),
        sa.Column('date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('due_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('subtotal', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('tax', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('total', sa.Numeric(precision=14, scale=2), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_invoices_tenant_id', 'invoices', ['tenant_id'], unique=False)
    op.create_index('ix_invoices_tenant_id_status', 'invoices', ['tenant_id', 'status'], unique=False)

    op.create_table('purchase_orders',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('tenant_id', sa.String(length=64), nullable=False),
        sa.Column('po_number', sa.String(length=64), nullable=True),
        sa.Column('supplier_id', sa.String(length=64), nullable=True),
        sa.Column('supplier_name', sa.String(length=255), nullable=True),
        sa.Column('date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('expected_delivery_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('total_amount', sa.Numeric(precision=14, scale=2), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_purchase_orders_tenant_id', 'purchase_orders', ['tenant_id'], unique=False)
    op.create_index('ix_purchase_orders_tenant_id_status', 'purchase_orders', ['tenant_id', 'status'], unique=False)

    op.create_table('products',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('tenant_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=128), nullable=True),
        sa.Column('sku', sa.String(length=64), nullable=True),
        sa.Column('supplier_id', sa.String(length=64), nullable=True),
        sa.Column('inventory', postgresql.JSONB(astext_type=sa.Text()), nullable=True, comment='Stock position: stock, minStockLevel, reorderQuantity, status'),
        sa.Column('pricing', postgresql.JSONB(astext_type=sa.Text()), nullable=True, comment='Pricing: costPrice, sellingPrice, taxPercentage'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_products_tenant_id', 'products', ['tenant_id'], unique=False)


def downgrade() -> None:
    """Revert migration: create_business_document_tables"""
    op.drop_index('ix_products_tenant_id', table_name='products')
    op.drop_table('products')
    op.drop_index('ix_purchase_orders_tenant_id_status', table_name='purchase_orders')
    op.drop_index('ix_purchase_orders_tenant_id', table_name='purchase_orders')
    op.drop_table('purchase_orders')
    op.drop_index('ix_invoices_tenant_id_status', table_name='invoices')
    op.drop_index('ix_invoices_tenant_id', table_name='invoices')
    op.drop_table('invoices')
    op.drop_index('ix_orders_tenant_id_order_date', table_name='orders')
    op.drop_index('ix_orders_tenant_id', table_name='orders')
    op.drop_table('orders')
