"""
Seed Demo Tenant Script
Loads a small set of business records for one tenant and prints its health report.
"""

import asyncio
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add parent directory to path to import bizpulse modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import delete

from bizpulse import models
from bizpulse.analytics.data_access import SQLAlchemyDataSource
from bizpulse.analytics.exceptions import DataFetchError
from bizpulse.analytics.service import AnalyticsService
from bizpulse.database.connection import async_session_factory, close_db, init_db


def build_demo_records(tenant_id: str, now: datetime) -> list:
    """Orders over the last three months, open invoices, POs and a small catalog."""
    records = []

    for index, (days_ago, amount, status) in enumerate([
        (2, 5200, "Paid"),
        (5, 4300, "Paid"),
        (9, 1800, "Pending"),
        (35, 3900, "Paid"),
        (40, 4100, "Paid"),
        (70, 2600, "Paid"),
    ], start=1):
        records.append(models.Order(
            id=f"{tenant_id}-ord-{index}",
            tenant_id=tenant_id,
            order_number=f"ORD-{1000 + index}",
            customer_name=f"Customer {index}",
            order_date=now - timedelta(days=days_ago),
            total_amount=amount,
            payment_status=status,
            items=[{"itemId": f"{tenant_id}-prd-1", "name": "Espresso Beans", "quantity": 1, "total": amount}],
        ))

    for index, (days_ago, total, status) in enumerate([
        (10, 6000, "Sent"),
        (45, 3500, "Sent"),
        (80, 12500, "Overdue"),
        (20, 9000, "Paid"),
    ], start=1):
        records.append(models.Invoice(
            id=f"{tenant_id}-inv-{index}",
            tenant_id=tenant_id,
            invoice_number=f"INV-{2000 + index}",
            date=now - timedelta(days=days_ago),
            status=status,
            total=total,
            tax=round(total * 0.18, 2),
        ))

    for index, (total, status) in enumerate([(7000, "Pending"), (4000, "Confirmed"), (2500, "Received")], start=1):
        records.append(models.PurchaseOrder(
            id=f"{tenant_id}-po-{index}",
            tenant_id=tenant_id,
            po_number=f"PO-{3000 + index}",
            supplier_id="sup-1",
            supplier_name="Highland Roasters",
            status=status,
            total_amount=total,
        ))

    for index, (stock, minimum, cost) in enumerate([(4, 10, 350), (120, 20, 420), (45, 15, 90), (0, 5, 60)], start=1):
        records.append(models.Product(
            id=f"{tenant_id}-prd-{index}",
            tenant_id=tenant_id,
            name=f"Product {index}",
            category="Coffee" if index % 2 else "Equipment",
            supplier_id="sup-1",
            inventory={"stock": stock, "minStockLevel": minimum, "status": "ACTIVE" if stock else "OUT_OF_STOCK"},
            pricing={"costPrice": cost, "sellingPrice": cost * 1.6, "taxPercentage": 18},
        ))

    return records


async def seed(tenant_id: str) -> None:
    """Replace the tenant's records with the demo set."""
    now = datetime.now(timezone.utc)
    async with async_session_factory() as session:
        for model in (models.Order, models.Invoice, models.PurchaseOrder, models.Product):
            await session.execute(delete(model).where(model.tenant_id == tenant_id))
        session.add_all(build_demo_records(tenant_id, now))
        await session.commit()
    print(f"\n✅ Seeded demo records for tenant '{tenant_id}'")


async def print_report(tenant_id: str) -> None:
    """Generate and print the headline numbers of the analytics report."""
    service = AnalyticsService(SQLAlchemyDataSource(async_session_factory))
    report = await service.generate_advanced_analytics(tenant_id)

    score = report.business_health_score
    print("\n" + "-" * 60)
    print(f"  Health score:     {score.overall_score}/100")
    print(f"  Revenue growth:   {report.revenue_insights.revenue_growth:.1f}%")
    print(f"  Capital blocked:  {report.inventory_insights.capital_blocked:,.2f}")
    print(f"  Cash risk:        {report.cash_flow_insights.cash_risk_level.value}")
    print(f"  {report.revenue_insights.smart_insight}")
    print(f"  {report.cash_flow_insights.smart_alert}")
    for recommendation in report.action_recommendations:
        print(f"  • [{recommendation.priority.value}] {recommendation.title}")
    print("-" * 60)


async def main() -> None:
    """Main script entry point."""
    print("=" * 60)
    print("📊 Seed Demo Tenant")
    print("=" * 60)

    tenant_id = sys.argv[1] if len(sys.argv) > 1 else "demo-tenant"

    try:
        await init_db()
        await seed(tenant_id)
        await print_report(tenant_id)
        print("\n✅ Done!")
    except DataFetchError as e:
        print(f"\n❌ Could not load records: {e.message}")
        sys.exit(1)
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
