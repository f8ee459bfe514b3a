"""
Seed a demo database with two nights of balances and one day of ledgers.

Useful for trying the API locally:
    python init_sample_data.py
    GET /api/reconciliation/<today>
"""
import asyncio
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

from cashup.core.container import get_container
from cashup.db.models import CreditPayment, Expense, Invoice, Order
from cashup.infrastructure.database.session import init_db
from cashup.modules.snapshots import SnapshotInput


async def seed_sample_data() -> None:
    container = get_container()
    await init_db()

    today = date.today()
    yesterday = today - timedelta(days=1)
    noon = datetime.combine(today, time(12, 0), tzinfo=container.settings.tz).astimezone(timezone.utc)

    snapshots = container.snapshot_service()
    if await snapshots.get_for_day(yesterday) is not None:
        print("Sample data already present")
        return

    await snapshots.save_snapshot(
        yesterday,
        SnapshotInput(cash_sos="720,000", cash_usd="310", evc="120.50", edahab="40", merchant="0"),
    )

    async with container.session_factory() as session:
        async with session.begin():
            session.add_all(
                [
                    Order(total=Decimal("35.00"), note=None, created_at=noon),
                    Order(total=Decimal("65.00"), note="cash", created_at=noon),
                    Order(total=Decimal("20.00"), note="DEYN - Hodan", created_at=noon),
                    CreditPayment(credit_id="c-17", amount=Decimal("15.00"), created_at=noon),
                    Expense(amount=Decimal("12.50"), note="Transport", payment_method="EVC Plus", created_at=noon),
                    Invoice(invoice_date=today, total_amount=Decimal("60.00"), comments="Milk supplier"),
                ]
            )

    await snapshots.save_snapshot(
        today,
        SnapshotInput(cash_sos="720,000", cash_usd="352.50", evc="120.50", edahab="40", merchant="0"),
    )

    run = await container.reconciliation_service().run(today)
    print(f"Seeded {yesterday} and {today}")
    print(f"Expected change: {run.result.expected}  Actual change: {run.result.actual}")
    print(f"Status: {run.result.status.value}")


if __name__ == "__main__":
    asyncio.run(seed_sample_data())
