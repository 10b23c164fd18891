"""Seed a database with a small demo tenant.

Usage:
    python scripts/seed_demo.py [--database-url URL] [--tenant-id UUID]

Creates the tables if needed, then adds two projects, three contractors,
their assignments and a handful of payments and expenses for one tenant.
"""

from __future__ import annotations

import argparse
import asyncio
from datetime import date, timedelta
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from symbifi.config import get_settings
from symbifi.database import create_all, get_engine
from symbifi.models import Contractor, Expense, Payment, Project, ProjectTeam


async def seed(database_url: str, tenant_id: UUID) -> None:
    """Insert the demo rows for tenant_id."""
    engine = get_engine(database_url)
    await create_all(engine)

    today = date.today()
    try:
        async with AsyncSession(engine, expire_on_commit=False) as session:
            website = Project(
                id=uuid4(),
                owner_id=tenant_id,
                name="Website Redesign",
                client_name="Acme Ltd",
                start_date=today - timedelta(days=60),
                total_budget=Decimal("1500000.00"),
                status="Active",
            )
            app = Project(
                id=uuid4(),
                owner_id=tenant_id,
                name="Mobile App",
                client_name="Globex",
                start_date=today - timedelta(days=120),
                end_date=today - timedelta(days=10),
                total_budget=Decimal("4000000.00"),
                status="Completed",
            )
            designer = Contractor(
                id=uuid4(), owner_id=tenant_id, full_name="Ada Obi",
                role="Designer", email="ada@example.com",
            )
            developer = Contractor(
                id=uuid4(), owner_id=tenant_id, full_name="Tunde Bello",
                role="Developer", email="tunde@example.com",
            )
            studio = Contractor(
                id=uuid4(), owner_id=tenant_id, full_name="Pixel Studio",
                role="QA", email="hello@pixel.example", contractor_type="Agency",
            )
            session.add_all([website, app, designer, developer, studio])
            await session.flush()

            session.add_all([
                ProjectTeam(
                    owner_id=tenant_id, project_id=website.id, contractor_id=designer.id,
                    responsibility="UI design", payment_type="Fixed Amount",
                    agreed_amount=Decimal("300000.00"), payment_status="Partially Paid",
                ),
                ProjectTeam(
                    owner_id=tenant_id, project_id=website.id, contractor_id=developer.id,
                    responsibility="Frontend", payment_type="Percentage",
                    percentage_share=Decimal("25.00"), payment_status="Unpaid",
                ),
                ProjectTeam(
                    owner_id=tenant_id, project_id=app.id, contractor_id=studio.id,
                    responsibility="Testing", payment_type="Fixed Amount",
                    agreed_amount=Decimal("500000.00"), payment_status="Paid",
                ),
                Payment(
                    owner_id=tenant_id, project_id=website.id, contractor_id=designer.id,
                    amount_paid=Decimal("150000.00"), payment_date=today,
                    payment_method="Bank Transfer", reference="TRF-001",
                ),
                Payment(
                    owner_id=tenant_id, project_id=app.id, contractor_id=studio.id,
                    amount_paid=Decimal("500000.00"), payment_date=today - timedelta(days=15),
                    payment_method="Wallet",
                ),
                Expense(
                    owner_id=tenant_id, project_id=website.id, description="Stock photos",
                    category="Assets", amount=Decimal("45000.00"), expense_date=today,
                ),
            ])
            await session.commit()
    finally:
        await engine.dispose()

    print(f"Seeded demo data for tenant {tenant_id}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo data")
    parser.add_argument("--database-url", type=str, help="Database URL (default: DATABASE_URL)")
    parser.add_argument("--tenant-id", type=UUID, default=None, help="Tenant to own the rows")
    args = parser.parse_args()

    database_url = args.database_url or get_settings().database_url
    asyncio.run(seed(database_url, args.tenant_id or uuid4()))


if __name__ == "__main__":
    main()
