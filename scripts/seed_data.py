#!/usr/bin/env python3
"""
Database seeding script for development and testing.
Creates an admin, sample owners, and projects with tasks, budget items,
change orders, progress draws and safety incidents.

Admin accounts can only be created here; signup is limited to owner roles.
"""

import asyncio
import sys
from pathlib import Path
from datetime import date, datetime, timedelta

# Add parent directory to path to import our modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from scafflow.database import async_engine, Base, AsyncSessionLocal
from scafflow.models import (
    User,
    UserRole,
    Project,
    Task,
    BudgetItem,
    ChangeOrder,
    ProgressDraw,
    SafetyIncident,
)
from scafflow.services.auth_service import AuthService
from scafflow.services.budget_ledger import BudgetLedger
from scafflow.services.progress_rollup import ProgressRollupEngine

DEMO_PASSWORD = "Scafflow123"


async def create_tables():
    """Create all database tables"""
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("✓ Database tables created")


async def seed_data():
    """Seed the database with sample data"""
    async with AsyncSessionLocal() as session:
        try:
            password_hash = AuthService.hash_password(DEMO_PASSWORD)

            # Create users
            admin = User(
                name="Site Admin",
                email="admin@scafflow.local",
                password_hash=password_hash,
                role=UserRole.ADMIN.value,
            )
            engineer = User(
                name="Priya Raman",
                email="priya.raman@scafflow.local",
                password_hash=password_hash,
                role=UserRole.SITE_ENGINEER.value,
            )
            architect = User(
                name="Tomas Berg",
                email="tomas.berg@scafflow.local",
                password_hash=password_hash,
                role=UserRole.ARCHITECT.value,
            )
            session.add_all([admin, engineer, architect])
            await session.flush()
            print("✓ Created users")

            # Create projects
            project1 = Project(
                owner_id=engineer.id,
                name="Riverside Office Tower",
                description="12-storey steel frame office building",
                location="Riverside, Block C",
                status="active",
                budget_total=2500000,
                budget_spent=640000,
                budget_variance=BudgetLedger.variance(2500000, 640000),
                start_date=date.today() - timedelta(days=120),
                end_date=date.today() + timedelta(days=420),
            )
            project2 = Project(
                owner_id=architect.id,
                name="Harbor Library Extension",
                description="Two-storey timber extension to the public library",
                location="Harbor Road 14",
                status="planning",
                budget_total=780000,
                budget_spent=0,
                budget_variance=BudgetLedger.variance(780000, 0),
                start_date=date.today() + timedelta(days=30),
            )
            session.add_all([project1, project2])
            await session.flush()
            print("✓ Created projects")

            # Create tasks
            session.add_all([
                Task(project_id=project1.id, title="Foundation pour", status="completed",
                     progress_percentage=100, priority="high", assigned_to=engineer.id),
                Task(project_id=project1.id, title="Steel erection levels 1-6", status="in_progress",
                     progress_percentage=55, priority="high"),
                Task(project_id=project1.id, title="Curtain wall procurement", status="pending",
                     progress_percentage=0),
                Task(project_id=project2.id, title="Planning permission", status="in_progress",
                     progress_percentage=40, assigned_to=architect.id),
            ])
            print("✓ Created tasks")

            # Create budget items
            for values in (
                {"project_id": project1.id, "category": "Substructure",
                 "budget_amount": 420000, "spent_amount": 410000},
                {"project_id": project1.id, "category": "Frame",
                 "budget_amount": 900000, "spent_amount": 230000},
                {"project_id": project2.id, "category": "Design fees",
                 "budget_amount": 65000},
            ):
                session.add(BudgetItem(**BudgetLedger.prepare_budget_item(values)))
            print("✓ Created budget items")

            # Create change orders, draws and incidents
            session.add_all([
                ChangeOrder(project_id=project1.id, title="Additional piling",
                            amount=38000, status="approved", requested_by=engineer.id),
                ChangeOrder(project_id=project1.id, title="Upgraded lift package",
                            amount=52000, status="pending", requested_by=engineer.id),
                ProgressDraw(project_id=project1.id, draw_number="PD-001", amount=300000,
                             status="paid", requested_at=datetime.utcnow() - timedelta(days=60),
                             paid_at=datetime.utcnow() - timedelta(days=45)),
                ProgressDraw(project_id=project1.id, draw_number="PD-002", amount=340000,
                             status="requested"),
                SafetyIncident(project_id=project1.id, incident_type="near_miss", severity="medium",
                               description="Unsecured load swung over walkway",
                               reported_by=engineer.id),
            ])
            await session.commit()
            print("✓ Created change orders, progress draws and safety incidents")

            # Derive project progress from the seeded tasks
            rollup = ProgressRollupEngine(session)
            for project in (project1, project2):
                await rollup.recompute(project.id)
            print("✓ Rolled up project progress")

            print("\n✅ Database seeding completed successfully!")

            # Print summary
            print("\nSummary:")
            print("  - Users: 3 (1 admin)")
            print("  - Projects: 2")
            print("  - Tasks: 4")
            print(f"  - Demo password: {DEMO_PASSWORD}")

        except Exception as e:
            await session.rollback()
            print(f"❌ Error seeding database: {e}")
            raise


async def main():
    """Main function"""
    print("Starting database seeding...\n")

    # Create tables first for fresh databases; migrations are a no-op afterwards
    await create_tables()

    await seed_data()


if __name__ == "__main__":
    asyncio.run(main())
