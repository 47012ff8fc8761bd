#!/usr/bin/env python3
"""
Database Initialization Script for the Civil Defence Volunteer Portal

This script:
1. Tests database connectivity
2. Creates any missing tables
3. Seeds reference and demo data if requested

Usage:
    python scripts/init_db.py              # Check connection and create tables
    python scripts/init_db.py --check      # Only check connectivity
    python scripts/init_db.py --seed       # Also seed districts, departments and demo users
    python scripts/init_db.py --status     # Show table status
"""

import asyncio
import sys
import argparse
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import inspect  # noqa: E402

from app.core.database import check_db_connection, close_db, get_engine, init_db  # noqa: E402
from app.db.seed_data import seed_all  # noqa: E402


async def test_connection() -> bool:
    """Test database connectivity"""
    print("\n[InitDB] Testing database connection...")
    if await check_db_connection():
        print("[InitDB] Database connection successful!")
        return True
    print("[InitDB] ERROR: Database connection failed")
    return False


async def create_tables() -> bool:
    """Create database tables using SQLAlchemy"""
    print("\n[InitDB] Creating/verifying database tables...")

    try:
        await init_db()
        print("[InitDB] Database tables created/verified!")
        return True

    except Exception as e:
        print(f"[InitDB] ERROR: Table creation failed: {e}")
        import traceback
        traceback.print_exc()
        return False


async def show_table_status():
    """Show current table status"""
    print("\n[InitDB] Database Table Status:")
    print("-" * 50)

    def _describe(sync_conn):
        inspector = inspect(sync_conn)
        return {table: len(inspector.get_columns(table)) for table in inspector.get_table_names()}

    async with get_engine().connect() as conn:
        tables = await conn.run_sync(_describe)

    print(f"Total tables: {len(tables)}")
    print("\nTables:")
    for table in sorted(tables):
        print(f"  - {table} ({tables[table]} columns)")


async def main():
    """Main initialization function"""
    parser = argparse.ArgumentParser(description="Civil Defence Portal Database Initialization")
    parser.add_argument("--check", action="store_true", help="Only check connectivity")
    parser.add_argument("--seed", action="store_true", help="Include seed data")
    parser.add_argument("--status", action="store_true", help="Show table status")

    args = parser.parse_args()

    print("=" * 50)
    print("  Civil Defence Portal - Database Initialization")
    print("=" * 50)

    try:
        # Always test connection first
        if not await test_connection():
            print("\n[InitDB] FAILED: Cannot connect to database")
            sys.exit(1)

        if args.check:
            print("\n[InitDB] Connection check completed!")
            return

        if args.status:
            await show_table_status()
            return

        if not await create_tables():
            print("[InitDB] FAILED: Could not create tables")
            sys.exit(1)

        if args.seed:
            await seed_all()

        await show_table_status()

        print("\n" + "=" * 50)
        print("  Database initialization completed!")
        print("=" * 50)
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
