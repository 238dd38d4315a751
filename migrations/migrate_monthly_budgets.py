#!/usr/bin/env python3
"""Migration script to move per-category budgets into monthly budgets.

Older databases stored a single budget on each category:
- categories.budget_amount (REAL, nullable)

Budgets are now stored per month in the monthly_budgets table. This migration
copies every positive legacy budget into monthly_budgets for one month (the
current month unless --month is given). Later months pick the budgets up
through the normal rollover. Existing monthly rows are never overwritten.

Usage:
    python migrations/migrate_monthly_budgets.py [--db-path PATH] [--month YYYY-MM]
"""

import sys
from pathlib import Path

# Add src to path so we can import budgetbook modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy import text, inspect
from budgetbook.database.factories import create_sqlite_database
from budgetbook.utils.month import Month


def column_exists(engine, table_name: str, column_name: str) -> bool:
    """Check if a column exists in a table.

    Args:
        engine: SQLAlchemy engine
        table_name: Name of the table
        column_name: Name of the column

    Returns:
        True if column exists, False otherwise
    """
    inspector = inspect(engine)
    columns = [col["name"] for col in inspector.get_columns(table_name)]
    return column_name in columns


def migrate_database(database_path: str | None = None, month: Month | None = None) -> int:
    """Copy legacy category budgets into monthly_budgets.

    Args:
        database_path: Path to database file. If None, uses default location.
        month: Month to attach the budgets to. Defaults to the current month.

    Returns:
        Number of monthly budget rows created

    Raises:
        Exception: If migration fails
    """
    month = month or Month.current()
    db = create_sqlite_database(database_path=database_path)
    db.connect()

    try:
        session = db.session_factory()
        try:
            engine = session.bind
            if engine is None:
                raise Exception("Could not get database engine from session")
        finally:
            session.close()

        if not column_exists(engine, "categories", "budget_amount"):
            print("Nothing to migrate: categories table has no budget_amount column")
            return 0

        print(f"Starting migration: copying category budgets into {month.key}...")

        with engine.begin() as conn:
            result = conn.execute(
                text(
                    "INSERT INTO monthly_budgets (category_id, month, budget_amount) "
                    "SELECT c.id, :month, c.budget_amount FROM categories c "
                    "WHERE c.budget_amount IS NOT NULL AND c.budget_amount > 0 "
                    "AND NOT EXISTS ("
                    "  SELECT 1 FROM monthly_budgets m "
                    "  WHERE m.category_id = c.id AND m.month = :month"
                    ")"
                ),
                {"month": month.key},
            )
            created = result.rowcount
            print(f"  Created {created} monthly budget row(s)")

        print("Migration completed successfully!")
        return created

    except Exception as e:
        print(f"Migration failed: {e}")
        raise
    finally:
        db.disconnect()


def main():
    """Main entry point for migration script."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Move per-category budgets into monthly budgets"
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="Path to database file (overrides BUDGETBOOK_DB_PATH environment variable)",
    )
    parser.add_argument(
        "--month",
        type=str,
        help="Month to attach the budgets to (YYYY-MM, default: current month)",
    )
    args = parser.parse_args()

    try:
        month = Month.parse(args.month) if args.month else None
        migrate_database(database_path=args.db_path, month=month)
        return 0
    except Exception as e:
        print(f"\nMigration failed: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
