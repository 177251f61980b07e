#!/usr/bin/env python3
"""
Create All Database Tables Script

This script creates all tables of the Bookshelf API on the database named
by DATABASE_URL, using the SQLAlchemy models.

Usage:
    python scripts/create_tables.py [--drop]
"""

import argparse
import sys
from pathlib import Path

# Add the project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

from bookshelf.core.database import Base, engine
from bookshelf.core.settings import settings

# Import all models to register them with Base.metadata
import bookshelf.models  # noqa: F401


def create_all_tables(drop_first: bool = False) -> bool:
    """Create all database tables."""
    print("Creating All Database Tables")
    print("=" * 40)
    print(f"Environment: {settings.ENVIRONMENT}")
    print(f"Database: {settings.DATABASE_URL[:50]}...")
    print()

    try:
        # Test connection first
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            print("Database connection successful")

        if drop_first:
            print("Dropping existing tables...")
            Base.metadata.drop_all(bind=engine)

        print("Creating tables...")
        Base.metadata.create_all(bind=engine)

        table_names = sorted(inspect(engine).get_table_names())
        print(f"Successfully created {len(table_names)} tables:")
        for table in table_names:
            print(f"  - {table}")
        return True

    except SQLAlchemyError as e:
        print(f"Database error: {e}")
        return False


def main():
    parser = argparse.ArgumentParser(description="Create the Bookshelf tables")
    parser.add_argument(
        "--drop", action="store_true", help="drop every table before creating"
    )
    args = parser.parse_args()

    if not create_all_tables(drop_first=args.drop):
        sys.exit(1)


if __name__ == "__main__":
    main()
