#!/usr/bin/env python3
"""
Database reset script for local development.

Drops every table and recreates the schema from the SQLAlchemy models.
Refuses to run against a production environment.
"""

import sys
import os

# Add backend/src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'backend', 'src'))

from core.config import DATABASE_URL, IS_PRODUCTION
from core.database import create_tables, drop_tables
import models  # noqa: F401  (registers tables on Base.metadata)


def reset_database() -> None:
    """Drop all tables and recreate them empty."""
    print("🔄 Resetting clinic database...")
    print(f"Database URL: {DATABASE_URL}")

    if IS_PRODUCTION:
        print("❌ ERROR: Refusing to reset a production database (APP_ENV=production)")
        sys.exit(1)

    drop_tables()
    print("🗑️  All tables dropped")

    create_tables()
    print("✅ All tables created")


if __name__ == "__main__":
    reset_database()
