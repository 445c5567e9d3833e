#!/usr/bin/env python3
"""
Reference data seeding script.

Creates the schema (if missing) and the lookup rows: blood groups, staff
roles, specializations, appointment types, billing categories and
medication categories. Safe to run more than once.

Usage:
    cd backend
    source venv/bin/activate
    python scripts/seed_reference_data.py
"""

import sys
import logging
from pathlib import Path

# Add backend to path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from hms.config import config
from hms.db.database import get_db_session, init_db, close_db_session
from hms.reference_data import seed_reference_data


def main():
    logging.basicConfig(level=logging.DEBUG if config.DEBUG else logging.INFO)

    print("=" * 60)
    print("Hospital Management - Reference Data Seeding")
    print("=" * 60)

    print("\n1. Creating tables...")
    init_db()

    print("\n2. Seeding lookup tables...")
    db = get_db_session()
    try:
        created = seed_reference_data(db)
    finally:
        close_db_session()

    for table, count in created.items():
        print(f"   + {table}: {count} new rows")

    print("\n" + "=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
