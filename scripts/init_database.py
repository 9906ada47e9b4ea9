#!/usr/bin/env python3
"""
Database Initialization Script

Run this script to create the habit tracker tables.
"""

import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from config.database import configure_database, count_users, init_database
from config.settings import settings


def main():
    """Create all tables in the configured database."""
    logging.basicConfig(level=logging.INFO)

    print("🚀 Initializing Habit Tracker Database...")
    print("=" * 50)

    try:
        configure_database(settings.database_url)
        init_database()
        print(f"✅ Database initialized at {settings.database_url}")

        print("\n📊 Database Structure:")
        print("   - users: Accounts (username, email, password hash)")
        print("   - habits: Habits with streak and last check time")
        print(f"\n👤 Registered users: {count_users()}")

    except Exception as e:
        print(f"❌ Error initializing database: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
