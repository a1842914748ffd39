#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify MongoDB is reachable and create the listing indexes.
Usage: python scripts/check_connections.py
"""
import sys

from pymongo.errors import PyMongoError

from talentlink.core.config import get_settings
from talentlink.db.mongodb import init_mongo_indexes, test_mongo_connection


def main() -> int:
    settings = get_settings()
    print("=" * 50)
    print("TALENTLINK - CONNECTION CHECK")
    print("=" * 50)

    print("\n[1] Testing MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}")
    if not test_mongo_connection():
        print("    MongoDB: FAILED")
        return 1
    print("    MongoDB: CONNECTED")

    print("\n[2] Creating indexes...")
    try:
        init_mongo_indexes()
    except PyMongoError as e:
        print(f"    Index creation FAILED: {e}")
        return 1
    print("    Indexes: OK")

    print("\n" + "=" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(main())
