#!/usr/bin/env python3
"""
Connection Test Script

Run this to verify the MongoDB connection and indexes.
Usage: python scripts/test_connections.py
"""
import sys
sys.path.insert(0, '.')

from job_platform.db.mongodb import test_mongo_connection, init_mongo_indexes, get_mongo_db, COLLECTIONS
from job_platform.core.config import get_settings


def main():
    settings = get_settings()
    print("=" * 50)
    print("JOB POSTING API - CONNECTION TEST")
    print("=" * 50)

    # Test MongoDB
    print("\n[1] Testing MongoDB...")
    print(f"    URI: {settings.mongodb_uri}")
    if not test_mongo_connection():
        print("    ❌ MongoDB: FAILED")
        return 1
    db = get_mongo_db()
    print(f"    Database: {db.name}")
    print("    ✅ MongoDB: CONNECTED")

    # Indexes
    print("\n[2] Creating indexes...")
    init_mongo_indexes(db)
    for name in COLLECTIONS.values():
        indexes = sorted(db[name].index_information())
        print(f"    ✅ {name}: {', '.join(indexes)}")

    # Token secret
    print("\n[3] Checking JWT secret...")
    if settings.jwt_secret_key == "change-this-secret":
        print("    ⚠️  JWT_SECRET_KEY is the default value, set SECRET_KEY in .env")
    else:
        print("    ✅ JWT secret configured")

    print("\n" + "=" * 50)
    print("Connection test complete!")
    print("=" * 50)
    return 0


if __name__ == "__main__":
    sys.exit(main())
