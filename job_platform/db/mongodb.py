"""
MongoDB Connection Utility

MongoDB stores:
- Employer accounts (credentials)
- Job postings
- Candidate applications

Presence (which employer is connected where) is NOT stored here;
it lives in process memory only.
"""
from typing import Optional

from pymongo import ASCENDING, DESCENDING, TEXT, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection

from job_platform.core.config import get_settings
from job_platform.core.logging import get_logger

settings = get_settings()
logger = get_logger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: Optional[MongoClient] = None
_db: Optional[Database] = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Database named in the URI, falling back to settings.mongodb_db"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client.get_default_database(default=settings.mongodb_db)
    return _db


def get_collection(name: str) -> Collection:
    """
    Get a specific collection.
    Collections we'll use:
    - employers: Registered employer accounts
    - jobs: Job postings
    - applications: Candidate applications
    """
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "employers": "employers",
    "jobs": "jobs",
    "applications": "applications",
}


def init_mongo_indexes(db: Optional[Database] = None):
    """
    Create indexes for better query performance.
    Call this once during app startup.
    """
    db = db if db is not None else get_mongo_db()

    # One account per email
    db[COLLECTIONS["employers"]].create_index("email", unique=True)

    # Free-text search over title + location
    db[COLLECTIONS["jobs"]].create_index([("title", TEXT), ("location", TEXT)])

    # Salary range filtering
    db[COLLECTIONS["jobs"]].create_index([
        ("salaryRange.min", ASCENDING),
        ("salaryRange.max", DESCENDING)
    ])

    db[COLLECTIONS["applications"]].create_index("jobId")

    logger.info("MongoDB indexes created successfully")
