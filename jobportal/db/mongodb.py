"""
MongoDB Connection Utility

MongoDB stores every portal entity:
- Students (assessment profile + computed scores, keyed by phone)
- Job postings (keyed by generated job_id)
- Colleges (autocomplete directory with usage counts)
- Saved jobs and job applications (student phone + job_id pairs)
"""
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from jobportal.core.config import get_settings
from jobportal.core.logging import get_logger

settings = get_settings()
logger = get_logger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the portal database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection by its constant name (see COLLECTIONS)."""
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
        logger.warning(f"MongoDB connection failed: {e}")
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "students": "students",
    "jobs": "jobs",
    "colleges": "colleges",
    "saved_jobs": "saved_jobs",
    "job_applications": "job_applications"
}


def init_mongo_indexes():
    """
    Create indexes for uniqueness and query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()

    # One profile per phone number
    db[COLLECTIONS["students"]].create_index("phone", unique=True)

    db[COLLECTIONS["jobs"]].create_index("job_id", unique=True)
    db[COLLECTIONS["jobs"]].create_index([("is_active", ASCENDING), ("created_at", DESCENDING)])

    db[COLLECTIONS["colleges"]].create_index("normalized_name", unique=True)
    db[COLLECTIONS["colleges"]].create_index([("usage_count", DESCENDING)])

    # A student can save / apply to a job only once
    db[COLLECTIONS["saved_jobs"]].create_index([
        ("student_phone", ASCENDING),
        ("job_id", ASCENDING)
    ], unique=True)
    db[COLLECTIONS["job_applications"]].create_index([
        ("student_phone", ASCENDING),
        ("job_id", ASCENDING)
    ], unique=True)

    logger.info("MongoDB indexes created successfully")
