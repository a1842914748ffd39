"""
MongoDB Connection Utility

MongoDB stores every TalentLink record:
- users: accounts and profile data (keyed by uid)
- jobs: job postings from organizations
- courses: course postings from mentors
- enrollments: course enrollments
- posts: social feed posts with likes and comments

WHY MongoDB for these?
- Schema-flexible: profile fields differ per role
- Document-oriented: likes and comments live inside the post
- No joins needed: every query is a filter + sort + limit on one collection
"""
import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from talentlink.core.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

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
    """Get the talentlink database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection (see COLLECTIONS)."""
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
    except PyMongoError as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "jobs": "jobs",
    "courses": "courses",
    "enrollments": "enrollments",
    "posts": "posts"
}


def init_mongo_indexes():
    """
    Create indexes for the listing queries.
    Call this once during app startup.
    """
    db = get_mongo_db()

    # Mentor directory: role filter + email lookup on login
    db[COLLECTIONS["users"]].create_index("role")
    db[COLLECTIONS["users"]].create_index("email", unique=True)

    # Active listings, newest first
    for name in ("jobs", "courses", "posts"):
        db[COLLECTIONS[name]].create_index([
            ("is_active", ASCENDING),
            ("created_at", DESCENDING)
        ])

    db[COLLECTIONS["jobs"]].create_index("organization_id")
    db[COLLECTIONS["courses"]].create_index("mentor_id")
    db[COLLECTIONS["posts"]].create_index("author_id")

    # One enrollment per (course, student)
    db[COLLECTIONS["enrollments"]].create_index([
        ("course_id", ASCENDING),
        ("student_id", ASCENDING)
    ], unique=True)

    logger.info("MongoDB indexes created successfully")
