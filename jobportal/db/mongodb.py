"""
MongoDB Connection Utility

MongoDB stores:
- Uploaded resumes and profile photos (GridFS bucket, default "uploads")
- User documents (read here only to resolve a user's resume)

Unlike a lazily created module-level client, the client and bucket are built
once in the app lifespan (see main.py) and handed to routes through
dependencies, so there is exactly one of each per process.
"""
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError
from gridfs import GridFSBucket
import structlog

from jobportal.core.config import Settings

logger = structlog.get_logger(__name__)


def create_mongo_client(settings: Settings) -> MongoClient:
    """Create the process-wide MongoDB client (pooling handled by pymongo)."""
    # pymongo connects lazily, so this does not block startup
    return MongoClient(settings.mongodb_uri)


def get_database(client: MongoClient, settings: Settings) -> Database:
    """Get the job portal database."""
    return client[settings.mongodb_db]


def create_gridfs_bucket(db: Database, settings: Settings) -> GridFSBucket:
    """
    Create the GridFS bucket used for uploads.
    Collections: <bucket>.files and <bucket>.chunks
    """
    bucket = GridFSBucket(db, bucket_name=settings.gridfs_bucket_name)
    logger.info("GridFS bucket initialized", bucket_name=settings.gridfs_bucket_name)
    return bucket


def test_mongo_connection(client: MongoClient) -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        # ping command checks connection
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning("MongoDB connection failed", error=str(e))
        return False
