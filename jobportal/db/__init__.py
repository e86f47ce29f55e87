"""
Database module - MongoDB client and GridFS bucket.
"""
from jobportal.db.mongodb import (
    create_mongo_client,
    create_gridfs_bucket,
    get_database,
    test_mongo_connection,
)

__all__ = [
    "create_mongo_client",
    "create_gridfs_bucket",
    "get_database",
    "test_mongo_connection",
]
