"""
Database connection and collection utilities.

Provides a lazily created pymongo client and access to the catalog
collections. Driver errors are wrapped with an operation-specific message
by the store_operation() context manager before they leave a repository.

For testing, use set_database_override() to inject a database (for example
a mongomock database) that will be used instead of the real client.
"""

import threading
from contextlib import contextmanager

from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from kennel.config import config
from kennel.errors import StoreUnavailable
from kennel.logger import get_logger

logger = get_logger(__name__)

BREEDS = "breeds"
DOGS = "dogs"

# =============================================================================
# Database Override (for testing)
# =============================================================================

_database_override: Database | None = None


def set_database_override(database: Database) -> None:
    """
    Set a database to use instead of the configured one.

    Used by test fixtures so every repository works against the same
    throwaway database.

    Args:
        database: The database to use for all subsequent operations
    """
    global _database_override
    _database_override = database


def clear_database_override() -> None:
    """Clear the database override, restoring normal behavior."""
    global _database_override
    _database_override = None


# =============================================================================
# Client Management
# =============================================================================

_client: MongoClient | None = None
_client_lock = threading.Lock()


def get_client() -> MongoClient:
    """
    Return the process-wide client, creating it on first use.

    MongoClient is thread-safe and pools connections, so one instance is
    shared by every repository.
    """
    global _client
    with _client_lock:
        if _client is None:
            _client = MongoClient(config.mongodb_uri)
            logger.info(f"MongoDB client created for database '{config.mongodb_database}'")
        return _client


def close_client() -> None:
    """Close the shared client if it was created."""
    global _client
    with _client_lock:
        if _client is not None:
            _client.close()
            _client = None
            logger.info("MongoDB client closed.")


def get_database() -> Database:
    """Return the catalog database (or the test override)."""
    if _database_override is not None:
        return _database_override
    return get_client()[config.mongodb_database]


def get_collection(name: str) -> Collection:
    """Return a collection of the catalog database."""
    return get_database()[name]


# =============================================================================
# Error Wrapping
# =============================================================================


@contextmanager
def store_operation(message: str):
    """
    Wrap driver failures raised inside the block in StoreUnavailable.

    Usage:
        with store_operation("failed to delete dog"):
            result = collection.delete_one({"_id": oid})
    """
    try:
        yield
    except PyMongoError as err:
        logger.error(f"{message}: {err}")
        raise StoreUnavailable(message, err) from err


# =============================================================================
# Indexes
# =============================================================================


def ensure_indexes() -> None:
    """
    Create the indexes the repositories rely on.

    Safe to call multiple times.
    """
    with store_operation("failed to create indexes"):
        breeds = get_collection(BREEDS)
        breeds.create_index([("created_at", ASCENDING), ("_id", ASCENDING)])
        breeds.create_index([("category", ASCENDING)])

        dogs = get_collection(DOGS)
        dogs.create_index([("created_at", ASCENDING), ("_id", ASCENDING)])
        dogs.create_index([("owner_id", ASCENDING)])
        dogs.create_index([("breed_id", ASCENDING)])
    logger.info("Catalog indexes ensured.")
