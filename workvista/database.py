"""MongoDB connection management and collection access."""

from __future__ import annotations

from typing import Any, Dict, Optional

from bson import ObjectId
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.server_api import ServerApi

from workvista.config import AppConfig

CATEGORIES_COLLECTION = "categories"
BIDS_COLLECTION = "myBids"

# Process-wide client, created once by the application factory.
_client: Optional[MongoClient] = None


def get_mongo_client(config: AppConfig) -> MongoClient:
    """Get or create the MongoDB client instance."""
    global _client
    if _client is None:
        _client = MongoClient(
            config.mongodb_uri,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
        )
    return _client


def get_database(config: AppConfig) -> Database:
    """Get the WorkVista database instance."""
    client = get_mongo_client(config)
    return client[config.mongodb_database]


def close_mongo_connection() -> None:
    """Close the MongoDB connection."""
    global _client
    if _client is not None:
        _client.close()
        _client = None


def categories(db: Database) -> Collection:
    return db[CATEGORIES_COLLECTION]


def bids(db: Database) -> Collection:
    return db[BIDS_COLLECTION]


def create_indexes(db: Database) -> None:
    """Create the indexes backing the listing and bid lookups."""
    categories(db).create_index([("category", ASCENDING)])
    categories(db).create_index([("email", ASCENDING)])
    bids(db).create_index([("yourEmail", ASCENDING), ("status", ASCENDING)])
    bids(db).create_index([("buyerEmail", ASCENDING)])


def to_json_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``document`` with its ObjectId rendered as a string."""
    rendered = dict(document)
    if isinstance(rendered.get("_id"), ObjectId):
        rendered["_id"] = str(rendered["_id"])
    return rendered
