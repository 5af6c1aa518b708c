"""Service for job listings ("categories") stored in MongoDB."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pymongo.database import Database
from pymongo.errors import PyMongoError

from workvista.database import categories, to_json_document
from workvista.errors import NotFound, StoreError, ValidationFailed
from workvista.schemas import Listing, ListingUpdate
from workvista.utils.ownership import authorize, authorize_record, parse_object_id

OWNER_FIELD = "email"


def list_listings(db: Database, category: Optional[str] = None) -> List[Dict[str, Any]]:
    """Return every listing, optionally restricted to one category tag."""
    query: Dict[str, Any] = {}
    if category:
        query["category"] = category

    try:
        return [to_json_document(doc) for doc in categories(db).find(query)]
    except PyMongoError as exc:
        raise StoreError() from exc


def get_listing(db: Database, listing_id: str) -> Dict[str, Any]:
    """Return one listing by id. Any authenticated caller may view it."""
    oid = parse_object_id(listing_id)
    try:
        document = categories(db).find_one({"_id": oid})
    except PyMongoError as exc:
        raise StoreError() from exc

    if document is None:
        raise NotFound(f"No listing with id {listing_id!r}.")
    return to_json_document(document)


def create_listing(db: Database, identity: Dict[str, Any], listing: Listing) -> str:
    """Insert a listing posted by the caller and return its id."""
    authorize(identity, listing.email)

    try:
        result = categories(db).insert_one(listing.to_document())
    except PyMongoError as exc:
        raise StoreError() from exc
    return str(result.inserted_id)


def update_listing(
    db: Database,
    identity: Dict[str, Any],
    listing_id: str,
    update: ListingUpdate,
) -> Dict[str, Any]:
    """Set fields on a listing, creating it when the id is unused.

    An existing listing must belong to the caller, and the update may not hand
    the listing to another owner. A newly created listing is owned by the caller.
    """
    oid = parse_object_id(listing_id)
    fields = update.to_document()
    if OWNER_FIELD in fields:
        authorize(identity, fields[OWNER_FIELD])

    existing = authorize_record(categories(db), oid, OWNER_FIELD, identity, missing_ok=True)
    if existing is None:
        fields[OWNER_FIELD] = identity["email"]
    elif not fields:
        raise ValidationFailed("No fields to update.")

    try:
        result = categories(db).update_one({"_id": oid}, {"$set": fields}, upsert=True)
    except PyMongoError as exc:
        raise StoreError() from exc

    return {
        "acknowledged": result.acknowledged,
        "matchedCount": result.matched_count,
        "modifiedCount": result.modified_count,
        "upsertedCount": 1 if result.upserted_id is not None else 0,
        "upsertedId": str(result.upserted_id) if result.upserted_id is not None else None,
    }


def delete_listing(db: Database, identity: Dict[str, Any], listing_id: str) -> Dict[str, Any]:
    """Delete a listing owned by the caller."""
    oid = parse_object_id(listing_id)
    authorize_record(categories(db), oid, OWNER_FIELD, identity)

    try:
        result = categories(db).delete_one({"_id": oid})
    except PyMongoError as exc:
        raise StoreError() from exc

    return {"acknowledged": result.acknowledged, "deletedCount": result.deleted_count}


def list_own_listings(db: Database, identity: Dict[str, Any], email: Optional[str]) -> List[Dict[str, Any]]:
    """Return the listings posted by ``email``, which must be the caller."""
    authorize(identity, email)

    try:
        return [to_json_document(doc) for doc in categories(db).find({OWNER_FIELD: email})]
    except PyMongoError as exc:
        raise StoreError() from exc
