"""Ownership checks restricting callers to their own identity-scoped data."""

from __future__ import annotations

from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId
from flask import current_app
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from workvista.errors import Forbidden, NotFound, StoreError

ACCESS_DENIED_MESSAGE = "You are trying to get data you have no access to"


def parse_object_id(record_id: str) -> ObjectId:
    """Convert a path id to an ObjectId; ids that can never match are NotFound."""
    try:
        return ObjectId(record_id)
    except (InvalidId, TypeError) as exc:
        raise NotFound(f"No record with id {record_id!r}.") from exc


def authorize(verified_identity: Dict[str, Any], claimed_identity: Optional[str]) -> None:
    """Raise Forbidden unless ``claimed_identity`` is exactly the caller's email."""
    caller = verified_identity.get("email")
    if not isinstance(claimed_identity, str) or claimed_identity != caller:
        current_app.logger.warning(
            "Ownership denied: caller %r claimed %r", caller, claimed_identity
        )
        raise Forbidden(ACCESS_DENIED_MESSAGE)


def authorize_record(
    collection: Collection,
    record_id: ObjectId,
    owner_field: str,
    verified_identity: Dict[str, Any],
    missing_ok: bool = False,
) -> Optional[Dict[str, Any]]:
    """Load the targeted record and check that the caller owns it.

    Returns the record. Raises NotFound if it does not exist (or returns None
    when ``missing_ok``) and Forbidden if its ``owner_field`` names someone else.
    """
    try:
        record = collection.find_one({"_id": record_id})
    except PyMongoError as exc:
        raise StoreError() from exc

    if record is None:
        if missing_ok:
            return None
        raise NotFound(f"No record with id {record_id}.")

    authorize(verified_identity, record.get(owner_field))
    return record
