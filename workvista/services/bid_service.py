"""Service for bids ("myBids") stored in MongoDB."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pymongo import ASCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from workvista.database import bids, to_json_document
from workvista.errors import StoreError
from workvista.schemas import Bid
from workvista.utils.ownership import authorize, authorize_record, parse_object_id

BIDDER_FIELD = "yourEmail"
BUYER_FIELD = "buyerEmail"


def create_bid(db: Database, identity: Dict[str, Any], bid: Bid) -> str:
    """
    Store a bid submitted by the caller.

    Args:
        db: The WorkVista database
        identity: The caller's verified identity claim
        bid: The validated bid; ``yourEmail`` must be the caller

    Returns:
        The inserted document ID as a string
    """
    authorize(identity, bid.yourEmail)

    try:
        result = bids(db).insert_one(bid.to_document())
    except PyMongoError as exc:
        raise StoreError() from exc
    return str(result.inserted_id)


def list_own_bids(db: Database, identity: Dict[str, Any], email: Optional[str]) -> List[Dict[str, Any]]:
    """Return the bids placed by ``email`` ordered by ascending status."""
    authorize(identity, email)

    try:
        cursor = bids(db).find({BIDDER_FIELD: email}).sort("status", ASCENDING)
        return [to_json_document(doc) for doc in cursor]
    except PyMongoError as exc:
        raise StoreError() from exc


def list_bid_requests(db: Database, identity: Dict[str, Any], email: Optional[str]) -> List[Dict[str, Any]]:
    """Return the bids placed against listings owned by ``email``."""
    authorize(identity, email)

    try:
        return [to_json_document(doc) for doc in bids(db).find({BUYER_FIELD: email})]
    except PyMongoError as exc:
        raise StoreError() from exc


def update_bid_status(db: Database, identity: Dict[str, Any], bid_id: str, status: str) -> None:
    """
    Move a bid to ``status``.

    Only the owner of the listing the bid targets (``buyerEmail``) may decide
    on it.
    """
    oid = parse_object_id(bid_id)
    authorize_record(bids(db), oid, BUYER_FIELD, identity)

    try:
        bids(db).update_one({"_id": oid}, {"$set": {"status": status}})
    except PyMongoError as exc:
        raise StoreError() from exc
