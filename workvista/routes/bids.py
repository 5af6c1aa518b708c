"""/myBids and /bidRequests routes for bids on job listings."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from workvista.context import get_context
from workvista.schemas import Bid, BidStatusUpdate, parse_payload
from workvista.services import bid_service
from workvista.utils.auth import require_session

bp = Blueprint("bids", __name__)


@bp.post("/myBids")
def create_bid():
    """Store a bid placed by the caller."""
    identity, error_response = require_session()
    if error_response is not None:
        return error_response

    bid = parse_payload(Bid, request.get_json(silent=True))
    inserted_id = bid_service.create_bid(get_context().db, identity, bid)
    return jsonify(message="Data stored successfully", insertedId=inserted_id), 200


@bp.get("/myBids")
def list_my_bids():
    """Return the caller's bids sorted by status."""
    identity, error_response = require_session()
    if error_response is not None:
        return error_response

    result = bid_service.list_own_bids(get_context().db, identity, request.args.get("email"))
    return jsonify(result), 200


@bp.get("/bidRequests")
def list_bid_requests():
    """Return bids other users placed on the caller's jobs."""
    identity, error_response = require_session()
    if error_response is not None:
        return error_response

    result = bid_service.list_bid_requests(get_context().db, identity, request.args.get("email"))
    return jsonify(result), 200


@bp.put("/bidRequests/<bid_id>")
def update_bid_request_status(bid_id: str):
    identity, error_response = require_session()
    if error_response is not None:
        return error_response

    update = parse_payload(BidStatusUpdate, request.get_json(silent=True))
    bid_service.update_bid_status(get_context().db, identity, bid_id, update.status)
    return jsonify(message="Status updated successfully"), 200
