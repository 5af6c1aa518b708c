"""/categories and /myPosts routes for job listings."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from workvista.context import get_context
from workvista.schemas import Listing, ListingUpdate, parse_payload
from workvista.services import listing_service
from workvista.utils.auth import require_session

bp = Blueprint("categories", __name__)


@bp.get("/categories")
def list_categories():
    """Public listing feed, optionally filtered by ``?category=``."""
    listings = listing_service.list_listings(get_context().db, request.args.get("category"))
    return jsonify(listings), 200


@bp.get("/categories/<listing_id>")
def get_category(listing_id: str):
    """Return a single job for the details page."""
    _, error_response = require_session()
    if error_response is not None:
        return error_response

    return jsonify(listing_service.get_listing(get_context().db, listing_id)), 200


@bp.post("/categories")
def create_category():
    """Store a job posted from the add-a-job page."""
    identity, error_response = require_session()
    if error_response is not None:
        return error_response

    listing = parse_payload(Listing, request.get_json(silent=True))
    inserted_id = listing_service.create_listing(get_context().db, identity, listing)
    return jsonify(message="Data stored successfully", insertedId=inserted_id), 200


@bp.put("/categories/<listing_id>")
def update_category(listing_id: str):
    identity, error_response = require_session()
    if error_response is not None:
        return error_response

    update = parse_payload(ListingUpdate, request.get_json(silent=True))
    result = listing_service.update_listing(get_context().db, identity, listing_id, update)
    return jsonify(result), 200


@bp.delete("/categories/<listing_id>")
def delete_category(listing_id: str):
    identity, error_response = require_session()
    if error_response is not None:
        return error_response

    result = listing_service.delete_listing(get_context().db, identity, listing_id)
    return jsonify(result), 200


@bp.get("/myPosts")
def list_my_posts():
    """Return the jobs posted by the caller (``?email=`` must be theirs)."""
    identity, error_response = require_session()
    if error_response is not None:
        return error_response

    listings = listing_service.list_own_listings(get_context().db, identity, request.args.get("email"))
    return jsonify(listings), 200
