"""Tests for job listing routes and their ownership rules."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import mongomock
import pytest
from bson import ObjectId
from pymongo.errors import PyMongoError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from workvista.services import listing_service  # noqa: E402


def _listing(email: str, category: str = "design", **extra):
    document = {
        "email": email,
        "category": category,
        "job_title": "Landing page",
        "deadline": "2026-12-01",
        "minimum_price": 100,
        "maximum_price": 300,
    }
    document.update(extra)
    return document


def test_list_categories_is_public_and_filtered(client, mongo_db):
    mongo_db.categories.insert_many([
        _listing("alice@x.com", "design"),
        _listing("bob@x.com", "design"),
        _listing("bob@x.com", "marketing"),
    ])

    response = client.get("/categories?category=design")

    assert response.status_code == 200
    listings = response.get_json()
    assert len(listings) == 2
    assert {listing["category"] for listing in listings} == {"design"}
    assert all(isinstance(listing["_id"], str) for listing in listings)


def test_list_categories_without_filter(client, mongo_db):
    mongo_db.categories.insert_many([_listing("alice@x.com", "design"), _listing("bob@x.com", "web")])

    response = client.get("/categories")

    assert len(response.get_json()) == 2


def test_get_category_for_any_signed_in_user(client, login, mongo_db):
    listing_id = mongo_db.categories.insert_one(_listing("bob@x.com")).inserted_id
    login("alice@x.com")

    response = client.get(f"/categories/{listing_id}")

    assert response.status_code == 200
    assert response.get_json()["_id"] == str(listing_id)
    assert response.get_json()["email"] == "bob@x.com"


@pytest.mark.parametrize("listing_id", [str(ObjectId()), "not-an-object-id"])
def test_get_category_missing_is_404(client, login, listing_id):
    login("alice@x.com")

    response = client.get(f"/categories/{listing_id}")

    assert response.status_code == 404


def test_create_category_for_self(client, login, mongo_db):
    login("alice@x.com")

    response = client.post("/categories", json=_listing("alice@x.com", description="Need a logo"))

    assert response.status_code == 200
    body = response.get_json()
    assert body["message"] == "Data stored successfully"
    stored = mongo_db.categories.find_one({"_id": ObjectId(body["insertedId"])})
    assert stored["email"] == "alice@x.com"
    assert stored["description"] == "Need a logo"


def test_create_category_for_someone_else_is_forbidden(client, login, mongo_db):
    login("alice@x.com")

    response = client.post("/categories", json=_listing("bob@x.com"))

    assert response.status_code == 403
    assert response.get_json() == {"message": "You are trying to get data you have no access to"}
    assert mongo_db.categories.count_documents({}) == 0


def test_create_category_requires_owner_email(client, login, mongo_db):
    login("alice@x.com")

    response = client.post("/categories", json={"category": "design"})

    assert response.status_code == 400
    assert response.get_json()["details"][0]["field"] == "email"
    assert mongo_db.categories.count_documents({}) == 0


def test_create_category_ignores_client_supplied_id(client, login, mongo_db):
    login("alice@x.com")
    forced_id = str(ObjectId())

    response = client.post("/categories", json=_listing("alice@x.com", _id=forced_id))

    assert response.status_code == 200
    assert response.get_json()["insertedId"] != forced_id


def test_update_category_owned_by_caller(client, login, mongo_db):
    listing_id = mongo_db.categories.insert_one(_listing("alice@x.com")).inserted_id
    login("alice@x.com")

    response = client.put(f"/categories/{listing_id}", json={"job_title": "Full website"})

    assert response.status_code == 200
    assert response.get_json() == {
        "acknowledged": True,
        "matchedCount": 1,
        "modifiedCount": 1,
        "upsertedCount": 0,
        "upsertedId": None,
    }
    assert mongo_db.categories.find_one({"_id": listing_id})["job_title"] == "Full website"


def test_update_category_owned_by_other_is_forbidden(client, login, mongo_db):
    listing_id = mongo_db.categories.insert_one(_listing("bob@x.com")).inserted_id
    login("alice@x.com")

    response = client.put(f"/categories/{listing_id}", json={"job_title": "Hijacked", "email": "alice@x.com"})

    assert response.status_code == 403
    assert mongo_db.categories.find_one({"_id": listing_id})["job_title"] == "Landing page"


def test_update_category_cannot_transfer_ownership(client, login, mongo_db):
    listing_id = mongo_db.categories.insert_one(_listing("alice@x.com")).inserted_id
    login("alice@x.com")

    response = client.put(f"/categories/{listing_id}", json={"email": "bob@x.com"})

    assert response.status_code == 403
    assert mongo_db.categories.find_one({"_id": listing_id})["email"] == "alice@x.com"


def test_update_category_upserts_missing_listing(client, login, mongo_db):
    listing_id = ObjectId()
    login("alice@x.com")

    response = client.put(f"/categories/{listing_id}", json={"job_title": "New job", "category": "web"})

    assert response.status_code == 200
    body = response.get_json()
    assert body["upsertedCount"] == 1
    assert body["upsertedId"] == str(listing_id)
    stored = mongo_db.categories.find_one({"_id": listing_id})
    assert stored["email"] == "alice@x.com"
    assert stored["category"] == "web"


def test_update_category_is_idempotent(client, login, mongo_db):
    listing_id = ObjectId()
    body = {"job_title": "Same job", "category": "web", "maximum_price": 500}
    login("alice@x.com")

    client.put(f"/categories/{listing_id}", json=body)
    first = mongo_db.categories.find_one({"_id": listing_id})
    response = client.put(f"/categories/{listing_id}", json=body)
    second = mongo_db.categories.find_one({"_id": listing_id})

    assert response.status_code == 200
    assert first == second
    assert mongo_db.categories.count_documents({}) == 1


def test_update_category_with_empty_body_is_rejected(client, login, mongo_db):
    listing_id = mongo_db.categories.insert_one(_listing("alice@x.com")).inserted_id
    login("alice@x.com")

    response = client.put(f"/categories/{listing_id}", json={})

    assert response.status_code == 400


def test_delete_category_owned_by_caller(client, login, mongo_db):
    listing_id = mongo_db.categories.insert_one(_listing("alice@x.com")).inserted_id
    login("alice@x.com")

    response = client.delete(f"/categories/{listing_id}")

    assert response.status_code == 200
    assert response.get_json() == {"acknowledged": True, "deletedCount": 1}
    assert mongo_db.categories.count_documents({}) == 0


def test_delete_category_owned_by_other_is_forbidden(client, login, mongo_db):
    listing_id = mongo_db.categories.insert_one(_listing("bob@x.com")).inserted_id
    login("alice@x.com")

    response = client.delete(f"/categories/{listing_id}")

    assert response.status_code == 403
    assert mongo_db.categories.count_documents({}) == 1


def test_delete_missing_category_is_404(client, login):
    login("alice@x.com")

    response = client.delete(f"/categories/{ObjectId()}")

    assert response.status_code == 404


def test_my_posts_returns_only_callers_listings(client, login, mongo_db):
    mongo_db.categories.insert_many([
        _listing("alice@x.com", "design"),
        _listing("alice@x.com", "web"),
        _listing("bob@x.com", "design"),
    ])
    login("alice@x.com")

    response = client.get("/myPosts?email=alice@x.com")

    assert response.status_code == 200
    listings = response.get_json()
    assert len(listings) == 2
    assert {listing["email"] for listing in listings} == {"alice@x.com"}


@pytest.mark.parametrize("query", ["?email=bob@x.com", ""])
def test_my_posts_for_other_identity_is_forbidden(client, login, query):
    login("alice@x.com")

    response = client.get(f"/myPosts{query}")

    assert response.status_code == 403


def test_store_failure_is_generic_500(client, monkeypatch):
    def _boom(self, *args, **kwargs):
        raise PyMongoError("connection refused to cluster0 shard 2")

    monkeypatch.setattr(mongomock.collection.Collection, "find", _boom)

    response = client.get("/categories")

    assert response.status_code == 500
    assert response.get_json() == {"message": "Internal Server Error"}
    assert "cluster0" not in response.get_data(as_text=True)


def test_insert_failure_is_generic_500(client, login, mongo_db, monkeypatch):
    login("alice@x.com")

    def _boom(self, *args, **kwargs):
        raise PyMongoError("write concern failed on cluster0")

    monkeypatch.setattr(mongomock.collection.Collection, "insert_one", _boom)

    response = client.post("/categories", json=_listing("alice@x.com"))

    assert response.status_code == 500
    assert response.get_json() == {"message": "Internal Server Error"}
    assert "cluster0" not in response.get_data(as_text=True)


def test_unexpected_error_is_generic_500_and_logged(client, login, monkeypatch, caplog):
    login("alice@x.com")

    def _crash(*args, **kwargs):
        raise RuntimeError("secret detail")

    monkeypatch.setattr(listing_service, "create_listing", _crash)

    with caplog.at_level(logging.ERROR):
        response = client.post("/categories", json=_listing("alice@x.com"))

    assert response.status_code == 500
    assert response.get_json() == {"message": "Internal Server Error"}
    assert "secret detail" not in response.get_data(as_text=True)
    assert "secret detail" in caplog.text
