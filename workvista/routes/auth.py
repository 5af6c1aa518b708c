"""Session routes issuing and clearing the access token cookie."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from workvista.context import get_context
from workvista.schemas import SessionClaim, parse_payload
from workvista.utils.auth import clear_session_cookie, set_session_cookie

bp = Blueprint("auth", __name__)


@bp.post("/access-token")
def issue_access_token():
    """Sign the presented identity into a short-lived session cookie.

    Identity proof happens upstream; this only binds the claim to a token.
    """
    claim = parse_payload(SessionClaim, request.get_json(silent=True))
    token = get_context().tokens.issue(claim.to_document())

    current_app.logger.info("Issued session for %s", claim.email)
    return set_session_cookie(jsonify(success=True), token), 200


@bp.post("/clearCookie")
def clear_cookie():
    """Expire the session cookie whether or not the caller had one."""
    return clear_session_cookie(jsonify(success=True)), 200
