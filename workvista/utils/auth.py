"""Authentication helpers for the cookie-carried session token."""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from flask import Response, current_app, g, request

from workvista.context import get_context
from workvista.errors import Forbidden, Unauthenticated, error_response
from workvista.utils.tokens import Expired, InvalidSignature, MalformedToken


def require_session() -> Tuple[Optional[Dict[str, Any]], Optional[Any]]:
    """Validate the session cookie and return the caller's verified identity."""
    ctx = get_context()
    token = request.cookies.get(ctx.config.session_cookie_name)
    if not token:
        return None, error_response(Unauthenticated())

    try:
        identity = ctx.tokens.verify(token)
    except (InvalidSignature, Expired) as exc:
        current_app.logger.warning("Rejected session on %s: %s", request.path, exc)
        return None, error_response(Forbidden())
    except MalformedToken as exc:
        current_app.logger.warning("Unreadable session on %s: %s", request.path, exc)
        return None, error_response(Unauthenticated())

    g.identity = identity
    return identity, None


def set_session_cookie(response: Response, token: str) -> Response:
    """Attach ``token`` as an http-only cookie usable from the hosted frontend."""
    config = get_context().config
    response.set_cookie(
        config.session_cookie_name,
        token,
        max_age=config.session_ttl_seconds,
        httponly=True,
        secure=config.session_cookie_secure,
        samesite="None",
    )
    return response


def clear_session_cookie(response: Response) -> Response:
    """Instruct the browser to drop the session cookie immediately."""
    config = get_context().config
    response.set_cookie(
        config.session_cookie_name,
        "",
        max_age=0,
        expires=0,
        httponly=True,
        secure=config.session_cookie_secure,
        samesite="None",
    )
    return response
