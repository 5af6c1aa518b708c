"""Per-process application context shared by request handlers."""

from __future__ import annotations

from dataclasses import dataclass

from flask import current_app
from pymongo.database import Database

from workvista.config import AppConfig
from workvista.utils.tokens import TokenCodec

EXTENSION_KEY = "workvista"


@dataclass(frozen=True)
class AppContext:
    """Configuration, token codec and database handle, built once at startup."""

    config: AppConfig
    tokens: TokenCodec
    db: Database


def get_context() -> AppContext:
    """Return the context attached to the current Flask application."""
    return current_app.extensions[EXTENSION_KEY]
