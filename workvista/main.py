"""Flask application setup and blueprint wiring."""

from __future__ import annotations

from typing import Optional

from flask import Flask
from flask_cors import CORS
from pymongo.database import Database
from pymongo.errors import PyMongoError

from workvista import database
from workvista.config import AppConfig
from workvista.context import EXTENSION_KEY, AppContext
from workvista.errors import register_error_handlers
from workvista.routes import register_routes
from workvista.utils.tokens import TokenCodec


def create_app(config: Optional[AppConfig] = None, db: Optional[Database] = None) -> Flask:
    """Configure and return the Flask application instance.

    ``config`` defaults to the process environment and ``db`` to the
    configured MongoDB database; tests pass both explicitly.
    """
    config = config or AppConfig.from_env()
    app = Flask(__name__)
    CORS(app, origins=list(config.cors_origins), supports_credentials=True)

    if db is None:
        db = database.get_database(config)

    app.extensions[EXTENSION_KEY] = AppContext(
        config=config,
        tokens=TokenCodec(config.token_secret, ttl_seconds=config.session_ttl_seconds),
        db=db,
    )

    register_error_handlers(app)
    register_routes(app)

    if config.create_indexes:
        try:
            database.create_indexes(db)
            app.logger.info("MongoDB indexes created successfully")
        except PyMongoError as e:
            app.logger.warning(f"Failed to create MongoDB indexes: {e}")

    return app
