"""Blueprint registration helper."""

from __future__ import annotations

from flask import Flask

from .auth import bp as auth_bp
from .bids import bp as bids_bp
from .categories import bp as categories_bp


def register_routes(app: Flask) -> None:
    """Register all application blueprints on the provided Flask app."""
    app.register_blueprint(auth_bp)
    app.register_blueprint(categories_bp)
    app.register_blueprint(bids_bp)

    @app.get("/")
    def index():
        return "Server is up and running", 200
