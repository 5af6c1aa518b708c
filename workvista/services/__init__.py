"""Service layer modules for the WorkVista API."""

from . import bid_service, listing_service

__all__ = [
    "bid_service",
    "listing_service",
]
