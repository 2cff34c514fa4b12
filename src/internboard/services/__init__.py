"""Listing services built on the filter builders and the paginator."""

from .listings import ListingService

__all__ = ["ListingService"]
