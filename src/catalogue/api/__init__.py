"""Catalogue domain API package."""

from catalogue.api.routes import merch_router

__all__ = ["merch_router"]
