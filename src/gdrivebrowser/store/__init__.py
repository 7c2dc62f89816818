"""Listing store exports for gdrivebrowser."""

from __future__ import annotations

from .listing_store import DEFAULT_PAGE_SIZE, ListingState, ListingStore

__all__ = ["DEFAULT_PAGE_SIZE", "ListingState", "ListingStore"]
