"""Read-side search projection over the active listing."""

from __future__ import annotations

from gdrivebrowser.models import ListingSnapshot


def normalize_query(query: str | None) -> str:
    return (query or "").strip().casefold()


def filter_listing(query: str | None, listing: ListingSnapshot) -> ListingSnapshot:
    """
    Return folders and files whose name contains `query`, ignoring case.

    A blank query returns `listing` itself, not a filtered copy. The input
    snapshot is never modified.
    """
    needle = normalize_query(query)
    if not needle:
        return listing

    return type(listing)(
        folders=tuple(f for f in listing.folders if needle in f.name.casefold()),
        files=tuple(f for f in listing.files if needle in f.name.casefold()),
    )
