"""Listings state: the active listings and the latest search results."""

from typing import Optional

from src.models.listing import Listing
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


class ListingsStore:
    """
    Single owner of listing state.

    Each apply_* method is the only way its slice changes, and callers invoke
    them only after a call has succeeded, so a failed call leaves whatever was
    displayed before untouched.
    """

    def __init__(self):
        self._active: list[Listing] = []
        self._search_results: list[Listing] = []
        self._last_query: Optional[str] = None

    @property
    def active(self) -> tuple[Listing, ...]:
        return tuple(self._active)

    @property
    def search_results(self) -> tuple[Listing, ...]:
        return tuple(self._search_results)

    @property
    def last_query(self) -> Optional[str]:
        return self._last_query

    def apply_loaded(self, listings: list[Listing]) -> None:
        """Replace the active listings with a fresh server list."""
        self._active = list(listings)
        logger.debug("Active listings replaced", listing_count=len(self._active))

    def apply_created(self, listing: Listing) -> None:
        """Append a newly created listing after the existing ones."""
        self._active.append(listing)
        logger.debug("Listing appended", listing_id=listing.id)

    def apply_search(self, query: str, results: list[Listing]) -> None:
        self._last_query = query
        self._search_results = list(results)
        logger.debug("Search results replaced", mls_query=query, result_count=len(results))

    def find(self, listing_id: str) -> Optional[Listing]:
        for listing in self._active:
            if listing.id == listing_id:
                return listing
        for listing in self._search_results:
            if listing.id == listing_id:
                return listing
        return None
