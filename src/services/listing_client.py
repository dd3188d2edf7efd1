"""Listing client: list, search and create listings over the shared API client."""

from typing import Any

from pydantic import ValidationError

from src.models.listing import Listing, ListingDraft
from src.services.api_client import ApiClient
from src.utils.errors import TransportError
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


def _parse_listings(data: Any, url: str) -> list[Listing]:
    """Decode a listing array, keeping the server's order."""
    if not isinstance(data, list):
        raise TransportError(f"{url} returned {type(data).__name__}, expected a list", url=url)
    try:
        return [Listing.model_validate(item) for item in data]
    except ValidationError as e:
        raise TransportError(f"{url} returned malformed listings: {e}", url=url) from e


class ListingClient:
    """Stateless listing operations. Callers own whatever they do with the results."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def list_listings(self) -> list[Listing]:
        """Every listing the server knows about, unpaginated."""
        try:
            data = await self.api.request("GET", "/listings")
            return _parse_listings(data, "/listings")
        except TransportError as e:
            logger.error("Error fetching listings", error=str(e))
            raise

    async def search_listings(self, mls_number: str) -> list[Listing]:
        """
        Listings matching an MLS number.

        The query is forwarded unchanged as the mlsNumber parameter, empty
        string included; matching is up to the server.
        """
        try:
            data = await self.api.request(
                "GET", "/listings/search", params={"mlsNumber": mls_number}
            )
            return _parse_listings(data, "/listings/search")
        except TransportError as e:
            logger.error("Error searching listings", mls_number=mls_number, error=str(e))
            raise

    async def create_listing(self, draft: ListingDraft) -> Listing:
        """
        Submit a draft and return the created listing.

        No idempotency key is sent: retrying after a timeout can create a
        duplicate listing.
        """
        try:
            data = await self.api.request("POST", "/listings", payload=draft.to_payload())
            try:
                listing = Listing.model_validate(data)
            except ValidationError as e:
                raise TransportError(f"/listings returned a malformed listing: {e}", url="/listings") from e
        except TransportError as e:
            logger.error("Error creating listing", mls_number=draft.mls_number, error=str(e))
            raise

        logger.info("Listing created", listing_id=listing.id, mls_number=listing.mls_number)
        return listing
