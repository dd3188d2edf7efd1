"""Server-side operations behind the listing and chat message routes."""

from datetime import datetime, timezone
from typing import Any

from ulid import ULID

from src.models.chat import Message, MessageDraft
from src.models.listing import Listing, ListingDraft, listing_draft_errors
from src.services import supabase_client
from src.utils.config import ServerConfig
from src.utils.errors import BadRequest
from src.utils.logging import get_structured_logger, mask_user_id

logger = get_structured_logger(__name__)


def generate_id() -> str:
    """Text ID in ULID format (26 chars, sortable by creation time)."""
    return str(ULID())


def to_wire(model: Any) -> dict:
    return model.model_dump(mode="json", by_alias=True)


async def fetch_listings() -> list[Listing]:
    rows = await supabase_client.list_listings()
    return [Listing.model_validate(row) for row in rows]


async def find_listings(mls_number: str) -> list[Listing]:
    rows = await supabase_client.search_listings(mls_number)
    return [Listing.model_validate(row) for row in rows]


async def create_listing(payload: Any) -> Listing:
    """
    Validate a submitted draft and store it.

    Drafts with a missing MLS number or address, or a price that is negative
    or not a finite number (NaN arrives from unparseable form input), are
    rejected with 422 before anything is written.
    """
    draft = ListingDraft.model_validate(payload)
    errors = listing_draft_errors(draft)
    if errors:
        raise BadRequest(422, "invalid listing", fields=errors)

    now = datetime.now(timezone.utc).isoformat()
    row = {
        "id": generate_id(),
        "mls_number": draft.mls_number,
        "address": draft.address,
        "price": draft.price,
        "compensation": draft.compensation,
        "document": draft.document,
        "agent_name": draft.agent_name or ServerConfig.DEFAULT_AGENT_NAME,
        "company_name": draft.company_name or ServerConfig.DEFAULT_COMPANY_NAME,
        "created_at": now,
        "updated_at": now,
    }
    stored = await supabase_client.create_listing(row)
    listing = Listing.model_validate(stored)
    logger.info("Listing stored", listing_id=listing.id, mls_number=listing.mls_number)
    return listing


def accept_message(chat_id: str, payload: Any) -> Message:
    """
    Stamp an incoming chat message with an ID and timestamp.

    Messages are not stored: the stamped message is only echoed back.
    """
    draft = MessageDraft.model_validate(payload)
    if not draft.content.strip():
        raise BadRequest(422, "message content must not be empty", fields={"content": "required"})

    message = Message(
        id=generate_id(),
        sender_id=draft.sender_id,
        receiver_id=draft.receiver_id,
        content=draft.content,
        timestamp=datetime.now(timezone.utc),
    )
    logger.info(
        "Message accepted",
        chat_id=chat_id,
        message_id=message.id,
        sender_id=mask_user_id(message.sender_id),
    )
    return message
