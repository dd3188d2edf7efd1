"""Messaging client: post chat messages over the shared API client."""

from urllib.parse import quote

from pydantic import ValidationError

from src.models.chat import Message, MessageDraft
from src.services.api_client import ApiClient
from src.utils.errors import TransportError
from src.utils.logging import get_structured_logger, mask_user_id, sanitize_message_text

logger = get_structured_logger(__name__)


class MessagingClient:
    """One-shot message sends; no queueing of unsent messages."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def send_message(self, chat_id: str, message: MessageDraft) -> Message:
        """
        Post a message to a chat and return it as persisted by the server.

        Content is not checked here; refusing empty drafts is up to the caller.
        """
        path = f"/chats/{quote(str(chat_id), safe='')}/messages"
        try:
            data = await self.api.request("POST", path, payload=message.model_dump(by_alias=True))
            try:
                sent = Message.model_validate(data)
            except ValidationError as e:
                raise TransportError(f"{path} returned a malformed message: {e}", url=path) from e
        except TransportError as e:
            logger.error(
                "Error sending message",
                chat_id=chat_id,
                sender_id=mask_user_id(message.sender_id),
                error=str(e),
            )
            raise

        logger.info(
            "Message sent",
            chat_id=chat_id,
            message_id=sent.id,
            sender_id=mask_user_id(sent.sender_id),
            message_preview=sanitize_message_text(sent.content, max_length=100),
        )
        return sent
