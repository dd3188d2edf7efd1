"""Chat state: conversations, the active chat, and message appends."""

from datetime import datetime, timezone
from typing import Iterable, Optional

from src.models.chat import Chat, Message, Participant
from src.utils.errors import ChatStateError
from src.utils.logging import get_structured_logger, mask_user_id

logger = get_structured_logger(__name__)


def seed_chats(now: Optional[datetime] = None) -> list[Chat]:
    """Conversations every dashboard starts with; chats are never created at runtime."""
    now = now or datetime.now(timezone.utc)
    john = Participant(id="1", name="John Doe")
    opening_lines = [
        ("1", Participant(id="2", name="Jane Smith"), "Hi, I'm interested in your property."),
        ("2", Participant(id="3", name="Bob Johnson"), "Is the house still available?"),
    ]
    return [
        Chat(
            id=chat_id,
            participants=[john, other],
            messages=[
                Message(id="1", sender_id=other.id, receiver_id=john.id, content=text, timestamp=now)
            ],
            last_message=text,
            timestamp=now,
        )
        for chat_id, other, text in opening_lines
    ]


class ChatStore:
    """
    Single owner of chat state.

    Chats are replaced, never mutated in place: apply_sent builds a new Chat
    with the message appended and the lastMessage/timestamp summary
    recomputed from it, leaving every other chat as it was.
    """

    def __init__(self, chats: Iterable[Chat] = ()):
        self._chats: dict[str, Chat] = {}
        for chat in chats:
            self._chats[chat.id] = chat
        self._active_id: Optional[str] = None

    @property
    def chats(self) -> tuple[Chat, ...]:
        return tuple(self._chats.values())

    @property
    def active(self) -> Optional[Chat]:
        if self._active_id is None:
            return None
        return self._chats.get(self._active_id)

    def get(self, chat_id: str) -> Chat:
        try:
            return self._chats[chat_id]
        except KeyError:
            raise ChatStateError(f"Unknown chat: {chat_id}") from None

    def select(self, chat_id: Optional[str]) -> None:
        """Make a chat active, or clear the selection with None."""
        if chat_id is not None:
            self.get(chat_id)
        self._active_id = chat_id

    def apply_sent(self, chat_id: str, message: Message) -> Chat:
        """Append a sent message to its chat and return the updated chat."""
        chat = self.get(chat_id)
        if not chat.has_participant(message.sender_id):
            raise ChatStateError(
                f"Sender {message.sender_id} is not a participant of chat {chat_id}"
            )

        updated = chat.model_copy(update={
            "messages": [*chat.messages, message],
            "last_message": message.content,
            "timestamp": message.timestamp,
        })
        self._chats[chat_id] = updated

        logger.debug(
            "Message appended to chat",
            chat_id=chat_id,
            message_id=message.id,
            sender_id=mask_user_id(message.sender_id),
            message_count=len(updated.messages),
        )
        return updated
