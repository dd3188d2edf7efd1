"""
Dashboard controller.

Connects the listing and messaging clients to the state stores, the draft
forms and the notice list a rendering layer displays. Every handler follows
the same rule: state changes only after a call succeeds, through the owning
store, and only if the view that asked for it is still showing.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from src.models.chat import Chat, Message, MessageDraft
from src.models.listing import Listing
from src.services.api_client import ApiClient
from src.services.listing_client import ListingClient
from src.services.messaging_client import MessagingClient
from src.state.chats import ChatStore, seed_chats
from src.state.drafts import ComposerDraft, ListingDraftForm
from src.state.listings import ListingsStore
from src.state.scope import ViewScope
from src.utils.config import ApiConfig
from src.utils.errors import ChatStateError, TransportError
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notice:
    """Transient user-facing notification."""
    title: str
    description: str
    variant: str = "default"


class Dashboard:
    """Listing desk for one signed-in agent."""

    def __init__(
        self,
        api: Optional[ApiClient] = None,
        *,
        current_user_id: Optional[str] = None,
        chats: Optional[Iterable[Chat]] = None,
    ):
        self.api = api or ApiClient()
        self.listing_client = ListingClient(self.api)
        self.messaging_client = MessagingClient(self.api)
        self.current_user_id = current_user_id or ApiConfig.CURRENT_USER_ID

        self.listings = ListingsStore()
        self.chats = ChatStore(seed_chats() if chats is None else chats)
        self.listing_form = ListingDraftForm()
        self.form_errors: dict[str, str] = {}
        self.composer = ComposerDraft()
        self.notices: list[Notice] = []

        self.page_scope = ViewScope("listings")
        self.create_scope = ViewScope("create_listing", is_open=False)
        self.chat_scope = ViewScope("chat", is_open=False)

    def _notify(self, title: str, description: str, variant: str = "default") -> None:
        self.notices.append(Notice(title=title, description=description, variant=variant))

    async def load_listings(self) -> bool:
        """Fetch all listings into the active list. Returns whether they were applied."""
        try:
            settled = await self.page_scope.settle(self.listing_client.list_listings())
        except TransportError:
            self._notify("Error", "Failed to load listings. Please try again later.", DESTRUCTIVE)
            return False

        if settled.dropped:
            return False
        self.listings.apply_loaded(settled.value)
        return True

    async def search(self, query: str) -> bool:
        """Search by MLS number. The query goes to the server untouched."""
        try:
            settled = await self.page_scope.settle(self.listing_client.search_listings(query))
        except TransportError:
            self._notify("Error", "Failed to search listings. Please try again.", DESTRUCTIVE)
            return False

        if settled.dropped:
            return False
        self.listings.apply_search(query, settled.value)
        return True

    def open_create_dialog(self) -> None:
        self.form_errors = {}
        self.create_scope.open()

    def close_create_dialog(self) -> None:
        self.create_scope.dismiss()

    async def submit_listing(self) -> Optional[Listing]:
        """
        Validate the create form and submit it.

        Invalid forms never reach the server; their field errors land in
        form_errors. The created listing is appended to the listings page; the
        form is reset and the dialog closed only if the dialog that submitted
        it is still open.
        """
        validation = self.listing_form.validate()
        if not validation.ok:
            self.form_errors = validation.errors
            self._notify("Invalid listing", "; ".join(validation.errors.values()), DESTRUCTIVE)
            return None
        self.form_errors = {}

        dialog_generation = self.create_scope.generation
        try:
            settled = await self.page_scope.settle(
                self.listing_client.create_listing(validation.draft)
            )
        except TransportError:
            self._notify("Error", "Failed to create listing. Please try again.", DESTRUCTIVE)
            return None

        if settled.dropped:
            return None

        listing = settled.value
        self.listings.apply_created(listing)
        if self.create_scope.is_current(dialog_generation):
            self.listing_form.reset()
            self.create_scope.dismiss()
        self._notify("Success", "New listing created successfully.")
        return listing

    def open_chat(self, chat_id: str) -> Chat:
        self.chats.select(chat_id)
        self.chat_scope.open()
        return self.chats.get(chat_id)

    def close_chat(self) -> None:
        self.chat_scope.dismiss()
        self.chats.select(None)

    async def send_message(self) -> Optional[Message]:
        """
        Send the composer text to the active chat.

        Empty or whitespace-only drafts are ignored. On failure the draft is
        kept so the agent can resubmit it.
        """
        chat = self.chats.active
        if chat is None or not self.composer.sendable:
            return None
        if not chat.has_participant(self.current_user_id):
            raise ChatStateError(
                f"Agent {self.current_user_id} is not a participant of chat {chat.id}"
            )

        counterpart = chat.counterpart_of(self.current_user_id)
        draft = MessageDraft(
            content=self.composer.text.strip(),
            sender_id=self.current_user_id,
            receiver_id=counterpart.id if counterpart else "0",
        )

        try:
            settled = await self.chat_scope.settle(
                self.messaging_client.send_message(chat.id, draft)
            )
        except TransportError:
            self._notify("Error", "Failed to send message. Please try again.", DESTRUCTIVE)
            return None

        if settled.dropped:
            logger.info("Sent message not applied, chat was closed", chat_id=chat.id)
            return None

        message = settled.value
        self.chats.apply_sent(chat.id, message)
        self.composer.clear()
        self._notify("Message Sent", "Your message has been sent successfully.")
        return message

    async def close(self) -> None:
        """Unmount: calls still in flight resolve into nothing."""
        self.page_scope.dismiss()
        self.create_scope.dismiss()
        self.chat_scope.dismiss()
        await self.api.close()
