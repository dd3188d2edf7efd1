"""Chat message endpoint: POST /api/chats/{chatId}/messages.

Deployed behind a rewrite from the dynamic path to this function; the chat
ID is taken from the original request path.
"""

import re
from urllib.parse import unquote

from src.services import backend
from src.utils.http import JsonRequestHandler

_MESSAGES_PATH = re.compile(r"^(?:/api)?/chats/(?P<chat_id>[^/]+)/messages/?$")


class handler(JsonRequestHandler):
    """Vercel serverless function handler for chat messages."""

    def do_POST(self):
        """Accept a message and return it with its server-assigned id and timestamp."""
        match = _MESSAGES_PATH.match(self.route_path)
        if not match:
            self.not_found()
            return

        chat_id = unquote(match.group("chat_id"))

        def action():
            message = backend.accept_message(chat_id, self.read_json())
            return 201, backend.to_wire(message)

        self.respond(action)
