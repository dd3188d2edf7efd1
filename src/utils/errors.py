"""Error handling utilities."""

from typing import Optional


class ListingDeskError(Exception):
    """Base exception for the listing desk."""
    pass


class TransportError(ListingDeskError):
    """HTTP call failed: timeout, connection failure or non-2xx status."""

    def __init__(
        self,
        message: str,
        *,
        method: Optional[str] = None,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        timed_out: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.method = method
        self.url = url
        self.status_code = status_code
        self.timed_out = timed_out


class ChatStateError(ListingDeskError):
    """Chat state operation rejected (unknown chat, sender not a participant)."""
    pass


class SupabaseError(ListingDeskError):
    """Supabase operation error."""
    pass


class BadRequest(ListingDeskError):
    """Request rejected before reaching a service: malformed or invalid input."""

    def __init__(self, status: int, message: str, fields: Optional[dict] = None):
        super().__init__(message)
        self.status = status
        self.message = message
        self.fields = fields
