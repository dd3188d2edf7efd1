"""Listings collection endpoint: GET lists, POST creates."""

import asyncio

from src.services import backend
from src.utils.http import JsonRequestHandler


class handler(JsonRequestHandler):
    """Vercel serverless function handler for /api/listings."""

    def do_GET(self):
        """Return every listing, oldest first."""
        def action():
            listings = asyncio.run(backend.fetch_listings())
            return 200, [backend.to_wire(listing) for listing in listings]

        self.respond(action)

    def do_POST(self):
        """Create a listing from a draft; the server assigns id and timestamps."""
        def action():
            payload = self.read_json()
            listing = asyncio.run(backend.create_listing(payload))
            return 201, backend.to_wire(listing)

        self.respond(action)
