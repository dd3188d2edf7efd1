"""Listing search endpoint: GET /api/listings/search?mlsNumber=<q>."""

import asyncio

from src.services import backend
from src.utils.http import JsonRequestHandler


class handler(JsonRequestHandler):
    """Vercel serverless function handler for listing search."""

    def do_GET(self):
        """Substring match on MLS number; a missing or empty query matches everything."""
        def action():
            query = self.query_param("mlsNumber") or ""
            listings = asyncio.run(backend.find_listings(query))
            return 200, [backend.to_wire(listing) for listing in listings]

        self.respond(action)
