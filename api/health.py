"""Health check endpoint."""

from src.utils.http import JsonRequestHandler


class handler(JsonRequestHandler):
    """Health check handler for Vercel serverless function."""

    def do_GET(self):
        """Handle GET request."""
        self.send_json(200, {"status": "ok", "service": "listing-desk-api"})

    def do_POST(self):
        """Handle POST request (same as GET for health check)."""
        self.do_GET()
