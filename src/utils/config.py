"""Environment-driven configuration for the client surface and the server."""

import os


class ApiConfig:
    """Settings for the shared HTTP client and the dashboard."""

    API_URL = os.environ.get("API_URL", "http://localhost:3001/api")
    API_TIMEOUT_SECONDS = float(os.environ.get("API_TIMEOUT_SECONDS", "5"))
    # Signed-in agent; sender of every outgoing chat message
    CURRENT_USER_ID = os.environ.get("CURRENT_USER_ID", "1")


class ServerConfig:
    """Settings for the route handlers."""

    LISTINGS_TABLE = os.environ.get("LISTINGS_TABLE", "listings")
    DEFAULT_AGENT_NAME = os.environ.get("DEFAULT_AGENT_NAME", "John Doe")
    DEFAULT_COMPANY_NAME = os.environ.get("DEFAULT_COMPANY_NAME", "Independent Realty")
