"""Supabase client bootstrap and listing persistence."""

import json
import os
from typing import Optional
from supabase import create_client, Client
from supabase.client import ClientOptions
from src.utils.config import ServerConfig
from src.utils.errors import SupabaseError
import logging

logger = logging.getLogger(__name__)

# Global client instance (singleton pattern)
_client: Optional[Client] = None


def load_service_credentials() -> tuple[str, str]:
    """
    Resolve the Supabase URL and service role key.

    Reads the JSON credential file named by SUPABASE_CREDENTIALS_PATH
    ({"url": ..., "service_role_key": ...}) when set, otherwise the
    SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY variables.
    """
    path = os.environ.get("SUPABASE_CREDENTIALS_PATH")
    if path:
        try:
            with open(path, "r", encoding="utf-8") as f:
                credentials = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SupabaseError(f"Failed to read service credentials from {path}: {e}")

        url = credentials.get("url") if isinstance(credentials, dict) else None
        key = credentials.get("service_role_key") if isinstance(credentials, dict) else None
        if not url or not key:
            raise SupabaseError(f"Credential file {path} must contain url and service_role_key")
        return url, key

    url = os.environ.get("SUPABASE_URL")
    key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY")
    if not url or not key:
        raise SupabaseError(
            "Set SUPABASE_CREDENTIALS_PATH, or SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY"
        )
    return url, key


def get_supabase_client() -> Client:
    """Get or create Supabase client singleton."""
    global _client

    if _client is None:
        url, key = load_service_credentials()

        options = ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
        )

        _client = create_client(url, key, options)
        logger.info("Supabase client initialized", extra={"url": url})

    return _client


async def close_supabase_client() -> None:
    """Drop the Supabase client singleton."""
    global _client
    if _client:
        # Supabase-py has no explicit close; clearing the reference is enough
        _client = None
        logger.info("Supabase client closed")


class SupabaseClient:
    """Async context manager for Supabase client."""

    def __init__(self):
        self.client: Optional[Client] = None

    async def __aenter__(self) -> Client:
        self.client = get_supabase_client()
        return self.client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            logger.error(
                "Supabase operation error",
                extra={"error": str(exc_val), "type": exc_type.__name__}
            )
        return False


# Listings table operations
async def list_listings() -> list[dict]:
    """All listing rows, oldest first."""
    async with SupabaseClient() as client:
        try:
            result = client.table(ServerConfig.LISTINGS_TABLE).select("*").order("created_at").execute()
            return result.data if result.data else []
        except Exception as e:
            raise SupabaseError(f"Failed to list listings: {e}")


async def search_listings(mls_number: str) -> list[dict]:
    """Listing rows whose MLS number contains mls_number, case-insensitively."""
    # % and _ are LIKE wildcards; the query is matched literally
    escaped = mls_number.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    async with SupabaseClient() as client:
        try:
            result = (
                client.table(ServerConfig.LISTINGS_TABLE)
                .select("*")
                .ilike("mls_number", f"%{escaped}%")
                .order("created_at")
                .execute()
            )
            return result.data if result.data else []
        except Exception as e:
            raise SupabaseError(f"Failed to search listings: {e}")


async def create_listing(listing_data: dict) -> dict:
    """Insert a listing row and return it as stored."""
    async with SupabaseClient() as client:
        try:
            result = client.table(ServerConfig.LISTINGS_TABLE).insert(listing_data).execute()
            if result.data and len(result.data) > 0:
                return result.data[0]
            raise SupabaseError("Failed to create listing: no data returned")
        except SupabaseError:
            raise
        except Exception as e:
            raise SupabaseError(f"Failed to create listing: {e}")
