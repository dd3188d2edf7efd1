"""Shared pytest fixtures and configuration."""

import os
import pytest
from unittest.mock import Mock
from datetime import datetime, timezone
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")
os.environ.setdefault("API_URL", "http://testserver/api")
os.environ.setdefault("LOG_FORMAT", "text")

from src.models.chat import Chat, Message, Participant
from src.models.listing import Listing


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client for testing."""
    client = Mock()
    client.table = Mock(return_value=Mock())
    return client


@pytest.fixture
def sample_listing_payload():
    """Listing as the API returns it (camelCase wire format)."""
    return {
        "id": "01JAB3NDEKTSV4RRFFQ69G5FAV",
        "mlsNumber": "MLS123456",
        "address": "123 Main St, Springfield",
        "price": 450000,
        "compensation": "2.5%",
        "document": "disclosure.pdf",
        "agentName": "John Doe",
        "companyName": "Independent Realty",
        "createdAt": "2024-12-09T12:00:00+00:00",
        "updatedAt": "2024-12-09T12:00:00+00:00",
    }


@pytest.fixture
def sample_listing(sample_listing_payload):
    return Listing.model_validate(sample_listing_payload)


@pytest.fixture
def sample_chats():
    """Two chats sharing agent 1, as seeded on a fresh dashboard."""
    now = datetime(2024, 12, 9, 12, 0, tzinfo=timezone.utc)
    john = Participant(id="1", name="John Doe")
    jane = Participant(id="2", name="Jane Smith")
    bob = Participant(id="3", name="Bob Johnson")
    return [
        Chat(
            id="1",
            participants=[john, jane],
            messages=[Message(id="1", sender_id="2", receiver_id="1", content="Hi there", timestamp=now)],
            last_message="Hi there",
            timestamp=now,
        ),
        Chat(
            id="2",
            participants=[john, bob],
            messages=[Message(id="1", sender_id="3", receiver_id="1", content="Still available?", timestamp=now)],
            last_message="Still available?",
            timestamp=now,
        ),
    ]


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2024-12-09 12:00:00") as frozen_time:
        yield frozen_time


@pytest.fixture(scope="function")
def reset_environment(monkeypatch):
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
