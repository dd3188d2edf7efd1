"""Tests for chat models."""

import pytest
from datetime import datetime, timezone
from pydantic import ValidationError
from src.models.chat import Chat, Message, MessageDraft, Participant


@pytest.mark.unit
def test_chat_requires_two_participants():
    """Test that a chat needs at least two participants."""
    with pytest.raises(ValidationError):
        Chat(id="1", participants=[Participant(id="1", name="John Doe")])


@pytest.mark.unit
def test_chat_rejects_duplicate_participants():
    with pytest.raises(ValidationError):
        Chat(
            id="1",
            participants=[Participant(id="1", name="John Doe"), Participant(id="1", name="John Again")],
        )


@pytest.mark.unit
def test_chat_counterpart(sample_chats):
    """Test receiver resolution for the signed-in agent."""
    chat = sample_chats[0]

    assert chat.counterpart_of("1").id == "2"
    assert chat.counterpart_of("2").id == "1"
    assert chat.has_participant("2")
    assert not chat.has_participant("3")


@pytest.mark.unit
def test_message_draft_wire_format():
    draft = MessageDraft(content="Hello", sender_id="1", receiver_id="2")
    assert draft.model_dump(by_alias=True) == {"content": "Hello", "senderId": "1", "receiverId": "2"}


@pytest.mark.unit
def test_message_from_wire():
    """Test parsing a persisted message with numeric IDs."""
    message = Message.model_validate({
        "id": 10,
        "senderId": 1,
        "receiverId": 2,
        "content": "Hello",
        "timestamp": "2024-12-09T12:00:00Z",
    })

    assert message.id == "10"
    assert message.sender_id == "1"
    assert message.timestamp == datetime(2024, 12, 9, 12, 0, tzinfo=timezone.utc)
