"""Chat and message models."""

from typing import Optional
from datetime import datetime
from pydantic import Field, field_validator

from src.models.listing import CamelModel


class Participant(CamelModel):
    """Agent taking part in a chat."""
    id: str = Field(..., description="Agent ID")
    name: str = Field(..., description="Display name")


class MessageDraft(CamelModel):
    """Outgoing message as posted to a chat."""
    content: str
    sender_id: str
    receiver_id: str


class Message(CamelModel):
    """Chat message with server-assigned ID and timestamp."""
    id: str
    sender_id: str
    receiver_id: str
    content: str
    timestamp: datetime


class Chat(CamelModel):
    """Conversation between two or more agents."""
    id: str
    participants: list[Participant] = Field(..., min_length=2)
    messages: list[Message] = Field(default_factory=list)
    last_message: str = ""
    timestamp: Optional[datetime] = None

    @field_validator("participants")
    @classmethod
    def _unique_participants(cls, participants: list[Participant]) -> list[Participant]:
        ids = [p.id for p in participants]
        if len(set(ids)) != len(ids):
            raise ValueError("participant IDs must be unique")
        return participants

    def has_participant(self, agent_id: str) -> bool:
        return any(p.id == agent_id for p in self.participants)

    def counterpart_of(self, agent_id: str) -> Optional[Participant]:
        """First participant that is not agent_id."""
        return next((p for p in self.participants if p.id != agent_id), None)
