# =============================================================================
# File: collabhub/chat/read_models.py
# Description: Chat read models (PostgreSQL: messages, message_reactions)
# =============================================================================

from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class MessageReadModel(BaseModel):
    """Immutable chat message (PostgreSQL table: messages)"""
    id: int
    project_id: int
    sender_id: int
    content: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)


class ChatMessageView(MessageReadModel):
    """Message as broadcast in receiveMessage and returned by history"""
    sender_name: str = "Unknown"


class ReactionSummary(BaseModel):
    """Aggregate of one emoji on one message"""
    emoji: str
    count: int
    user_ids: List[int] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class ReactionsUpdate(BaseModel):
    """Result of a toggle: what was applied and the fresh aggregate"""
    message_id: int
    project_id: int
    applied: str
    reactions: List[ReactionSummary] = Field(default_factory=list)
