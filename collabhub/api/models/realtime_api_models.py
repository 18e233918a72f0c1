# =============================================================================
#  File: collabhub/api/models/realtime_api_models.py
#  CollabHub API Models - HTTP surface of the realtime core
# =============================================================================

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from collabhub.chat.read_models import ReactionSummary
from collabhub.realtime.task_events import TaskEventType


class MessageReactionsResponse(BaseModel):
    """Same shape as the reactionsUpdated payload"""
    messageId: int
    reactions: List[ReactionSummary] = Field(default_factory=list)


class TaskEventRequest(BaseModel):
    """Task lifecycle event handed over by the task service."""
    event: TaskEventType
    task: Dict[str, Any] = Field(default_factory=dict)


class TaskEventResponse(BaseModel):
    event: str
    project_id: int
    delivered: int
