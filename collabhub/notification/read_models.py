# =============================================================================
# File: collabhub/notification/read_models.py
# Description: Notification read model (PostgreSQL table: notifications)
# =============================================================================

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NotificationReadModel(BaseModel):
    """Per-recipient notification. Only the owner may mark it read."""
    id: int
    user_id: int
    message: str
    is_read: bool = False
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
