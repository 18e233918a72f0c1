# =============================================================================
# File: collabhub/notification/ports/notification_store_port.py
# Description: Port interface for persisted notifications
# Pattern: Hexagonal Architecture / Ports & Adapters
# =============================================================================

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from collabhub.notification.read_models import NotificationReadModel


@runtime_checkable
class NotificationStorePort(Protocol):
    """
    Port: Notification Store

    Implemented by: NotificationReadRepo (collabhub/infra/read_repos/notification_repo.py)
    """

    async def create(self, user_id: int, message: str) -> NotificationReadModel:
        ...

    async def list_for_user(self, user_id: int) -> List[NotificationReadModel]:
        """Newest first."""
        ...

    async def mark_read(self, notification_id: int, user_id: int) -> Optional[NotificationReadModel]:
        """Mark read when owned by user_id; None when no such row for that owner."""
        ...
