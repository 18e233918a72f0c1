# =============================================================================
# File: collabhub/infra/read_repos/notification_repo.py
# Description: PostgreSQL notification store
# =============================================================================

from __future__ import annotations

import logging
from typing import List, Optional

from collabhub.infra.persistence import pg_client
from collabhub.notification.read_models import NotificationReadModel

log = logging.getLogger("collabhub.notification.read_repo")

_NOTIFICATION_COLUMNS = "id, user_id, message, is_read, created_at"


class NotificationReadRepo:
    """Implements NotificationStorePort on the notifications table."""

    @staticmethod
    async def create(user_id: int, message: str) -> NotificationReadModel:
        row = await pg_client.fetchrow(
            f"""
            INSERT INTO notifications (user_id, message)
            VALUES ($1, $2)
            RETURNING {_NOTIFICATION_COLUMNS}
            """,
            user_id, message,
        )
        return NotificationReadModel.model_validate(dict(row))

    @staticmethod
    async def list_for_user(user_id: int) -> List[NotificationReadModel]:
        rows = await pg_client.fetch(
            f"""
            SELECT {_NOTIFICATION_COLUMNS}
            FROM notifications
            WHERE user_id = $1
            ORDER BY created_at DESC, id DESC
            """,
            user_id,
        )
        return [NotificationReadModel.model_validate(dict(r)) for r in rows]

    @staticmethod
    async def mark_read(notification_id: int, user_id: int) -> Optional[NotificationReadModel]:
        # user_id in the WHERE clause keeps other users' rows untouched
        row = await pg_client.fetchrow(
            f"""
            UPDATE notifications
            SET is_read = TRUE
            WHERE id = $1 AND user_id = $2
            RETURNING {_NOTIFICATION_COLUMNS}
            """,
            notification_id, user_id,
        )
        return NotificationReadModel.model_validate(dict(row)) if row else None
