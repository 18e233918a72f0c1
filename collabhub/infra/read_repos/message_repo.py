# =============================================================================
# File: collabhub/infra/read_repos/message_repo.py
# Description: PostgreSQL message store (append-only chat log)
# =============================================================================

from __future__ import annotations

import logging
from typing import List, Optional

from collabhub.chat.read_models import MessageReadModel
from collabhub.chat.value_objects import ensure_message_content
from collabhub.infra.persistence import pg_client

log = logging.getLogger("collabhub.chat.message_repo")

_MESSAGE_COLUMNS = "id, project_id, sender_id, content, created_at"


class MessageReadRepo:
    """
    Implements MessageStorePort on the messages table.

    Order within a project is (created_at, id); id is a BIGSERIAL, so rows
    inserted in the same clock tick still have a total order.
    """

    @staticmethod
    async def append(project_id: int, sender_id: int, content: str) -> MessageReadModel:
        ensure_message_content(content)
        row = await pg_client.fetchrow(
            f"""
            INSERT INTO messages (project_id, sender_id, content)
            VALUES ($1, $2, $3)
            RETURNING {_MESSAGE_COLUMNS}
            """,
            project_id, sender_id, content,
        )
        return MessageReadModel.model_validate(dict(row))

    @staticmethod
    async def list_by_project(project_id: int) -> List[MessageReadModel]:
        rows = await pg_client.fetch(
            f"""
            SELECT {_MESSAGE_COLUMNS}
            FROM messages
            WHERE project_id = $1
            ORDER BY created_at ASC, id ASC
            """,
            project_id,
        )
        return [MessageReadModel.model_validate(dict(r)) for r in rows]

    @staticmethod
    async def get(message_id: int) -> Optional[MessageReadModel]:
        row = await pg_client.fetchrow(
            f"SELECT {_MESSAGE_COLUMNS} FROM messages WHERE id = $1",
            message_id,
        )
        return MessageReadModel.model_validate(dict(row)) if row else None
