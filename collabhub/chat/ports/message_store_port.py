# =============================================================================
# File: collabhub/chat/ports/message_store_port.py
# Description: Port interface for the append-only message log
# Pattern: Hexagonal Architecture / Ports & Adapters
# =============================================================================

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from collabhub.chat.read_models import MessageReadModel


@runtime_checkable
class MessageStorePort(Protocol):
    """
    Port: Message Store

    Defined by: Chat domain
    Implemented by: MessageReadRepo (collabhub/infra/read_repos/message_repo.py)

    Messages are totally ordered per project by (created_at, id). There is
    no update or delete in this port.
    """

    async def append(self, project_id: int, sender_id: int, content: str) -> MessageReadModel:
        """Persist a message. Raises InvalidContentError for blank content."""
        ...

    async def list_by_project(self, project_id: int) -> List[MessageReadModel]:
        """All messages of the project, ascending by created_at then id."""
        ...

    async def get(self, message_id: int) -> Optional[MessageReadModel]:
        ...
