# =============================================================================
# File: collabhub/realtime/connection.py
# Description: One live transport connection and the rooms it joined
# =============================================================================

from __future__ import annotations

import asyncio
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Protocol, Set

from collabhub.realtime.types import envelope


class JsonTransport(Protocol):
    """What a connection needs from the socket (starlette WebSocket fits)."""

    async def send_json(self, data: Any, mode: str = "text") -> None:
        ...


@dataclass
class RealtimeConnection:
    """
    Ephemeral connection state. Lives only as long as the transport; a
    reconnect is always a new RealtimeConnection with a new conn_id.
    """
    transport: JsonTransport
    conn_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    user_id: Optional[int] = None
    authenticated_user_id: Optional[int] = None
    rooms: Set[str] = field(default_factory=set)
    connected_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    send_timeout: float = 5.0
    messages_sent: int = 0

    async def send(self, event: str, payload: Any) -> None:
        """Send one frame. Raises on transport failure or timeout."""
        await asyncio.wait_for(self.transport.send_json(envelope(event, payload)), timeout=self.send_timeout)
        self.messages_sent += 1
