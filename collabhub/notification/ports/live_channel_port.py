# =============================================================================
# File: collabhub/notification/ports/live_channel_port.py
# Description: Narrow broadcast capability used for live pushes
# Pattern: Hexagonal Architecture / Ports & Adapters
# =============================================================================

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class LiveChannelPort(Protocol):
    """
    Port: push events to live connections

    Implemented by: RoomRouter (collabhub/realtime/rooms.py)

    Each method returns how many connections accepted the frame. Zero is a
    normal result (recipient offline).
    """

    async def emit_to_user(self, user_id: int, event: str, payload: Any) -> int:
        ...

    async def emit_to_project(self, project_id: int, event: str, payload: Any) -> int:
        ...
