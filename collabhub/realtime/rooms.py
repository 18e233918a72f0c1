# =============================================================================
# File: collabhub/realtime/rooms.py
# Description: Presence/Room Router - connections, rooms and broadcast
# =============================================================================

import asyncio
import logging
from typing import Any, Dict, List, Optional, Set

from collabhub.config.realtime_config import RealtimeConfig, get_realtime_config
from collabhub.infra.metrics.realtime_metrics import (
    ws_connections_active,
    ws_disconnections_total,
    ws_send_failures_total,
)
from collabhub.realtime.connection import RealtimeConnection
from collabhub.realtime.types import DisconnectKind, project_room, user_room

log = logging.getLogger("collabhub.realtime.rooms")


class RoomRouter:
    """
    Maps live connections to logical rooms and broadcasts into them.

    Per connection: Disconnected -> Connected -> {joined rooms}. Joining a
    project room grants visibility only; write access is checked by the
    gateway. State is process-local.

    The router is the broadcast capability handed to anything that pushes
    realtime events (fan-out, task events). Nothing fetches it globally.
    """

    def __init__(self, config: Optional[RealtimeConfig] = None):
        self.config = config or get_realtime_config()
        self.connections: Dict[str, RealtimeConnection] = {}
        self.rooms: Dict[str, Set[str]] = {}
        self._lock = asyncio.Lock()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def connect(self, connection: RealtimeConnection) -> None:
        """Track a new transport connection."""
        async with self._lock:
            connection.send_timeout = self.config.send_timeout_seconds
            self.connections[connection.conn_id] = connection
        ws_connections_active.inc()
        log.debug(f"Connection {connection.conn_id} connected")

    async def register(self, conn_id: str, user_id: int) -> Optional[str]:
        """Join the per-user room. Idempotent."""
        room = user_room(user_id)
        async with self._lock:
            connection = self.connections.get(conn_id)
            if connection is None:
                log.warning(f"register for unknown connection {conn_id}")
                return None
            connection.user_id = user_id
            self._join_locked(connection, room)
        log.info(f"Connection {conn_id} registered as user {user_id}")
        return room

    async def join_project(self, conn_id: str, project_id: int) -> Optional[str]:
        """Join the per-project room. No membership check at this layer."""
        return await self.join(conn_id, project_room(project_id))

    async def leave_project(self, conn_id: str, project_id: int) -> None:
        await self.leave(conn_id, project_room(project_id))

    async def join(self, conn_id: str, room: str) -> Optional[str]:
        async with self._lock:
            connection = self.connections.get(conn_id)
            if connection is None:
                log.warning(f"join {room} for unknown connection {conn_id}")
                return None
            self._join_locked(connection, room)
        log.debug(f"Connection {conn_id} joined {room}")
        return room

    async def leave(self, conn_id: str, room: str) -> None:
        async with self._lock:
            connection = self.connections.get(conn_id)
            if connection is not None:
                connection.rooms.discard(room)
            self._discard_member_locked(room, conn_id)
        log.debug(f"Connection {conn_id} left {room}")

    async def disconnect(self, conn_id: str, reason: Any = "transport close") -> DisconnectKind:
        """
        Leave every room and forget the connection.

        Cleanup is identical for both kinds; the kind only drives logging
        and metrics.
        """
        kind = self.classify_disconnect(reason)

        async with self._lock:
            connection = self.connections.pop(conn_id, None)
            if connection is not None:
                for room in connection.rooms:
                    self._discard_member_locked(room, conn_id)
                connection.rooms.clear()

        if connection is None:
            return kind

        ws_connections_active.dec()
        ws_disconnections_total.labels(kind=kind.value).inc()
        if kind is DisconnectKind.EXPECTED:
            log.info(f"Connection {conn_id} (user {connection.user_id}) disconnected: {reason}")
        else:
            log.warning(f"Connection {conn_id} (user {connection.user_id}) disconnected unexpectedly: {reason}")
        return kind

    def classify_disconnect(self, reason: Any) -> DisconnectKind:
        if self.config.is_expected_disconnect(str(reason)):
            return DisconnectKind.EXPECTED
        return DisconnectKind.UNEXPECTED

    # =========================================================================
    # Broadcast
    # =========================================================================

    async def emit_to_room(self, room: str, event: str, payload: Any) -> int:
        """
        Send to every connection in the room. A failing connection is logged
        and skipped. Returns the number of successful sends.
        """
        async with self._lock:
            targets = [self.connections[c] for c in self.rooms.get(room, ()) if c in self.connections]

        if not targets:
            return 0

        results = await asyncio.gather(
            *(connection.send(event, payload) for connection in targets),
            return_exceptions=True,
        )

        sent_count = 0
        for connection, result in zip(targets, results):
            if isinstance(result, BaseException):
                ws_send_failures_total.labels(event=event).inc()
                log.error(f"Failed to send {event} to connection {connection.conn_id}: {result!r}")
            else:
                sent_count += 1
        return sent_count

    async def emit_to_user(self, user_id: int, event: str, payload: Any) -> int:
        return await self.emit_to_room(user_room(user_id), event, payload)

    async def emit_to_project(self, project_id: int, event: str, payload: Any) -> int:
        return await self.emit_to_room(project_room(project_id), event, payload)

    async def emit_to_connection(self, conn_id: str, event: str, payload: Any) -> bool:
        """Send to a single connection (error replies). False when gone or failed."""
        async with self._lock:
            connection = self.connections.get(conn_id)
        if connection is None:
            return False
        try:
            await connection.send(event, payload)
        except Exception as e:
            ws_send_failures_total.labels(event=event).inc()
            log.error(f"Failed to send {event} to connection {conn_id}: {e!r}")
            return False
        return True

    # =========================================================================
    # Introspection
    # =========================================================================

    async def rooms_of(self, conn_id: str) -> Set[str]:
        async with self._lock:
            connection = self.connections.get(conn_id)
            return set(connection.rooms) if connection else set()

    async def members_of(self, room: str) -> List[str]:
        async with self._lock:
            return sorted(self.rooms.get(room, ()))

    async def get_stats(self) -> Dict[str, Any]:
        async with self._lock:
            users = {c.user_id for c in self.connections.values() if c.user_id is not None}
            return {
                'active_connections': len(self.connections),
                'active_users': len(users),
                'active_rooms': len(self.rooms),
            }

    # =========================================================================
    # Internals (caller holds the lock)
    # =========================================================================

    def _join_locked(self, connection: RealtimeConnection, room: str) -> None:
        connection.rooms.add(room)
        self.rooms.setdefault(room, set()).add(connection.conn_id)

    def _discard_member_locked(self, room: str, conn_id: str) -> None:
        members = self.rooms.get(room)
        if members is None:
            return
        members.discard(conn_id)
        if not members:
            del self.rooms[room]
