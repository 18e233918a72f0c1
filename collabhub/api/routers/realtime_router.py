# =============================================================================
# File: collabhub/api/routers/realtime_router.py
# Description: WebSocket endpoint - one receive loop per connection
# =============================================================================

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from fastapi import APIRouter, Query, Request, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from collabhub.config.realtime_config import get_realtime_config
from collabhub.realtime.connection import RealtimeConnection
from collabhub.realtime.handlers import RealtimeEventHandler
from collabhub.realtime.types import OutboundEvent
from collabhub.security.jwt_auth import get_current_user_ws

log = logging.getLogger("collabhub.api.realtime")

router = APIRouter(tags=["Realtime"])


async def _send_error(connection: RealtimeConnection, message: str, code: str) -> None:
    try:
        await connection.send(OutboundEvent.ERROR.value, {'message': message, 'code': code})
    except Exception as e:
        log.debug(f"Could not deliver error frame to {connection.conn_id}: {e!r}")


def _frame_text(message: dict) -> Optional[str]:
    if message.get('text') is not None:
        return message['text']
    if message.get('bytes') is not None:
        return message['bytes'].decode('utf-8', errors='replace')
    return None


@router.websocket("/ws")
async def websocket_endpoint(
        websocket: WebSocket,
        token: Optional[str] = Query(None, description="JWT token"),
) -> None:
    """
    Realtime chat socket.

    Frames are JSON {"t": event, "p": payload}. With a valid token the
    connection is registered to its user room right away; without one the
    client must send 'register' (unless REALTIME_REQUIRE_AUTH is set, in
    which case the handshake is refused with 1008).
    """
    await websocket.accept()

    gateway = getattr(websocket.app.state, 'gateway', None)
    if gateway is None:
        log.error("Realtime gateway not initialized, refusing WebSocket")
        await websocket.close(code=1011, reason="Server not ready")
        return

    config = get_realtime_config()
    user_id = get_current_user_ws(websocket, token)
    connection = RealtimeConnection(transport=websocket, authenticated_user_id=user_id)

    if config.require_auth and user_id is None:
        await _send_error(connection, "Authentication required", "AUTH_REQUIRED")
        await websocket.close(code=1008, reason="Authentication required")
        return

    await gateway.connect(connection)
    conn_id = connection.conn_id
    if user_id is not None:
        await gateway.register(conn_id, user_id)

    handler = RealtimeEventHandler(connection, gateway)
    disconnect_reason: Any = "transport close"

    try:
        while True:
            message = await websocket.receive()

            if message['type'] == 'websocket.disconnect':
                disconnect_reason = message.get('code', 1005)
                break

            text = _frame_text(message)
            if text is None:
                continue

            if len(text.encode("utf-8")) > config.max_message_size:
                await _send_error(connection, "Frame too large", "FRAME_TOO_LARGE")
                continue

            try:
                data = json.loads(text)
            except ValueError:
                await _send_error(connection, "Frame is not valid JSON", "INVALID_JSON")
                continue

            await handler.handle_message(data)

    except WebSocketDisconnect as e:
        disconnect_reason = e.code

    except Exception as e:
        log.error(f"WebSocket {conn_id} error: {e}", exc_info=True)
        disconnect_reason = f"server error: {type(e).__name__}"

    finally:
        await gateway.disconnect(conn_id, disconnect_reason)

        if websocket.client_state != WebSocketState.DISCONNECTED:
            try:
                await websocket.close(code=1000, reason="Normal closure")
            except RuntimeError as e:
                log.debug(f"WebSocket {conn_id} already closed: {e}")


@router.get("/ws/stats")
async def websocket_stats(request: Request) -> dict:
    """Connection, user and room counts of this process."""
    rooms = getattr(request.app.state, 'rooms', None)
    if rooms is None:
        return {'active_connections': 0, 'active_users': 0, 'active_rooms': 0}
    return await rooms.get_stats()
