# =============================================================================
# File: collabhub/realtime/handlers.py
# Description: Inbound event dispatch for one realtime connection
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from collabhub.infra.metrics.realtime_metrics import ws_events_received_total
from collabhub.realtime.connection import RealtimeConnection
from collabhub.realtime.gateway import RealtimeGateway
from collabhub.realtime.types import InboundEvent, OutboundEvent

log = logging.getLogger("collabhub.realtime.handlers")


# =============================================================================
# Inbound payloads (camelCase on the wire)
# =============================================================================

class _InboundPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SendMessagePayload(_InboundPayload):
    project_id: int = Field(alias="projectId")
    sender_id: int = Field(alias="senderId")
    content: str = ""


class ToggleReactionPayload(_InboundPayload):
    message_id: int = Field(alias="messageId")
    user_id: int = Field(alias="userId")
    emoji: str
    project_id: int = Field(alias="projectId")


class RealtimeEventHandler:
    """
    Routes frames of one connection to the gateway.

    Frames are {'t': event, 'p': payload}; 'type'/'payload' are accepted.
    Malformed frames get an 'error' frame back; domain denials are the
    gateway's chatError.
    """

    def __init__(self, connection: RealtimeConnection, gateway: RealtimeGateway):
        self.connection = connection
        self.gateway = gateway

        self.handlers = {
            InboundEvent.REGISTER.value: self.handle_register,
            InboundEvent.REGISTER_USER.value: self.handle_register,
            InboundEvent.JOIN_PROJECT.value: self.handle_join_project,
            InboundEvent.LEAVE_PROJECT.value: self.handle_leave_project,
            InboundEvent.SEND_MESSAGE.value: self.handle_send_message,
            InboundEvent.TOGGLE_REACTION.value: self.handle_toggle_reaction,
            InboundEvent.PING.value: self.handle_ping,
            'PING': self.handle_ping,
        }

    @property
    def conn_id(self) -> str:
        return self.connection.conn_id

    async def handle_message(self, message_data: Dict[str, Any]) -> None:
        """Route message to appropriate handler"""
        if not isinstance(message_data, dict) or not message_data:
            await self._send_error("Frame must be a JSON object", "INVALID_FRAME")
            return

        message_data = self._normalize_message_format(message_data)
        msg_type = message_data.get('t')
        if not isinstance(msg_type, str):
            await self._send_error("Event name must be a string", "INVALID_FRAME")
            return

        handler = self.handlers.get(msg_type)
        if handler is None:
            log.warning(f"Unknown message type from {self.conn_id}: {msg_type}")
            await self._send_error(f"Unknown event: {msg_type}", "UNKNOWN_EVENT")
            return

        ws_events_received_total.labels(event=msg_type).inc()
        try:
            await handler(message_data['p'])
        except PydanticValidationError as e:
            log.info(f"Invalid {msg_type} payload from {self.conn_id}: {e.error_count()} errors")
            await self._send_error(f"Invalid payload for {msg_type}", "INVALID_PAYLOAD")
        except Exception as e:
            log.error(f"Error handling {msg_type}: {e}", exc_info=True)
            await self._send_error(f"Error processing {msg_type}", "HANDLER_ERROR")

    def _normalize_message_format(self, message_data: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize message format to use 't' and 'p' consistently"""
        if 'type' in message_data and 't' not in message_data:
            message_data['t'] = message_data.pop('type')

        if 'payload' in message_data and 'p' not in message_data:
            message_data['p'] = message_data.pop('payload')

        if 'p' not in message_data or message_data['p'] is None:
            message_data['p'] = {}

        return message_data

    # =========================================================================
    # Handlers
    # =========================================================================

    async def handle_register(self, payload: Any) -> None:
        user_id = self._extract_id(payload, 'userId')
        if user_id is None:
            await self._send_error("register requires a user id", "INVALID_PAYLOAD")
            return
        if not self._identity_allowed(user_id):
            await self._send_error("Cannot register as another user", "FORBIDDEN")
            return
        await self.gateway.register(self.conn_id, user_id)

    async def handle_join_project(self, payload: Any) -> None:
        project_id = self._extract_id(payload, 'projectId')
        if project_id is None:
            await self._send_error("joinProject requires a project id", "INVALID_PAYLOAD")
            return
        await self.gateway.join_project(self.conn_id, project_id)

    async def handle_leave_project(self, payload: Any) -> None:
        project_id = self._extract_id(payload, 'projectId')
        if project_id is None:
            await self._send_error("leaveProject requires a project id", "INVALID_PAYLOAD")
            return
        await self.gateway.leave_project(self.conn_id, project_id)

    async def handle_send_message(self, payload: Any) -> None:
        data = SendMessagePayload.model_validate(payload)
        if not self._identity_allowed(data.sender_id):
            await self._send_error("senderId does not match the authenticated user", "FORBIDDEN")
            return
        await self.gateway.send_message(self.conn_id, data.project_id, data.sender_id, data.content)

    async def handle_toggle_reaction(self, payload: Any) -> None:
        data = ToggleReactionPayload.model_validate(payload)
        if not self._identity_allowed(data.user_id):
            await self._send_error("userId does not match the authenticated user", "FORBIDDEN")
            return
        await self.gateway.toggle_reaction(
            self.conn_id, data.message_id, data.user_id, data.emoji, data.project_id
        )

    async def handle_ping(self, payload: Any) -> None:
        await self.gateway.rooms.emit_to_connection(
            self.conn_id, OutboundEvent.PONG.value, payload if isinstance(payload, dict) else {}
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _extract_id(payload: Any, key: str) -> Optional[int]:
        """Accept a bare id (7, "7") or an object ({"projectId": 7})."""
        value = payload.get(key) if isinstance(payload, dict) else payload
        if isinstance(value, bool):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    def _identity_allowed(self, claimed_user_id: int) -> bool:
        authenticated = self.connection.authenticated_user_id
        return authenticated is None or authenticated == claimed_user_id

    async def _send_error(self, message: str, code: str) -> None:
        await self.gateway.rooms.emit_to_connection(
            self.conn_id, OutboundEvent.ERROR.value, {'message': message, 'code': code}
        )
