# =============================================================================
# File: collabhub/realtime/types.py
# Description: Realtime event names, room naming and the wire envelope
# =============================================================================

from enum import Enum
from typing import Any, Dict


class InboundEvent(str, Enum):
    """Events a client may send"""
    REGISTER = "register"
    REGISTER_USER = "registerUser"
    JOIN_PROJECT = "joinProject"
    LEAVE_PROJECT = "leaveProject"
    SEND_MESSAGE = "sendMessage"
    TOGGLE_REACTION = "toggleReaction"
    PING = "ping"


class OutboundEvent(str, Enum):
    """Events the server emits"""
    RECEIVE_MESSAGE = "receiveMessage"
    CHAT_ERROR = "chatError"
    REACTIONS_UPDATED = "reactionsUpdated"
    RECEIVE_NOTIFICATION = "receiveNotification"
    TASK_CREATED = "taskCreated"
    TASK_UPDATED = "taskUpdated"
    TASK_DELETED = "taskDeleted"
    PONG = "PONG"
    ERROR = "error"


class DisconnectKind(str, Enum):
    """Observability-only classification of a disconnect reason"""
    EXPECTED = "expected"
    UNEXPECTED = "unexpected"


USER_ROOM_PREFIX = "user:"
PROJECT_ROOM_PREFIX = "project:"


def user_room(user_id: int) -> str:
    return f"{USER_ROOM_PREFIX}{user_id}"


def project_room(project_id: int) -> str:
    return f"{PROJECT_ROOM_PREFIX}{project_id}"


def envelope(event: str, payload: Any) -> Dict[str, Any]:
    """Wire frame: {'t': event, 'p': payload}"""
    return {'t': event, 'p': payload}
