# =============================================================================
# File: collabhub/realtime/__init__.py
# Description: Realtime chat transport - Bounded Context
# =============================================================================

"""
Realtime - Bounded Context

Modules:
- types: inbound/outbound event names, room naming, envelope helper
- connection: one live transport connection
- rooms: Presence/Room Router (the broadcast capability)
- handlers: per-connection inbound event dispatch
- gateway: orchestration of chat, reactions and notification fan-out
- task_events: task lifecycle events for the external task service
"""

from collabhub.realtime.types import DisconnectKind, InboundEvent, OutboundEvent
from collabhub.realtime.rooms import RoomRouter

__all__ = [
    "DisconnectKind",
    "InboundEvent",
    "OutboundEvent",
    "RoomRouter",
]
