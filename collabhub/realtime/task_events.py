# =============================================================================
# File: collabhub/realtime/task_events.py
# Description: Task lifecycle events pushed to project rooms
# =============================================================================

"""
Task Event Publisher

Task CRUD lives in another service. When it changes a task it hands the
event here (in-process or through POST /realtime/projects/{id}/task-events),
and the event goes to the project room through the same RoomRouter contract
as chat broadcasts.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict

from collabhub.notification.ports.live_channel_port import LiveChannelPort
from collabhub.realtime.types import OutboundEvent

log = logging.getLogger("collabhub.realtime.task_events")


class TaskEventType(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


_EVENT_MAP = {
    TaskEventType.CREATED: OutboundEvent.TASK_CREATED,
    TaskEventType.UPDATED: OutboundEvent.TASK_UPDATED,
    TaskEventType.DELETED: OutboundEvent.TASK_DELETED,
}


class TaskEventPublisher:
    def __init__(self, live: LiveChannelPort):
        self._live = live

    async def publish(self, project_id: int, event_type: TaskEventType, task: Dict[str, Any]) -> int:
        event = _EVENT_MAP[event_type].value
        delivered = await self._live.emit_to_project(project_id, event, task)
        log.debug(f"{event} for project {project_id} delivered to {delivered} connections")
        return delivered

    async def task_created(self, project_id: int, task: Dict[str, Any]) -> int:
        return await self.publish(project_id, TaskEventType.CREATED, task)

    async def task_updated(self, project_id: int, task: Dict[str, Any]) -> int:
        return await self.publish(project_id, TaskEventType.UPDATED, task)

    async def task_deleted(self, project_id: int, task_id: Any) -> int:
        return await self.publish(project_id, TaskEventType.DELETED, {"id": task_id})
