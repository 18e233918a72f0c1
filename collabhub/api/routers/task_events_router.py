# =============================================================================
# File: collabhub/api/routers/task_events_router.py
# Description: Entry point for task lifecycle events from the task service
# =============================================================================

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from collabhub.api.dependencies.state_deps import get_membership_authority, get_task_events
from collabhub.api.models.realtime_api_models import TaskEventRequest, TaskEventResponse
from collabhub.membership.authority import MembershipAuthority
from collabhub.membership.enums import Capability
from collabhub.membership.exceptions import CapabilityDeniedError, NotAMemberError
from collabhub.realtime.task_events import TaskEventPublisher, TaskEventType
from collabhub.security.jwt_auth import get_current_user

log = logging.getLogger("collabhub.api.task_events")

router = APIRouter(prefix="/realtime", tags=["Realtime"])


@router.post("/projects/{project_id}/task-events", response_model=TaskEventResponse)
async def publish_task_event(
    project_id: int,
    body: TaskEventRequest,
    current_user: Annotated[int, Depends(get_current_user)],
    authority: MembershipAuthority = Depends(get_membership_authority),
    publisher: TaskEventPublisher = Depends(get_task_events),
) -> TaskEventResponse:
    """Broadcast taskCreated/taskUpdated/taskDeleted to the project room."""
    try:
        await authority.require(project_id, current_user, Capability.MANAGE_TASKS)
    except (NotAMemberError, CapabilityDeniedError) as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))

    if body.event is TaskEventType.DELETED:
        task_id = body.task.get("id")
        if task_id is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Deleted task requires an id")
        delivered = await publisher.task_deleted(project_id, task_id)
    else:
        delivered = await publisher.publish(project_id, body.event, body.task)

    return TaskEventResponse(event=body.event.value, project_id=project_id, delivered=delivered)
