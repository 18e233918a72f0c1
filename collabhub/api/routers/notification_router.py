# =============================================================================
# File: collabhub/api/routers/notification_router.py
# Description: Owner-side notification endpoints
# =============================================================================

from __future__ import annotations

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, status

from collabhub.api.dependencies.state_deps import get_command_bus, get_notification_store
from collabhub.infra.cqrs.command_bus import CommandBus
from collabhub.notification.commands import MarkNotificationReadCommand
from collabhub.notification.exceptions import NotificationNotFoundError
from collabhub.notification.ports.notification_store_port import NotificationStorePort
from collabhub.notification.read_models import NotificationReadModel
from collabhub.security.jwt_auth import get_current_user

log = logging.getLogger("collabhub.api.notifications")

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=List[NotificationReadModel])
async def get_my_notifications(
    current_user: Annotated[int, Depends(get_current_user)],
    notifications: NotificationStorePort = Depends(get_notification_store),
) -> List[NotificationReadModel]:
    """Caller's notifications, newest first."""
    return await notifications.list_for_user(current_user)


@router.put("/{notification_id}", response_model=NotificationReadModel)
async def mark_notification_read(
    notification_id: int,
    current_user: Annotated[int, Depends(get_current_user)],
    command_bus: CommandBus = Depends(get_command_bus),
) -> NotificationReadModel:
    try:
        return await command_bus.send(
            MarkNotificationReadCommand(notification_id=notification_id, user_id=current_user)
        )
    except NotificationNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
