# =============================================================================
# File: collabhub/notification/command_handlers/notification_handlers.py
# Description: Command handler for owner-side notification updates
# =============================================================================

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from collabhub.infra.cqrs.command_bus import ICommandHandler
from collabhub.infra.cqrs.decorators import command_handler
from collabhub.notification.commands import MarkNotificationReadCommand
from collabhub.notification.exceptions import NotificationNotFoundError
from collabhub.notification.read_models import NotificationReadModel

if TYPE_CHECKING:
    from collabhub.infra.cqrs.handler_dependencies import HandlerDependencies

log = logging.getLogger("collabhub.notification.handlers")


@command_handler(MarkNotificationReadCommand)
class MarkNotificationReadHandler(ICommandHandler):
    """Only the owning user can mark a notification read."""

    def __init__(self, deps: 'HandlerDependencies'):
        self.notifications = deps.notification_store

    async def handle(self, command: MarkNotificationReadCommand) -> NotificationReadModel:
        notification = await self.notifications.mark_read(command.notification_id, command.user_id)
        if notification is None:
            raise NotificationNotFoundError(command.notification_id)
        log.debug(f"Notification {command.notification_id} marked read by user {command.user_id}")
        return notification
