# =============================================================================
# File: collabhub/notification/fanout.py
# Description: Notification Fanout - one persisted notification per
#              recipient, then a best-effort live push (and mention email)
# =============================================================================

from __future__ import annotations

import logging
from typing import Optional

from collabhub.config.realtime_config import RealtimeConfig, get_realtime_config
from collabhub.infra.background.side_effects import SideEffectRunner
from collabhub.infra.metrics.realtime_metrics import (
    notifications_created_total,
    notifications_failed_total,
)
from collabhub.membership.ports.membership_port import MembershipPort
from collabhub.membership.ports.user_directory_port import UserDirectoryPort
from collabhub.membership.read_models import UserSummary
from collabhub.notification.email_templates import mention_subject, mention_template_data
from collabhub.notification.ports.email_sender_port import EmailSenderPort
from collabhub.notification.ports.live_channel_port import LiveChannelPort
from collabhub.notification.ports.notification_store_port import NotificationStorePort
from collabhub.notification.read_models import NotificationReadModel
from collabhub.realtime.types import OutboundEvent

log = logging.getLogger("collabhub.notification.fanout")

FALLBACK_SENDER_NAME = "A team member"
EMPTY_PREVIEW_TEXT = "(no message text)"


def build_preview(text: str, limit: int = 120, ellipsis: str = "...") -> str:
    """
    Trimmed body, cut to `limit` characters including the ellipsis marker.

    >>> build_preview("x" * 130)[-3:]
    '...'
    """
    trimmed = (text or "").strip()
    if len(trimmed) <= limit:
        return trimmed
    return trimmed[:limit - len(ellipsis)] + ellipsis


def member_notification_text(project_id: int, sender_name: str, preview: str) -> str:
    return f"[Project {project_id}] {sender_name}: {preview or EMPTY_PREVIEW_TEXT}"


def mention_notification_text(project_id: int, sender_name: str, preview: str) -> str:
    return f"[Project {project_id}] {sender_name} mentioned you: {preview}"


class NotificationFanout:
    """
    Creates notifications and pushes them to the recipients' user rooms.

    Every recipient is processed independently: a failure to persist or push
    for one recipient is logged and the loop moves on. Persistence always
    completes before the live push of that notification. Mention emails are
    handed to the SideEffectRunner and never awaited here.
    """

    def __init__(
            self,
            memberships: MembershipPort,
            users: UserDirectoryPort,
            notifications: NotificationStorePort,
            live: LiveChannelPort,
            emails: EmailSenderPort,
            side_effects: SideEffectRunner,
            config: Optional[RealtimeConfig] = None,
    ):
        self._memberships = memberships
        self._users = users
        self._notifications = notifications
        self._live = live
        self._emails = emails
        self._side_effects = side_effects
        self._config = config or get_realtime_config()

    # =========================================================================
    # Project members
    # =========================================================================

    async def notify_project_members(
            self,
            project_id: int,
            sender_id: int,
            message_text: str,
    ) -> int:
        """
        Notify every current member except the sender. Returns the number of
        notifications persisted.
        """
        member_ids = await self._memberships.list_member_ids(project_id)
        recipients = [uid for uid in member_ids if uid != sender_id]
        if not recipients:
            return 0

        sender = await self._users.find_by_id(sender_id)
        sender_name = sender.name if sender else None
        text = member_notification_text(
            project_id,
            sender_name or FALLBACK_SENDER_NAME,
            build_preview(
                message_text,
                self._config.notification_preview_length,
                self._config.notification_ellipsis,
            ),
        )

        created = 0
        for user_id in recipients:
            notification = await self._persist(user_id, text, kind="member")
            if notification is None:
                continue
            created += 1
            await self._push(notification)

        log.debug(f"Project {project_id}: {created}/{len(recipients)} member notifications created")
        return created

    # =========================================================================
    # Mentions
    # =========================================================================

    async def notify_mention(
            self,
            user: UserSummary,
            sender_name: Optional[str],
            project_title: str,
            message_preview: str,
            project_id: int,
    ) -> Optional[NotificationReadModel]:
        """
        Persist and push one mention notification, then submit the mention
        email. Returns the notification, or None when it could not be stored.
        """
        sender_name = sender_name or FALLBACK_SENDER_NAME
        text = mention_notification_text(project_id, sender_name, message_preview)
        notification = await self._persist(user.id, text, kind="mention")
        if notification is None:
            return None

        await self._push(notification)

        if user.email:
            self._side_effects.submit(
                "mention_email",
                self._emails.send(
                    user.email,
                    mention_subject(project_title, sender_name),
                    mention_template_data(user.name, sender_name, project_title, message_preview),
                ),
                user_id=user.id,
                project_id=project_id,
            )
        return notification

    def mention_preview(self, content: str) -> str:
        return (content or "")[:self._config.mention_preview_length]

    # =========================================================================
    # Per-recipient steps
    # =========================================================================

    async def _persist(self, user_id: int, text: str, kind: str) -> Optional[NotificationReadModel]:
        try:
            notification = await self._notifications.create(user_id, text)
        except Exception as e:
            notifications_failed_total.labels(kind=kind).inc()
            log.error(f"Failed to persist {kind} notification for user {user_id}: {e}", exc_info=True)
            return None
        notifications_created_total.labels(kind=kind).inc()
        return notification

    async def _push(self, notification: NotificationReadModel) -> None:
        try:
            await self._live.emit_to_user(
                notification.user_id,
                OutboundEvent.RECEIVE_NOTIFICATION.value,
                notification.model_dump(mode="json"),
            )
        except Exception as e:
            log.warning(f"Live push of notification {notification.id} to user {notification.user_id} failed: {e}")
