# =============================================================================
# File: collabhub/realtime/gateway.py
# Description: Realtime Gateway - orchestrates membership gate, persistence,
#              broadcast, member fan-out and mentions per inbound event
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Optional

from collabhub.chat.commands import SendMessageCommand, ToggleReactionCommand
from collabhub.chat.exceptions import InvalidContentError, InvalidReactionError, MessageNotFoundError
from collabhub.chat.mentions import extract_mentions, resolve_mentions
from collabhub.chat.read_models import ChatMessageView, ReactionsUpdate
from collabhub.infra.cqrs.command_bus import CommandBus
from collabhub.infra.metrics.realtime_metrics import chat_errors_total, mentions_resolved_total
from collabhub.membership.exceptions import CapabilityDeniedError, NotAMemberError
from collabhub.membership.ports.user_directory_port import ProjectDirectoryPort, UserDirectoryPort
from collabhub.notification.fanout import NotificationFanout
from collabhub.realtime.connection import RealtimeConnection
from collabhub.realtime.rooms import RoomRouter
from collabhub.realtime.types import DisconnectKind, OutboundEvent

log = logging.getLogger("collabhub.realtime.gateway")

NOT_A_MEMBER_MESSAGE = "Not a project member"
CHAT_DENIED_MESSAGE = "Chat permission denied"
MESSAGE_NOT_FOUND_MESSAGE = "Message not found"


class RealtimeGateway:
    """
    Per-event orchestration.

    Authorization and validation failures produce exactly one chatError to
    the invoking connection. Anything failing after the message is accepted
    is logged and ends the event with no client-visible error; what was
    already broadcast stays broadcast.
    """

    def __init__(
            self,
            command_bus: CommandBus,
            rooms: RoomRouter,
            fanout: NotificationFanout,
            users: UserDirectoryPort,
            projects: ProjectDirectoryPort,
    ):
        self.command_bus = command_bus
        self.rooms = rooms
        self.fanout = fanout
        self.users = users
        self.projects = projects

    # =========================================================================
    # Presence
    # =========================================================================

    async def connect(self, connection: RealtimeConnection) -> None:
        await self.rooms.connect(connection)

    async def register(self, conn_id: str, user_id: int) -> Optional[str]:
        return await self.rooms.register(conn_id, user_id)

    async def join_project(self, conn_id: str, project_id: int) -> Optional[str]:
        return await self.rooms.join_project(conn_id, project_id)

    async def leave_project(self, conn_id: str, project_id: int) -> None:
        await self.rooms.leave_project(conn_id, project_id)

    async def disconnect(self, conn_id: str, reason: Any) -> DisconnectKind:
        return await self.rooms.disconnect(conn_id, reason)

    # =========================================================================
    # Chat
    # =========================================================================

    async def send_message(
            self,
            conn_id: str,
            project_id: int,
            sender_id: int,
            content: str,
    ) -> Optional[ChatMessageView]:
        """
        Gate -> append -> receiveMessage -> member notifications -> mentions.

        Returns the broadcast message, or None when the event was denied or
        failed before the broadcast.
        """
        try:
            message = await self.command_bus.send(
                SendMessageCommand(project_id=project_id, sender_id=sender_id, content=content)
            )
        except NotAMemberError:
            await self._chat_error(conn_id, NOT_A_MEMBER_MESSAGE, "not_member")
            return None
        except CapabilityDeniedError:
            await self._chat_error(conn_id, CHAT_DENIED_MESSAGE, "chat_denied")
            return None
        except InvalidContentError as e:
            await self._chat_error(conn_id, str(e), "invalid_content")
            return None
        except Exception as e:
            log.error(f"sendMessage failed for user {sender_id} in project {project_id}: {e}", exc_info=True)
            return None

        try:
            await self.rooms.emit_to_project(
                project_id, OutboundEvent.RECEIVE_MESSAGE.value, message.model_dump(mode="json")
            )
            await self.fanout.notify_project_members(project_id, sender_id, content)
            await self._notify_mentions(message)
        except Exception as e:
            log.error(f"Post-persist processing of message {message.id} failed: {e}", exc_info=True)

        return message

    async def _notify_mentions(self, message: ChatMessageView) -> int:
        tokens = extract_mentions(message.content)
        if not tokens:
            return 0

        roster = await self.users.find_roster(message.project_id, exclude_user_id=message.sender_id)
        resolved = resolve_mentions(tokens, roster)

        matched = [m for m in resolved if m.resolved]
        mentions_resolved_total.labels(resolved="yes").inc(len(matched))
        mentions_resolved_total.labels(resolved="no").inc(len(resolved) - len(matched))
        if not matched:
            return 0

        sender = await self.users.find_by_id(message.sender_id)
        sender_name = sender.name if sender else None
        project_title = await self.projects.get_title(message.project_id) or f"Project {message.project_id}"
        preview = self.fanout.mention_preview(message.content)

        notified = 0
        for mention in matched:
            notification = await self.fanout.notify_mention(
                mention.user,
                sender_name,
                project_title,
                preview,
                message.project_id,
            )
            if notification is not None:
                notified += 1

        log.debug(f"Message {message.id}: {notified}/{len(tokens)} mention tokens notified")
        return notified

    # =========================================================================
    # Reactions
    # =========================================================================

    async def toggle_reaction(
            self,
            conn_id: str,
            message_id: int,
            user_id: int,
            emoji: str,
            project_id: int,
    ) -> Optional[ReactionsUpdate]:
        """Gate -> toggle -> reactionsUpdated with the fresh aggregate."""
        try:
            update = await self.command_bus.send(
                ToggleReactionCommand(message_id=message_id, user_id=user_id, emoji=emoji, project_id=project_id)
            )
        except NotAMemberError:
            await self._chat_error(conn_id, NOT_A_MEMBER_MESSAGE, "not_member")
            return None
        except CapabilityDeniedError:
            await self._chat_error(conn_id, CHAT_DENIED_MESSAGE, "chat_denied")
            return None
        except MessageNotFoundError:
            await self._chat_error(conn_id, MESSAGE_NOT_FOUND_MESSAGE, "message_not_found")
            return None
        except InvalidReactionError as e:
            await self._chat_error(conn_id, str(e), "invalid_reaction")
            return None
        except Exception as e:
            log.error(f"toggleReaction failed for user {user_id} on message {message_id}: {e}", exc_info=True)
            return None

        try:
            await self.rooms.emit_to_project(
                project_id,
                OutboundEvent.REACTIONS_UPDATED.value,
                {
                    "messageId": update.message_id,
                    "reactions": [r.model_dump(mode="json") for r in update.reactions],
                },
            )
        except Exception as e:
            log.error(f"reactionsUpdated broadcast for message {message_id} failed: {e}", exc_info=True)

        return update

    # =========================================================================
    # Errors
    # =========================================================================

    async def _chat_error(self, conn_id: str, message: str, reason: str) -> None:
        chat_errors_total.labels(reason=reason).inc()
        await self.rooms.emit_to_connection(conn_id, OutboundEvent.CHAT_ERROR.value, {"message": message})
