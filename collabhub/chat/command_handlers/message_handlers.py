# =============================================================================
# File: collabhub/chat/command_handlers/message_handlers.py
# Description: Command handler for sending chat messages
# =============================================================================

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from collabhub.chat.commands import SendMessageCommand
from collabhub.chat.read_models import ChatMessageView
from collabhub.chat.value_objects import ensure_message_content
from collabhub.infra.cqrs.command_bus import ICommandHandler
from collabhub.infra.cqrs.decorators import command_handler
from collabhub.infra.metrics.realtime_metrics import messages_persisted_total
from collabhub.membership.enums import Capability

if TYPE_CHECKING:
    from collabhub.infra.cqrs.handler_dependencies import HandlerDependencies

log = logging.getLogger("collabhub.chat.handlers.message")

UNKNOWN_SENDER_NAME = "Unknown"


@command_handler(SendMessageCommand)
class SendMessageHandler(ICommandHandler):
    """
    Gate and persist a chat message.

    1. Sender must be a member holding the chat capability (checked once)
    2. Content must not be blank
    3. Append to the message store
    4. Resolve the sender display name for the broadcast payload

    Broadcast and fan-out are the gateway's job; this handler only returns
    the persisted message.
    """

    def __init__(self, deps: 'HandlerDependencies'):
        self.membership = deps.membership
        self.messages = deps.message_store
        self.users = deps.users

    async def handle(self, command: SendMessageCommand) -> ChatMessageView:
        await self.membership.require(command.project_id, command.sender_id, Capability.CHAT)
        ensure_message_content(command.content)

        message = await self.messages.append(command.project_id, command.sender_id, command.content)
        messages_persisted_total.inc()

        log.info(f"Message {message.id} persisted in project {message.project_id} by user {message.sender_id}")

        sender = await self.users.find_by_id(command.sender_id)
        sender_name = sender.name if sender and sender.name else UNKNOWN_SENDER_NAME

        return ChatMessageView(**message.model_dump(), sender_name=sender_name)
